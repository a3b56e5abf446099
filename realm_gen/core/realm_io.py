"""
Realm export and import.

The exchanged JSON uses camelCase keys (``barrierEdges``, ``seatOfPower``),
omits unset optional cell fields, and always carries a ``myths`` array.
"""

import json
from pathlib import Path
from typing import Union

import structlog

from .realm_generator import Realm

logger = structlog.get_logger()


def realm_to_dict(realm: Realm) -> dict:
    """Dump a realm to its exchanged dict form."""
    data = realm.model_dump(by_alias=True, exclude_none=True, mode="json")
    data.setdefault("myths", [])
    return data


def realm_to_json(realm: Realm, indent: int = 2) -> str:
    return json.dumps(realm_to_dict(realm), indent=indent)


def realm_from_dict(data: dict) -> Realm:
    """Load a realm from its exchanged dict form."""
    return Realm.model_validate(data)


def realm_from_json(text: str) -> Realm:
    return realm_from_dict(json.loads(text))


def export_realm(realm: Realm, path: Union[str, Path]) -> Path:
    """Write a realm to a JSON file."""
    path = Path(path)
    path.write_text(realm_to_json(realm), encoding="utf-8")
    logger.info("Exported realm", path=str(path), cells=len(realm.hexes))
    return path


def import_realm(path: Union[str, Path]) -> Realm:
    """Read a realm from a JSON file."""
    path = Path(path)
    realm = realm_from_json(path.read_text(encoding="utf-8"))
    logger.info("Imported realm", path=str(path), cells=len(realm.hexes))
    return realm
