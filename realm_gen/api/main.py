"""FastAPI main application."""

from typing import Union

import logging
import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..config import settings
from ..config.terrain_defaults import get_template, list_templates
from ..core.generation_options import GenerationOptions
from ..core.hex_grid import HexGridShape, SquareGridShape
from ..core.myths import RealmGenerationError
from ..core.realm_generator import generate_realm
from ..core.realm_io import realm_to_dict
from .. import __version__

# Configure logging
logging.basicConfig(
    format="%(message)s", level="DEBUG" if settings.debug else settings.log_level.upper()
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Realm Generator API",
    description="Procedural hex realm generation",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class RealmGenerationRequest(BaseModel):
    """Request to generate a new realm."""

    shape: Union[HexGridShape, SquareGridShape] = Field(
        ..., discriminator="shape", description="Grid shape descriptor"
    )
    options: GenerationOptions = Field(
        default_factory=GenerationOptions, description="Generation options"
    )


class TemplateSummary(BaseModel):
    """A named terrain template."""

    id: str
    name: str
    options: dict


def _check_grid_limits(shape: Union[HexGridShape, SquareGridShape]) -> None:
    if isinstance(shape, HexGridShape):
        if shape.radius > settings.max_grid_radius:
            raise HTTPException(
                status_code=400,
                detail=f"Radius {shape.radius} exceeds maximum {settings.max_grid_radius}",
            )
        return
    if shape.width > settings.max_grid_width or shape.height > settings.max_grid_height:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Grid {shape.width}x{shape.height} exceeds maximum "
                f"{settings.max_grid_width}x{settings.max_grid_height}"
            ),
        )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Realm Generator API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/templates", response_model=list[TemplateSummary])
async def get_templates():
    """List terrain templates with their option overrides in camelCase."""
    summaries = []
    for template_id in list_templates():
        template = get_template(template_id)
        overrides = {to_camel(key): value for key, value in template["options"].items()}
        summaries.append(TemplateSummary(id=template_id, name=template["name"], options=overrides))
    return summaries


@app.get("/templates/{template_id}")
async def get_template_options(template_id: str):
    """Full generation options for a terrain template."""
    try:
        options = GenerationOptions.from_template(template_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return options.to_json_dict()


@app.get("/defaults")
async def get_defaults():
    """Default generation options."""
    return GenerationOptions().to_json_dict()


@app.post("/realms/generate")
def create_realm(request: RealmGenerationRequest):
    """
    Generate a realm synchronously.

    Returns the realm in its exchanged JSON form.
    """
    logger.info("Realm generation requested", shape=request.shape.shape)
    _check_grid_limits(request.shape)

    try:
        realm = generate_realm(request.shape, request.options)
    except RealmGenerationError as e:
        logger.error(
            "Realm generation failed", placed=e.placed, requested=e.requested, error=str(e)
        )
        raise HTTPException(status_code=422, detail=str(e))

    return realm_to_dict(realm)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
