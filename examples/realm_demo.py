#!/usr/bin/env python3
"""
Simple demo script showing realm generation capabilities.
"""

from collections import Counter

from realm_gen.core import GenerationOptions, HexGridShape, SquareGridShape, generate_realm
from realm_gen.core.realm_io import export_realm
from realm_gen.config import list_templates


def print_terrain(counts, total):
    for terrain, count in counts.most_common():
        bar = "#" * int(count / total * 60)
        print(f"    {terrain:8s}: {bar} ({count})")


def main():
    """Demonstrate realm generation."""
    print("Realm Generation Demo")
    print("=" * 40)

    for template_name in list_templates():
        print(f"\n{template_name.upper()} Template:")
        print("-" * 30)

        options = GenerationOptions.from_template(template_name, seed=f"{template_name}_demo")
        realm = generate_realm(HexGridShape(radius=12), options)

        print(f"  Total cells: {len(realm.hexes)}")
        print(f"  Holdings: {len(realm.holdings())}")
        print(f"  Landmarks: {len(realm.landmarks())}")
        print(f"  Myths: {len(realm.myths)}")
        print(f"  Seat of power: ({realm.seat_of_power.q}, {realm.seat_of_power.r})")
        print("  Terrain distribution:")
        print_terrain(Counter(cell.terrain for cell in realm.hexes), len(realm.hexes))

    print("\n\nRectangular realm with barriers:")
    print("-" * 30)
    options = GenerationOptions(generate_barriers=True, num_myths=3, seed="square_demo")
    realm = generate_realm(SquareGridShape(width=16, height=10), options)
    print(f"  Total cells: {len(realm.hexes)}")
    print(f"  Barrier edges: {realm.barrier_count()}")

    path = export_realm(realm, "realm-data.json")
    print(f"\nExported to {path}")


if __name__ == "__main__":
    main()
