"""
1) Load family data: a GEDCOM file, or the demo family when none is given.
2) Validate the family graph for cycles, impossible ages, and bad edges.
3) Derive the tree around one person and print it as an outline.
4) Plot the tree as a Graphviz chart.
"""

import argparse
import logging
import sys
from pathlib import Path

from config import CHART_FORMATS, load_settings
from plotting import plot_tree
from sample_data import populate
from service import FamilyTreeService
from store import FamilyStore
from tree import format_tree
from validation import validate_family


def parse_args(argv=None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Build and chart a family tree.")
    parser.add_argument("--gedcom", type=Path, default=settings.gedcom_path,
                        help="GEDCOM file to import (default: demo family)")
    parser.add_argument("--person", help="id of the person to centre the tree on")
    parser.add_argument("--output", type=Path, help="chart output path")
    parser.add_argument("--format", choices=CHART_FORMATS,
                        help="chart format (default: the output suffix, else FAMILY_TREE_CHART_FORMAT)")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--no-plot", action="store_true", help="skip writing the chart")
    args = parser.parse_args(argv)
    if args.output is None:
        args.output = settings.output_dir / f"family_tree.{args.format or settings.chart_format}"
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    store = FamilyStore()
    if args.gedcom:
        # GEDCOM support is an optional extra (ged4py)
        from parsing import load_gedcom

        print(f"Importing GEDCOM file: {args.gedcom}")
        people, relationships = load_gedcom(args.gedcom, store)
    else:
        print("Loading demo family...")
        populate(store)
        people, relationships = len(store.get_all()), len(store.get_relationships())
    print(f"  Found {people} persons and {relationships} relationships")

    service = FamilyTreeService(store)

    print("Validating family graph...")
    warnings = validate_family(store)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    everyone = service.list_people()
    if not everyone:
        print("No people to chart.")
        return 1

    person_id = args.person or everyone[0].id
    tree = service.build_tree(person_id)
    if tree is None:
        print(f"Person not found: {person_id}")
        return 1

    print(f"Family tree for {person_id}, rooted at {tree.person.full_name}:")
    print(format_tree(tree))

    person = service.get_person(person_id)
    print(f"Relationships of {person.full_name}:")
    for view in service.relationships_for(person_id):
        print(f"  {view.label}: {view.person.full_name}")

    if not args.no_plot:
        print(f"Plotting tree to: {args.output}")
        plot_tree(tree, args.output, args.format)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
