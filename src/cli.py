"""
Command line interface for the dealer listing importer.

Commands:
    analyze FILE     Show the column analysis and suggested mapping
    import FILE      Import a sheet into the listing store
    export OUTPUT    Write stored listings to XLSX or CSV
    stats            Show listing store statistics
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

import config
from analyzer import analyze_columns, generate_initial_mapping
from grouping import get_listings_stats
from normalizer import NormalizationError, import_file
from schema import get_field_label, validate_mapping
from sources import export_listings, read_table
from storage import ListingStore


class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    YELLOW = '\033[93m'
    CYAN = '\033[96m'
    BOLD = '\033[1m'
    RESET = '\033[0m'
    DIM = '\033[2m'


def colorize(text: str, color: str) -> str:
    """Apply color to text if the terminal supports it."""
    return f"{color}{text}{Colors.RESET}" if sys.stdout.isatty() else text


def _error(message: str) -> int:
    print(colorize(f"Error: {message}", Colors.RED), file=sys.stderr)
    return 1


def cmd_analyze(args: argparse.Namespace) -> int:
    table = read_table(args.file, sheet_name=args.sheet)
    analysis = analyze_columns(table.columns, table.rows, sample_size=config.SAMPLE_SIZE)
    mapping = generate_initial_mapping(analysis)
    validation = validate_mapping(mapping, analysis)

    print(colorize(f"{args.file}: {len(table.columns)} columns, {table.row_count} rows", Colors.BOLD))
    for column in table.columns:
        if column in analysis.skip_columns:
            status = colorize("skip", Colors.DIM)
        elif column in analysis.feature_columns:
            status = colorize("feature", Colors.DIM)
        elif column in mapping:
            status = colorize(get_field_label(mapping[column]), Colors.GREEN)
        else:
            status = colorize("unmapped", Colors.YELLOW)
        samples = ", ".join(str(s) for s in analysis.sample_data.get(column, [])[:3])
        print(f"  {column!s:<30} {status}  {colorize(samples, Colors.DIM)}")

    for rec in analysis.recommendations:
        print(colorize(f"  * {rec['message']}", Colors.CYAN))

    if validation.is_valid:
        print(colorize("Mapping is valid", Colors.GREEN))
    else:
        missing = ", ".join(get_field_label(f) for f in validation.missing_required)
        print(colorize(f"Missing required fields: {missing}", Colors.RED))
    for warning in validation.warnings:
        print(colorize(f"Warning: {warning}", Colors.YELLOW))

    if args.json:
        print(json.dumps(mapping, ensure_ascii=False, indent=2))
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    overrides = None
    if args.mapping:
        try:
            with open(args.mapping, "r", encoding="utf-8") as f:
                overrides = json.load(f)
        except (OSError, ValueError) as e:
            return _error(f"Cannot load mapping {args.mapping}: {e}")

    store = ListingStore(args.store)
    result = import_file(
        args.file,
        mapping=overrides,
        default_incoterm=args.default_incoterm,
        sheet_name=args.sheet,
        store=store,
    )
    stats = get_listings_stats(result.listings)
    print(colorize(
        f"Imported {stats['total_vehicles']} vehicles into {stats['total_listings']} listings",
        Colors.GREEN,
    ))
    for listing in result.listings:
        title = " ".join(str(listing.get(k) or "") for k in ("year", "make", "model", "variant")).strip()
        print(f"  {title} ({listing.get('color') or '-'}) x{listing['count']}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    listings = ListingStore(args.store).get_listings()
    if not listings:
        return _error(f"No listings in {args.store}")
    path = export_listings(listings, args.output)
    print(colorize(f"Exported {len(listings)} listings to {path}", Colors.GREEN))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    store = ListingStore(args.store)
    stats = get_listings_stats(store.get_listings())
    stats["storage"] = store.get_storage_info()
    last_import = store.get_last_import()
    if last_import:
        stats["last_import"] = last_import.get("file_name")
    print(json.dumps(stats, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dealer-listings",
        description="Import dealer stock sheets into grouped vehicle listings",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze the columns of a sheet")
    analyze.add_argument("file")
    analyze.add_argument("--sheet", help="XLSX sheet name")
    analyze.add_argument("--json", action="store_true", help="Print the suggested mapping as JSON")
    analyze.set_defaults(func=cmd_analyze)

    import_ = subparsers.add_parser("import", help="Import a sheet into the listing store")
    import_.add_argument("file")
    import_.add_argument("--mapping", help="JSON file of column -> field overrides")
    import_.add_argument("--default-incoterm", default=None, help="Incoterm for rows without one")
    import_.add_argument("--store", default=config.LISTINGS_STORE_PATH)
    import_.add_argument("--sheet", help="XLSX sheet name")
    import_.set_defaults(func=cmd_import)

    export = subparsers.add_parser("export", help="Export stored listings")
    export.add_argument("output", help="Destination .xlsx or .csv file")
    export.add_argument("--store", default=config.LISTINGS_STORE_PATH)
    export.set_defaults(func=cmd_export)

    stats = subparsers.add_parser("stats", help="Show listing store statistics")
    stats.add_argument("--store", default=config.LISTINGS_STORE_PATH)
    stats.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (FileNotFoundError, ValueError, NormalizationError) as e:
        return _error(str(e))


if __name__ == "__main__":
    sys.exit(main())
