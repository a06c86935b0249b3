#!/usr/bin/env python3
"""
Shopify Product Listing

PURPOSE:
    Read every product in the store and print title + status, sorted by
    title. READ-ONLY: no mutations are performed.

USAGE:
    shopify-products <store-name> <access-token>
    shopify-products my-store shpat_xxx --json
    shopify-products my-store shpat_xxx --output snapshots/products.json

OUTPUTS:
    - Table on stdout (default), or the normalized records as JSON (--json)
    - Optional JSON snapshot file (--output)

Exit status is 1 if the catalog read stopped early on an error; whatever
was read before the error is still printed.
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from shopify_catalog import diagnostics
from shopify_catalog.catalog import fetch_all
from shopify_catalog.cli import base_parser, config_from_args, print_banner
from shopify_catalog.config import load_env
from shopify_catalog.normalize import product_summary
from shopify_catalog.queries import DEFAULT_PAGE_SIZE


def write_json(path: Path, data: dict):
    """Write JSON file with pretty formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)


def print_table(products: list):
    summaries = sorted((product_summary(p) for p in products), key=lambda s: s["title"].lower())

    print(f"\nFound {len(products)} products:\n")
    print("=" * 80)
    for summary in summaries:
        print(f"{summary['title']:<40} {summary['status']:<10}")
    print("=" * 80)
    print(f"Total products: {len(products)}")


def main(argv=None):
    parser = base_parser(
        "shopify-products",
        "List all products in a Shopify store",
        "shopify-products my-store shpat_xxxxxxxxxxxxxxxxxxxx",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Products per request (default: {DEFAULT_PAGE_SIZE})",
    )
    parser.add_argument("--json", action="store_true", help="Print normalized records as JSON instead of a table")
    parser.add_argument("--output", help="Also write a JSON snapshot to this path")
    args = parser.parse_args(argv)

    if args.page_size < 1:
        parser.error("--page-size must be at least 1")

    load_env()
    config = config_from_args(args)

    if not args.json:
        print_banner(f"SHOPIFY PRODUCTS: {config.store_domain}")
        print(f"Connecting to Shopify store: {config.store_name}")

    result = fetch_all(config, args.page_size)

    if not result.complete:
        diagnostics.error(f"Product read stopped after {result.pages} page(s): {result.stop_reason}")
        if result.message:
            print(f"  {result.message}", file=sys.stderr)
        if result.errors:
            diagnostics.print_graphql_errors(result.errors)

    if args.output:
        output_path = Path(args.output)
        write_json(output_path, {
            "extracted_at": datetime.now(timezone.utc).isoformat(),
            "store": config.store_domain,
            "api_version": config.api_version,
            "complete": result.complete,
            "stop_reason": result.stop_reason,
            "pages": result.pages,
            "count": len(result),
            "records": result.records,
        })
        if not args.json:
            print(f"Snapshot written to: {output_path}")

    if args.json:
        print(json.dumps(result.records, indent=2, default=str))
    elif len(result) == 0:
        print("No products found in the store.")
    else:
        print_table(result.records)

    if not result.complete:
        diagnostics.warning(f"Listing is partial: {len(result)} products read before the error")
        sys.exit(1)


if __name__ == "__main__":
    main()
