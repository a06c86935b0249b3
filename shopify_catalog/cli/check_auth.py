#!/usr/bin/env python3
"""
Check that a store name and access token can read the catalog.

Usage:
    shopify-check-auth <store-name> <access-token>
"""

import sys

from shopify_catalog import diagnostics
from shopify_catalog.catalog import fetch_all
from shopify_catalog.cli import base_parser, config_from_args
from shopify_catalog.config import load_env

TROUBLESHOOTING_TIPS = [
    "Make sure your access token is valid and has the right permissions",
    "Ensure the store name is correct (without .myshopify.com)",
    "Check that your access token has write_products scope for creating products",
]


def main(argv=None):
    parser = base_parser(
        "shopify-check-auth",
        "Test the connection to a Shopify store",
        "shopify-check-auth my-store shpat_xxxxxxxxxxxxxxxxxxxx",
    )
    args = parser.parse_args(argv)

    load_env()
    config = config_from_args(args)

    print(f"Testing connection to Shopify store: {config.store_name}")
    print("Testing read permissions...")

    result = fetch_all(config)

    if not result.complete:
        diagnostics.error(f"Authentication/Connection Error: {result.message or result.stop_reason}")
        if result.errors:
            diagnostics.print_graphql_errors(result.errors)
        print()
        print("Troubleshooting tips:")
        for i, tip in enumerate(TROUBLESHOOTING_TIPS, start=1):
            print(f"{i}. {tip}")
        sys.exit(1)

    print(f"Successfully connected! Found {len(result)} products")
    if len(result) > 0:
        print(f"Sample product: {result[0].get('title')}")


if __name__ == "__main__":
    main()
