# =============================================================================
# SHOPIFY-CATALOG-TOOLS CLI
# =============================================================================
"""
Command-line entry points. Each script takes <store-name> <access-token>
first; anything after is script-specific.

- get_products: list (or dump) the full catalog
- create_product: upload an image, create a product, publish it
- add_video: attach an external video to a product
- check_auth: verify the token can read products
"""

import argparse

from shopify_catalog.config import ShopifyConfig


def base_parser(prog: str, description: str, example: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        epilog=f"Example: {example}",
    )
    parser.add_argument("store_name", metavar="store-name", help="Store name, without .myshopify.com")
    parser.add_argument("access_token", metavar="access-token", help="Admin API access token (shpat_...)")
    return parser


def config_from_args(args) -> ShopifyConfig:
    return ShopifyConfig(args.store_name, args.access_token)


def print_banner(title: str, width: int = 60):
    print("=" * width)
    print(title)
    print("=" * width)
    print()
