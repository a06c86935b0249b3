#!/usr/bin/env python3
"""
Shopify Product Create

PURPOSE:
    Create one product with a default variant, metafields and an image
    uploaded through a staged upload, then publish it to sales channels.

USAGE:
    shopify-create-product <store-name> <access-token> <image-path> --product-file product.json
    shopify-create-product my-store shpat_xxx image.jpg --title "Elbaite" --price 1000.00 --weight 20
    shopify-create-product my-store shpat_xxx image.jpg --product-file p.json --video-url https://vimeo.com/123

INPUTS:
    - Product JSON: {"title", "price", "weight", "description", "sku"?, "metafields": [...]}
      (flags override file values)
    - .env (optional): SHOPIFY_LOCATION_ID, SHOPIFY_PUBLICATION_IDS, SHOPIFY_PUBLISH_DATE

WRITES: creates a product in the store. A failed step is not rolled back.
"""

import json
import sys
from pathlib import Path

from shopify_catalog import client, diagnostics
from shopify_catalog.cli import base_parser, config_from_args, print_banner
from shopify_catalog.config import get_location_id, get_publications, load_env
from shopify_catalog.media import external_video_reference
from shopify_catalog.products import CreateProductFlow, publish_product


def load_product_fields(args) -> dict:
    """Merge --product-file with individual flags."""
    fields = {}
    if args.product_file:
        with open(args.product_file, "r", encoding="utf-8") as f:
            fields = json.load(f)
        if not isinstance(fields, dict):
            raise ValueError(f"{args.product_file} must hold a JSON object, got {type(fields).__name__}")

    overrides = {
        "title": args.title,
        "price": args.price,
        "weight": args.weight,
        "description": args.description,
        "sku": args.sku,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    fields.setdefault("metafields", [])
    return fields


def main(argv=None):
    parser = base_parser(
        "shopify-create-product",
        "Create a product with an uploaded image and publish it",
        "shopify-create-product my-store shpat_xxxxxxxxxxxxxxxxxxxx image.jpg --product-file product.json",
    )
    parser.add_argument("image_path", metavar="image-path", help="Local image file to upload")
    parser.add_argument("--product-file", help="JSON file with product fields and metafields")
    parser.add_argument("--title")
    parser.add_argument("--price", help="Variant price, e.g. 1000.00")
    parser.add_argument("--weight", type=float, help="Weight in grams")
    parser.add_argument("--description", help="Description HTML")
    parser.add_argument("--sku")
    parser.add_argument("--video-url", help="Externally hosted video to attach (Vimeo/YouTube)")
    parser.add_argument("--no-publish", action="store_true", help="Create only, skip publishing")
    args = parser.parse_args(argv)

    env_path = load_env()

    try:
        fields = load_product_fields(args)
    except (OSError, ValueError) as e:
        diagnostics.error(f"Cannot load product file: {e}")
        sys.exit(1)

    missing = [key for key in ("title", "price") if not fields.get(key)]
    if missing:
        parser.error(f"missing product field(s): {', '.join(missing)} (use --product-file or flags)")

    fields.setdefault("location_id", get_location_id())

    config = config_from_args(args)

    print_banner(f"SHOPIFY PRODUCT CREATE: {config.store_domain}")
    if env_path:
        print(f"Loaded settings from: {env_path}")
    print(f"Title: {fields['title']}")
    print(f"Image: {args.image_path}")
    print(f"Inventory location: {fields.get('location_id') or '(none)'}")
    print()

    extra_media = [external_video_reference(args.video_url)] if args.video_url else []

    flow = CreateProductFlow(config, Path(args.image_path))
    print("Uploading image and creating product...")
    results = flow.run(fields, extra_media)

    for step in results["transitions"]:
        print(f"  {step['from']} -> {step['to']}")

    if results["aborted"]:
        diagnostics.error(results["abort_reason"])
        if results["error_status"] == client.GRAPHQL_ERRORS:
            diagnostics.print_graphql_errors(results["errors"])
        elif results["errors"]:
            diagnostics.print_user_errors(results["errors"])
        sys.exit(1)

    product = results["product"]
    print()
    print(f"Product created successfully: {product.get('title')}")
    print(f"Product ID: {product.get('id')}")

    if args.no_publish:
        print("Skipping publish (--no-publish)")
    else:
        publications = get_publications()
        if not publications:
            diagnostics.warning("SHOPIFY_PUBLICATION_IDS not set; product was not published")
        else:
            print(f"Publishing to {len(publications)} publication(s)...")
            response = publish_product(config, product["id"], publications)
            if not response.ok:
                diagnostics.report_failure(response, "Product publication failed")
                sys.exit(1)
            print("Published")

    print()
    print("Product creation completed!")
    print(f"Product URL: {config.admin_url(product['id'])}")


if __name__ == "__main__":
    main()
