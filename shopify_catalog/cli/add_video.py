#!/usr/bin/env python3
"""
Attach an externally hosted video (Vimeo/YouTube) to an existing product.

Usage:
    shopify-add-video <store-name> <access-token> <product-id> <video-url>
    shopify-add-video my-store shpat_xxx gid://shopify/Product/1234567890 https://vimeo.com/1099782710
"""

import json
import sys

from shopify_catalog import diagnostics
from shopify_catalog.cli import base_parser, config_from_args
from shopify_catalog.config import load_env
from shopify_catalog.media import add_external_video


def main(argv=None):
    parser = base_parser(
        "shopify-add-video",
        "Attach an external video to a product",
        "shopify-add-video my-store shpat_xxxxxxxxxxxxxxxxxxxx "
        "gid://shopify/Product/1234567890 https://vimeo.com/1099782710",
    )
    parser.add_argument("product_id", metavar="product-id", help="Product GID")
    parser.add_argument("video_url", metavar="video-url", help="Vimeo or YouTube URL")
    parser.add_argument("--alt", default="Product demonstration video", help="Alt text for the video")
    args = parser.parse_args(argv)

    load_env()
    config = config_from_args(args)

    print(f"Connecting to Shopify store: {config.store_name}")
    print(f"Adding video to product: {args.product_id}")
    print(f"Video URL: {args.video_url}")

    response = add_external_video(config, args.product_id, args.video_url, args.alt)

    if not response.ok:
        diagnostics.report_failure(response, "Adding video failed")
        sys.exit(1)

    media = response.get("productCreateMedia", "media") or []
    if not media:
        diagnostics.error("Unexpected response format")
        print(json.dumps(response.to_dict(), indent=2, default=str), file=sys.stderr)
        sys.exit(1)

    video = media[0]
    print("Video added successfully!")
    print(f"   Media ID: {video.get('id')}")
    print(f"   Media Type: {video.get('mediaContentType')}")
    if video.get("embedUrl"):
        print(f"   Embed URL: {video['embedUrl']}")
        print(f"   Host: {video.get('host')}")


if __name__ == "__main__":
    main()
