# =============================================================================
# SHOPIFY-CATALOG-TOOLS
# Shopify Admin GraphQL: catalog read, product create, media, publish
# =============================================================================
"""
Thin client and scripts for the Shopify GraphQL Admin API.

Modules:
- config: store settings and .env loading
- client: stateless GraphQL request function with tagged responses
- catalog: paginated product fetch (fetch_page, fetch_all)
- normalize: edge/node unwrapping into flat records
- media: staged uploads and external video media
- products: product create flow and publishing
"""

from shopify_catalog.catalog import FetchResult, fetch_all, fetch_page
from shopify_catalog.client import GraphQLResponse, execute
from shopify_catalog.config import ShopifyConfig

__version__ = "0.3.0"

__all__ = [
    "FetchResult",
    "GraphQLResponse",
    "ShopifyConfig",
    "execute",
    "fetch_all",
    "fetch_page",
]
