"""
Store configuration and credential loading.

The access token and store name always come from the command line; the
optional .env only carries API version and store-specific ids (inventory
location, publications) used by the create flow.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# CONFIGURATION
# =============================================================================

PACKAGE_DIR = Path(__file__).parent
PROJECT_ROOT = PACKAGE_DIR.parent

DEFAULT_API_VERSION = "2025-07"


def load_env():
    """Load environment variables from .env file. Returns the path loaded, or None."""
    env_paths = [
        Path.cwd() / ".env",
        PROJECT_ROOT / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


class ShopifyConfig:
    """Connection settings for one store. Passed into every request."""

    def __init__(self, store_name: str, access_token: str, api_version: str = None):
        # Accept "my-store" or "my-store.myshopify.com"
        self.store_name = store_name.strip().removesuffix(".myshopify.com")
        self.access_token = access_token
        self.api_version = api_version or os.getenv("SHOPIFY_API_VERSION", DEFAULT_API_VERSION)

    @property
    def store_domain(self) -> str:
        return f"{self.store_name}.myshopify.com"

    @property
    def endpoint(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}/graphql.json"

    def headers(self) -> dict:
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    def admin_url(self, gid: str) -> str:
        """Admin page for a product GID like 'gid://shopify/Product/123'."""
        return f"https://{self.store_domain}/admin/products/{gid.split('/')[-1]}"

    def __repr__(self):
        return f"ShopifyConfig(store_name={self.store_name!r}, api_version={self.api_version!r})"


def get_location_id():
    """Inventory location used for initial stock on created products."""
    return os.getenv("SHOPIFY_LOCATION_ID") or None


def get_publications() -> list:
    """Build publication inputs from SHOPIFY_PUBLICATION_IDS (comma-separated GIDs)."""
    raw = os.getenv("SHOPIFY_PUBLICATION_IDS", "")
    publish_date = os.getenv("SHOPIFY_PUBLISH_DATE")

    publications = []
    for publication_id in raw.split(","):
        publication_id = publication_id.strip()
        if not publication_id:
            continue
        publication = {"publicationId": publication_id}
        if publish_date:
            publication["publishDate"] = publish_date
        publications.append(publication)
    return publications
