"""
Catalog Fetcher

Reads the full product catalog by walking the products connection cursor
until hasNextPage is false. Pages are fetched strictly one after another.

A page that fails (transport error, GraphQL error list) or comes back with
no data ends the walk without raising. The returned FetchResult keeps what
was read so far and says why it stopped; callers that need the full set
must check `complete`.
"""

from typing import Optional

from shopify_catalog import client
from shopify_catalog.config import ShopifyConfig
from shopify_catalog.normalize import normalize_products_page
from shopify_catalog.queries import DEFAULT_PAGE_SIZE, PRODUCTS_QUERY

# Stop reasons
COMPLETE = "COMPLETE"
NO_DATA = "NO_DATA"


class FetchResult:
    """Records read by fetch_all, plus how the walk ended."""

    def __init__(self, records: list, stop_reason: str, pages: int, errors: Optional[list] = None, message: str = None):
        self.records = records
        self.stop_reason = stop_reason
        self.pages = pages
        self.errors = errors or []
        self.message = message

    @property
    def complete(self) -> bool:
        return self.stop_reason == COMPLETE

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]

    def __repr__(self):
        return f"FetchResult(records={len(self.records)}, stop_reason={self.stop_reason!r}, pages={self.pages})"


def fetch_page(config: ShopifyConfig, page_size: int = DEFAULT_PAGE_SIZE, after: Optional[str] = None) -> client.GraphQLResponse:
    """Fetch one page of products. `after` is omitted on the first page."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    variables = {"first": page_size}
    if after:
        variables["after"] = after

    return client.execute(config, PRODUCTS_QUERY, variables)


def fetch_all(config: ShopifyConfig, page_size: int = DEFAULT_PAGE_SIZE) -> FetchResult:
    """Fetch every product in server order."""
    all_records = []
    pages = 0
    cursor = None

    while True:
        response = fetch_page(config, page_size, cursor)
        pages += 1

        if not response.ok:
            return FetchResult(all_records, response.status, pages, response.errors, response.message)

        products = response.get("products")
        if products is None:
            return FetchResult(all_records, NO_DATA, pages, message="Response contained no products data")

        records, page_info = normalize_products_page(products)
        all_records.extend(records)

        if not page_info["hasNextPage"]:
            break
        cursor = page_info["endCursor"]
        if not cursor:
            # Re-requesting without a cursor would restart at page one
            return FetchResult(all_records, NO_DATA, pages, message="hasNextPage set without an endCursor")

    return FetchResult(all_records, COMPLETE, pages)
