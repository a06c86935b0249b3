"""
Normalizers for edge/node shaped responses.

Every nested connection {edges: [{node: X}]} becomes [X]. Null, absent or
empty connections become []. Already-flat lists pass through unchanged, so
running a normalizer twice gives the same result.
"""

# Product connections capped by the query (see queries.py)
NESTED_CONNECTIONS = ("media", "variants", "metafields")
# Capped per variant; flagged on the product when any variant is cut
INVENTORY_LEVELS = "variants.inventoryLevels"

EMPTY_PAGE_INFO = {
    "hasNextPage": False,
    "hasPreviousPage": False,
    "startCursor": None,
    "endCursor": None,
}


def unwrap_edges(connection) -> list:
    """{edges: [{node: X}, ...]} -> [X, ...]."""
    if not connection:
        return []
    if isinstance(connection, list):
        return list(connection)
    if not isinstance(connection, dict):
        return []

    edges = connection.get("edges")
    if edges is None and connection.get("nodes") is not None:
        return list(connection["nodes"])

    nodes = []
    for edge in edges or []:
        if isinstance(edge, dict) and edge.get("node") is not None:
            nodes.append(edge["node"])
    return nodes


def has_next_page(connection) -> bool:
    if not isinstance(connection, dict):
        return False
    return bool((connection.get("pageInfo") or {}).get("hasNextPage"))


def normalize_page_info(page_info) -> dict:
    page_info = page_info or {}
    return {key: page_info.get(key, default) for key, default in EMPTY_PAGE_INFO.items()}


def normalize_variant(variant: dict) -> dict:
    """Flatten a variant's inventory levels and default its option list."""
    record = dict(variant)

    inventory_item = variant.get("inventoryItem")
    if inventory_item:
        record["inventoryItem"] = {
            **inventory_item,
            "inventoryLevels": unwrap_edges(inventory_item.get("inventoryLevels")),
        }
    else:
        record["inventoryItem"] = None

    record["selectedOptions"] = variant.get("selectedOptions") or []
    return record


def normalize_product(node: dict) -> dict:
    """Flatten one product node from the products query."""
    truncated = list(node.get("truncatedConnections") or [])
    for name in NESTED_CONNECTIONS:
        if has_next_page(node.get(name)) and name not in truncated:
            truncated.append(name)

    variants = unwrap_edges(node.get("variants"))
    if INVENTORY_LEVELS not in truncated and any(
        has_next_page((v.get("inventoryItem") or {}).get("inventoryLevels")) for v in variants
    ):
        truncated.append(INVENTORY_LEVELS)

    record = dict(node)
    record["media"] = unwrap_edges(node.get("media"))
    record["variants"] = [normalize_variant(v) for v in variants]
    record["options"] = node.get("options") or []
    record["metafields"] = unwrap_edges(node.get("metafields"))
    record["truncatedConnections"] = truncated
    return record


def normalize_products_page(products: dict) -> tuple[list, dict]:
    """Split a `products` connection into (records, pageInfo)."""
    products = products or {}
    records = [normalize_product(node) for node in unwrap_edges(products)]
    return records, normalize_page_info(products.get("pageInfo"))


def product_summary(product: dict) -> dict:
    """Display fields used by the product listing script."""
    return {
        "id": product.get("id"),
        "title": product.get("title") or "",
        "handle": product.get("handle"),
        "status": product.get("status") or "",
        "createdAt": product.get("createdAt"),
        "updatedAt": product.get("updatedAt"),
    }
