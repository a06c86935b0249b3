"""
Shopify Admin GraphQL Transport

One stateless request function. Every response is decoded here, once,
into a GraphQLResponse tagged with one of:

    OK               transported, data present, no errors
    GRAPHQL_ERRORS   transported, body carries a top-level "errors" list
    USER_ERRORS      transported, mutation payload carries userErrors
    TRANSPORT_ERROR  connection failure, non-2xx status, or undecodable body

No retries. No timeout beyond the requests default.
"""

from typing import Any, Optional

import requests

from shopify_catalog.config import ShopifyConfig

# =============================================================================
# RESPONSE STATUSES
# =============================================================================

OK = "OK"
GRAPHQL_ERRORS = "GRAPHQL_ERRORS"
USER_ERRORS = "USER_ERRORS"
TRANSPORT_ERROR = "TRANSPORT_ERROR"

# Mutation payloads report validation failures under one of these keys
USER_ERROR_KEYS = ("userErrors", "mediaUserErrors")


class GraphQLResponse:
    """Decoded result of one GraphQL call."""

    def __init__(
        self,
        status: str,
        data: Optional[dict] = None,
        errors: Optional[list] = None,
        http_status: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.status = status
        self.data = data
        self.errors = errors or []
        self.http_status = http_status
        self.message = message

    @property
    def ok(self) -> bool:
        return self.status == OK

    def get(self, *path: str) -> Any:
        """Walk data by keys, returning None at the first missing step."""
        node = self.data
        for key in path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "http_status": self.http_status,
            "message": self.message,
            "errors": self.errors,
            "data": self.data,
        }

    def __repr__(self):
        return f"GraphQLResponse(status={self.status!r}, errors={len(self.errors)})"


# =============================================================================
# REQUESTS
# =============================================================================


def execute(config: ShopifyConfig, query: str, variables: Optional[dict] = None) -> GraphQLResponse:
    """POST a query or mutation and decode the response."""
    payload = {"query": query}
    if variables:
        payload["variables"] = variables

    try:
        response = requests.post(config.endpoint, headers=config.headers(), json=payload)
    except requests.RequestException as e:
        return GraphQLResponse(TRANSPORT_ERROR, message=str(e))

    if not 200 <= response.status_code < 300:
        return GraphQLResponse(
            TRANSPORT_ERROR,
            http_status=response.status_code,
            message=f"HTTP {response.status_code}: {response.text[:500]}",
        )

    try:
        body = response.json()
    except ValueError:
        return GraphQLResponse(
            TRANSPORT_ERROR,
            http_status=response.status_code,
            message=f"Invalid JSON response: {response.text[:200]}",
        )

    if not isinstance(body, dict):
        return GraphQLResponse(
            TRANSPORT_ERROR,
            http_status=response.status_code,
            message="Response body is not a JSON object",
        )

    data = body.get("data")
    errors = body.get("errors")
    if errors:
        # Shopify may return both partial data and errors; errors win
        if isinstance(errors, str):
            errors = [{"message": errors}]
        elif isinstance(errors, dict):
            errors = [errors]
        first = errors[0]
        return GraphQLResponse(
            GRAPHQL_ERRORS,
            data=data,
            errors=errors,
            http_status=response.status_code,
            message=first.get("message") if isinstance(first, dict) else str(first),
        )

    return GraphQLResponse(OK, data=data, http_status=response.status_code)


def execute_mutation(
    config: ShopifyConfig, mutation: str, variables: dict, root_field: str
) -> GraphQLResponse:
    """Execute a mutation and fold its in-band userErrors into the status."""
    result = execute(config, mutation, variables)
    if not result.ok:
        return result

    payload = result.get(root_field) or {}
    for key in USER_ERROR_KEYS:
        user_errors = payload.get(key) or []
        if user_errors:
            result.status = USER_ERRORS
            result.errors = user_errors
            result.message = f"{root_field}: {user_errors[0].get('message')}"
            break

    return result
