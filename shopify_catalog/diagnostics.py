"""
Console diagnostics for failed GraphQL calls.

Everything here prints to stderr so a script's stdout can stay clean for
JSON output.
"""

import json
import sys

from shopify_catalog import client


def error(message: str):
    print(f"ERROR: {message}", file=sys.stderr)


def warning(message: str):
    print(f"WARNING: {message}", file=sys.stderr)


def print_graphql_errors(errors: list, header: str = "GraphQL Errors:"):
    """Message, locations, path and extensions of each top-level error."""
    print(header, file=sys.stderr)
    for index, err in enumerate(errors, start=1):
        if not isinstance(err, dict):
            err = {"message": str(err)}
        print(f"  Error {index}:", file=sys.stderr)
        print(f"    Message: {err.get('message')}", file=sys.stderr)
        for key in ("locations", "path", "extensions"):
            if err.get(key):
                print(f"    {key.capitalize()}: {json.dumps(err[key])}", file=sys.stderr)


def print_user_errors(errors: list, header: str = "User errors:"):
    print(header, file=sys.stderr)
    for err in errors:
        print(f"  Field: {err.get('field')}, Message: {err.get('message')}", file=sys.stderr)


def report_failure(response: client.GraphQLResponse, context: str):
    """Print whatever a non-OK response carries."""
    if response.status == client.TRANSPORT_ERROR:
        error(f"{context}: {response.message}")
        if response.http_status:
            print(f"  Network Status Code: {response.http_status}", file=sys.stderr)
    elif response.status == client.GRAPHQL_ERRORS:
        error(f"{context}: GraphQL errors returned")
        print_graphql_errors(response.errors)
    elif response.status == client.USER_ERRORS:
        error(f"{context}: validation failed")
        print_user_errors(response.errors)
    else:
        error(f"{context}: unexpected status {response.status}")
