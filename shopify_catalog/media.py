"""
Staged Uploads and Product Media

Files reach Shopify in two steps: stagedUploadsCreate returns a signed
target, then the bytes are sent straight to that target. The target's
resourceUrl (not its upload url) is what later mutations reference.

Externally hosted videos skip the upload entirely and are attached with
productCreateMedia by URL.
"""

from pathlib import Path
from typing import Optional

import requests

from shopify_catalog import client
from shopify_catalog.config import ShopifyConfig
from shopify_catalog.queries import PRODUCT_CREATE_MEDIA, STAGED_UPLOADS_CREATE


class UploadError(Exception):
    """The staged file transfer failed."""


class StagedTarget:
    """One signed upload destination from stagedUploadsCreate."""

    def __init__(self, url: str, resource_url: str, parameters: list, http_method: str = "PUT"):
        self.url = url
        self.resource_url = resource_url
        # Order preserved; these are replayed exactly as received
        self.parameters = [(p.get("name"), p.get("value")) for p in parameters or []]
        self.http_method = http_method.upper()

    @classmethod
    def from_response(cls, target: dict, http_method: str = "PUT") -> "StagedTarget":
        return cls(target.get("url"), target.get("resourceUrl"), target.get("parameters"), http_method)

    def parameter(self, name: str) -> Optional[str]:
        for key, value in self.parameters:
            if key == name:
                return value
        return None

    def __repr__(self):
        return f"StagedTarget(method={self.http_method!r}, resource_url={self.resource_url!r})"


# =============================================================================
# STAGED UPLOADS
# =============================================================================


def begin_upload(
    config: ShopifyConfig,
    filename: str,
    mime_type: str,
    resource: str = "IMAGE",
    http_method: str = "PUT",
) -> client.GraphQLResponse:
    """
    Request a signed upload target.

    `filename` is the name Shopify stores the file under, not a local path.
    PUT suits small files; POST sends the parameters as form fields.
    """
    variables = {
        "input": [
            {
                "filename": filename,
                "mimeType": mime_type,
                "resource": resource,
                "httpMethod": http_method,
            }
        ]
    }
    return client.execute_mutation(config, STAGED_UPLOADS_CREATE, variables, "stagedUploadsCreate")


def staged_targets(response: client.GraphQLResponse, http_method: str = "PUT") -> list:
    """Targets from a successful stagedUploadsCreate response."""
    targets = response.get("stagedUploadsCreate", "stagedTargets") or []
    return [StagedTarget.from_response(t, http_method) for t in targets]


def put_bytes(target: StagedTarget, body: bytes, filename: str = "file") -> requests.Response:
    """
    Send the whole file to the staged target in one request.

    The method is the one the target was created for; signed URLs reject
    any other. Raises UploadError on a connection failure or non-2xx status.
    """
    if target.http_method == "PUT":
        headers = {name: value for name, value in target.parameters}
        content_type = target.parameter("content_type")
        if content_type:
            headers.setdefault("Content-Type", content_type)
        kwargs = {"headers": headers, "data": body}
    else:
        # Form fields must precede the file part
        kwargs = {"data": target.parameters, "files": {"file": (filename, body)}}

    try:
        response = requests.request(target.http_method, target.url, **kwargs)
    except requests.RequestException as e:
        raise UploadError(f"Upload to staged target failed: {e}") from e

    if not 200 <= response.status_code < 300:
        raise UploadError(f"Upload failed with status {response.status_code}: {response.text[:500]}")

    return response


def read_file(path) -> bytes:
    path = Path(path)
    with open(path, "rb") as f:
        return f.read()


def media_reference(target: StagedTarget, content_type: str = "IMAGE") -> dict:
    """File input for productSet pointing at an uploaded resource."""
    return {"contentType": content_type, "originalSource": target.resource_url}


def external_video_reference(video_url: str) -> dict:
    """File input for productSet pointing at an externally hosted video."""
    return {"contentType": "EXTERNAL_VIDEO", "originalSource": video_url}


# =============================================================================
# PRODUCT MEDIA
# =============================================================================


def add_external_video(
    config: ShopifyConfig, product_id: str, video_url: str, alt: str = "Product video"
) -> client.GraphQLResponse:
    """Attach a Vimeo/YouTube hosted video to an existing product."""
    variables = {
        "productId": product_id,
        "media": [
            {
                "alt": alt,
                "mediaContentType": "EXTERNAL_VIDEO",
                "originalSource": video_url,
            }
        ],
    }
    return client.execute_mutation(config, PRODUCT_CREATE_MEDIA, variables, "productCreateMedia")
