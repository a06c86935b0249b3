"""
Product Create + Publish

Create flow (one product, one image):

    IDLE -> UPLOAD_REQUESTED -> BYTES_SENT -> RECORD_CREATED
      any step fails -> FAILED

FAILED is terminal. Nothing is rolled back: a file that was uploaded but
never referenced stays in Shopify's staging bucket.
"""

import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from shopify_catalog import client
from shopify_catalog.config import ShopifyConfig
from shopify_catalog.media import (
    UploadError,
    begin_upload,
    media_reference,
    put_bytes,
    read_file,
    staged_targets,
)
from shopify_catalog.queries import PRODUCT_SET, PUBLISHABLE_PUBLISH

# =============================================================================
# CONFIGURATION
# =============================================================================

# "Title" / "Default Title" exactly, or Shopify will not treat the variant as the default
DEFAULT_OPTION_NAME = "Title"
DEFAULT_OPTION_VALUE = "Default Title"

# Metafield whose value doubles as the variant SKU when no SKU is given
SKU_METAFIELD_KEY = "minkeeper_number"

# Flow states
IDLE = "IDLE"
UPLOAD_REQUESTED = "UPLOAD_REQUESTED"
BYTES_SENT = "BYTES_SENT"
RECORD_CREATED = "RECORD_CREATED"
FAILED = "FAILED"


class AbortException(Exception):
    """Raised to stop the create flow."""


# =============================================================================
# MUTATIONS
# =============================================================================


def find_metafield_value(metafields: list, key: str) -> Optional[str]:
    for metafield in metafields or []:
        if metafield.get("key") == key:
            return metafield.get("value")
    return None


def build_product_set_input(fields: dict, media_references: list) -> dict:
    """ProductSetInput with a single default variant."""
    metafields = fields.get("metafields") or []
    sku = fields.get("sku") or find_metafield_value(metafields, fields.get("sku_metafield_key", SKU_METAFIELD_KEY))

    inventory_item = {"tracked": True}
    if fields.get("weight") is not None:
        inventory_item["measurement"] = {
            "weight": {"value": fields["weight"], "unit": "GRAMS"},
        }

    variant = {
        "optionValues": [{"optionName": DEFAULT_OPTION_NAME, "name": DEFAULT_OPTION_VALUE}],
        "price": fields.get("price"),
        "taxable": fields.get("taxable", False),
        "inventoryItem": inventory_item,
    }
    if sku:
        variant["sku"] = sku
    if fields.get("location_id"):
        # "available" is right for initial imports; other states need other names
        variant["inventoryQuantities"] = [
            {
                "locationId": fields["location_id"],
                "name": "available",
                "quantity": fields.get("quantity", 1),
            }
        ]

    product_input = {
        "title": fields["title"],
        "descriptionHtml": fields.get("description", ""),
        "files": list(media_references),
        "productOptions": [
            {
                "name": DEFAULT_OPTION_NAME,
                "position": 1,
                "values": [{"name": DEFAULT_OPTION_VALUE}],
            }
        ],
        "variants": [variant],
    }
    if metafields:
        product_input["metafields"] = [
            {
                "namespace": m.get("namespace"),
                "key": m.get("key"),
                "value": m.get("value"),
                "type": m.get("type"),
            }
            for m in metafields
        ]
    return product_input


def create_with_media(config: ShopifyConfig, fields: dict, media_references: list) -> client.GraphQLResponse:
    """Create a product whose media are already uploaded or externally hosted."""
    variables = {"productSet": build_product_set_input(fields, media_references)}
    return client.execute_mutation(config, PRODUCT_SET, variables, "productSet")


def publish_product(config: ShopifyConfig, product_id: str, publications: list) -> client.GraphQLResponse:
    """Publish to sales channels. Each publication is {publicationId, publishDate?}."""
    variables = {"id": product_id, "input": publications}
    return client.execute_mutation(config, PUBLISHABLE_PUBLISH, variables, "publishablePublish")


# =============================================================================
# CREATE FLOW
# =============================================================================


class CreateProductFlow:
    """Upload one image, then create a product that references it."""

    def __init__(self, config: ShopifyConfig, image_path, filename: str = None, mime_type: str = None):
        self.config = config
        self.image_path = Path(image_path)
        self.filename = filename or self.image_path.name
        self.mime_type = mime_type or mimetypes.guess_type(self.filename)[0] or "image/jpeg"
        self.state = IDLE
        self.results = {
            "state": IDLE,
            "transitions": [],
            "staged_target": None,
            "product": None,
            "errors": [],
            "error_status": None,
            "aborted": False,
            "abort_reason": None,
            "start_utc": None,
            "end_utc": None,
        }

    def _transition(self, state: str):
        self.results["transitions"].append({
            "from": self.state,
            "to": state,
            "at": datetime.now(timezone.utc).isoformat(),
        })
        self.state = state
        self.results["state"] = state

    def run(self, fields: dict, extra_media: Optional[list] = None) -> dict:
        """Execute the flow. Never raises; check results["aborted"]."""
        self.results["start_utc"] = datetime.now(timezone.utc).isoformat()

        try:
            body = self._read_image()
            target = self._request_upload()
            self._send_bytes(target, body)
            self._create_product(fields, [media_reference(target)] + list(extra_media or []))

        except AbortException as e:
            self.results["aborted"] = True
            self.results["abort_reason"] = str(e)
            self._transition(FAILED)

        self.results["end_utc"] = datetime.now(timezone.utc).isoformat()
        return self.results

    def _read_image(self) -> bytes:
        try:
            return read_file(self.image_path)
        except OSError as e:
            raise AbortException(f"Cannot read image {self.image_path}: {e}")

    def _request_upload(self):
        response = begin_upload(self.config, self.filename, self.mime_type, "IMAGE", "PUT")
        if not response.ok:
            self.results["errors"] = response.errors
            self.results["error_status"] = response.status
            raise AbortException(f"Staged upload failed ({response.status}): {response.message}")

        targets = staged_targets(response, "PUT")
        if not targets:
            raise AbortException("No staged upload target found in response")

        self.results["staged_target"] = {
            "url": targets[0].url,
            "resourceUrl": targets[0].resource_url,
        }
        self._transition(UPLOAD_REQUESTED)
        return targets[0]

    def _send_bytes(self, target, body: bytes):
        try:
            put_bytes(target, body, self.filename)
        except UploadError as e:
            raise AbortException(str(e))
        self._transition(BYTES_SENT)

    def _create_product(self, fields: dict, media_references: list):
        response = create_with_media(self.config, fields, media_references)
        if not response.ok:
            self.results["errors"] = response.errors
            self.results["error_status"] = response.status
            raise AbortException(f"Product creation failed ({response.status}): {response.message}")

        product = response.get("productSet", "product")
        if not product:
            raise AbortException("No product returned from creation")

        self.results["product"] = product
        self._transition(RECORD_CREATED)
