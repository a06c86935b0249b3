import pytest

from shopify_catalog import client
from shopify_catalog.products import (
    BYTES_SENT,
    FAILED,
    IDLE,
    RECORD_CREATED,
    UPLOAD_REQUESTED,
    CreateProductFlow,
    build_product_set_input,
    publish_product,
)
from tests.factories import product_set_body, staged_upload_body, user_errors_body

FIELDS = {
    "title": "ELBAITE with Cleavelandite and Lepidolite",
    "price": "1000.00",
    "weight": 20,
    "description": "Stunning miniature tourmaline",
    "metafields": [
        {"namespace": "custom", "key": "web_number", "value": "CC45742", "type": "single_line_text_field"},
        {"namespace": "custom", "key": "minkeeper_number", "value": "MK-45742", "type": "single_line_text_field"},
    ],
}


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "image.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


def states(results):
    return [t["to"] for t in results["transitions"]]


def test_product_input_has_default_variant_and_metafields():
    product_input = build_product_set_input(FIELDS, [{"contentType": "IMAGE", "originalSource": "https://r/1"}])

    assert product_input["title"] == FIELDS["title"]
    assert product_input["descriptionHtml"] == FIELDS["description"]
    assert product_input["files"] == [{"contentType": "IMAGE", "originalSource": "https://r/1"}]
    assert product_input["productOptions"][0]["values"] == [{"name": "Default Title"}]
    variant = product_input["variants"][0]
    assert variant["optionValues"] == [{"optionName": "Title", "name": "Default Title"}]
    assert variant["price"] == "1000.00"
    assert variant["sku"] == "MK-45742"
    assert variant["inventoryItem"]["measurement"]["weight"] == {"value": 20, "unit": "GRAMS"}
    assert "inventoryQuantities" not in variant
    assert [m["key"] for m in product_input["metafields"]] == ["web_number", "minkeeper_number"]


def test_explicit_sku_and_location():
    fields = dict(FIELDS, sku="OVERRIDE", location_id="gid://shopify/Location/7", quantity=3)
    variant = build_product_set_input(fields, [])["variants"][0]

    assert variant["sku"] == "OVERRIDE"
    assert variant["inventoryQuantities"] == [
        {"locationId": "gid://shopify/Location/7", "name": "available", "quantity": 3}
    ]


def test_no_metafields_key_when_empty():
    product_input = build_product_set_input({"title": "Plain", "price": "1.00"}, [])
    assert "metafields" not in product_input
    assert "sku" not in product_input["variants"][0]


def test_flow_happy_path(shopify, config, image):
    shopify.respond(staged_upload_body(resource_url="https://storage.example.com/resource/abc"))
    shopify.respond_upload(200)
    shopify.respond(product_set_body())

    results = CreateProductFlow(config, image).run(FIELDS)

    assert not results["aborted"]
    assert states(results) == [UPLOAD_REQUESTED, BYTES_SENT, RECORD_CREATED]
    assert results["product"]["id"] == "gid://shopify/Product/99"
    assert shopify.upload_calls[0]["data"] == b"\xff\xd8\xff\xe0fake-jpeg"
    files = shopify.variables(1)["productSet"]["files"]
    assert files == [{"contentType": "IMAGE", "originalSource": "https://storage.example.com/resource/abc"}]


def test_flow_appends_extra_media(shopify, config, image):
    shopify.respond(staged_upload_body())
    shopify.respond_upload(200)
    shopify.respond(product_set_body())

    video = {"contentType": "EXTERNAL_VIDEO", "originalSource": "https://player.vimeo.com/video/1"}
    CreateProductFlow(config, image).run(FIELDS, [video])

    files = shopify.variables(1)["productSet"]["files"]
    assert files[-1] == video
    assert len(files) == 2


def test_upload_user_errors_stop_before_transfer(shopify, config, image):
    shopify.respond(user_errors_body("stagedUploadsCreate", [{"field": ["input"], "message": "Bad input"}]))

    flow = CreateProductFlow(config, image)
    results = flow.run(FIELDS)

    assert results["aborted"]
    assert flow.state == FAILED
    assert results["error_status"] == client.USER_ERRORS
    assert results["errors"] == [{"field": ["input"], "message": "Bad input"}]
    assert shopify.upload_calls == []
    assert len(shopify.graphql_calls) == 1


def test_failed_transfer_never_creates(shopify, config, image):
    shopify.respond(staged_upload_body())
    shopify.respond_upload(403, text="SignatureDoesNotMatch")

    results = CreateProductFlow(config, image).run(FIELDS)

    assert results["aborted"]
    assert states(results) == [UPLOAD_REQUESTED, FAILED]
    assert "403" in results["abort_reason"]
    assert len(shopify.graphql_calls) == 1


def test_create_user_errors_fail_after_upload(shopify, config, image):
    shopify.respond(staged_upload_body())
    shopify.respond_upload(200)
    shopify.respond(user_errors_body("productSet", [{"field": ["input", "title"], "message": "Title can't be blank"}]))

    results = CreateProductFlow(config, image).run(FIELDS)

    assert results["aborted"]
    assert states(results) == [UPLOAD_REQUESTED, BYTES_SENT, FAILED]
    assert results["product"] is None
    # The uploaded file is left in place
    assert results["staged_target"]["resourceUrl"] == "https://storage.example.com/resource/1"


def test_missing_image_fails_before_any_request(shopify, config, tmp_path):
    flow = CreateProductFlow(config, tmp_path / "missing.jpg")
    results = flow.run(FIELDS)

    assert results["aborted"]
    assert states(results) == [FAILED]
    assert shopify.graphql_calls == []


def test_flow_starts_idle(config, image):
    flow = CreateProductFlow(config, image)
    assert flow.state == IDLE
    assert flow.mime_type == "image/jpeg"


def test_publish_product(shopify, config):
    shopify.respond({"data": {"publishablePublish": {"publishable": {"availablePublicationsCount": {"count": 3}}, "userErrors": []}}})
    publications = [{"publicationId": "gid://shopify/Publication/1", "publishDate": "2025-08-29T00:00:00Z"}]

    response = publish_product(config, "gid://shopify/Product/99", publications)

    assert response.ok
    assert shopify.variables(0) == {"id": "gid://shopify/Product/99", "input": publications}


def test_publish_user_errors(shopify, config):
    shopify.respond(user_errors_body("publishablePublish", [{"field": ["id"], "message": "Product not found"}]))
    response = publish_product(config, "gid://shopify/Product/0", [{"publicationId": "gid://shopify/Publication/1"}])
    assert response.status == client.USER_ERRORS
