"""Tests for the @validate_request decorator."""

import pytest
from flask import Blueprint, jsonify, request
from pydantic import BaseModel, Field

from easysearch_core.api.validation import validate_request


class MockCreateRequest(BaseModel):
    """Test schema for request body validation."""
    title: str = Field(..., description="Title field")
    guests: int = Field(..., description="Guest count")
    city: str | None = Field(default=None, description="Optional city")


class MockUpdateRequest(BaseModel):
    """Test schema with all optional fields."""
    title: str | None = None
    guests: int | None = None


class MockSecretRequest(BaseModel):
    email: str
    password: str


validation_bp = Blueprint("validation_test_routes", __name__)


@validation_bp.post("/test/valid")
@validate_request
def route_valid(data: MockCreateRequest):
    return jsonify({
        "title": data.title,
        "guests": data.guests,
        "city": data.city
    }), 200


@validation_bp.get("/test/path/<uuid>")
@validate_request
def route_path_param(uuid: str):
    return jsonify({"uuid": uuid}), 200


@validation_bp.put("/test/combined/<uuid>")
@validate_request
def route_combined(uuid: str, data: MockUpdateRequest):
    return jsonify({
        "uuid": uuid,
        "title": data.title,
        "guests": data.guests
    }), 200


@validation_bp.post("/test/secret")
@validate_request
def route_secret(data: MockSecretRequest):
    return jsonify({"status": "ok"}), 200


@pytest.fixture
def validation_client(app):
    """Test client with validation test routes."""
    app.register_blueprint(validation_bp)
    return app.test_client()


def test_validates_valid_request_body(validation_client):
    """Valid request body should pass validation and be parsed correctly."""
    response = validation_client.post(
        "/test/valid",
        json={"title": "Loft", "guests": 2, "city": "Dhaka"}
    )

    assert response.status_code == 200
    assert response.get_json() == {"title": "Loft", "guests": 2, "city": "Dhaka"}


def test_validates_with_optional_field_omitted(validation_client):
    response = validation_client.post("/test/valid", json={"title": "Loft", "guests": 2})

    assert response.status_code == 200
    assert response.get_json()["city"] is None


def test_accepts_form_data(validation_client):
    response = validation_client.post("/test/valid", data={"title": "Loft", "guests": "3"})

    assert response.status_code == 200
    assert response.get_json()["guests"] == 3


def test_missing_required_field(validation_client):
    """Missing required field should raise ValidationError with details."""
    response = validation_client.post("/test/valid", json={"title": "Loft"})

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"]["type"] == "ValidationError"
    assert data["error"]["message"] == "Invalid request data"

    errors = data["error"]["details"]["errors"]
    assert [e["field"] for e in errors] == ["guests"]


def test_error_details_include_field_and_message(validation_client):
    """Validation errors should include field, message, and expected_type."""
    response = validation_client.post("/test/valid", json={"guests": "many"})

    assert response.status_code == 400
    for error in response.get_json()["error"]["details"]["errors"]:
        assert "field" in error
        assert "message" in error
        assert "expected_type" in error


def test_empty_json_body(validation_client):
    """Empty JSON body should report every missing required field."""
    response = validation_client.post("/test/valid", json={})

    assert response.status_code == 400
    error_details = response.get_json()["error"]["details"]
    assert error_details["model"] == "MockCreateRequest"
    assert error_details["received"] == {}

    field_names = [e["field"] for e in error_details["errors"]]
    assert "title" in field_names
    assert "guests" in field_names


def test_non_object_body_rejected(validation_client):
    response = validation_client.post("/test/valid", json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.get_json()["error"]["message"] == "Request body must be a JSON object"


def test_received_data_included(validation_client):
    response = validation_client.post(
        "/test/valid",
        json={"title": "Loft", "guests": "wrong_type", "extra_field": "not_in_schema"}
    )

    received = response.get_json()["error"]["details"]["received"]
    assert received["title"] == "Loft"
    assert received["guests"] == "wrong_type"


def test_secrets_redacted_from_received_data(validation_client):
    response = validation_client.post(
        "/test/secret",
        json={"password": "hunter2hunter2", "refreshToken": "eyJ..."}
    )

    assert response.status_code == 400
    received = response.get_json()["error"]["details"]["received"]
    assert received["password"] == "***"
    assert received["refreshToken"] == "***"
    assert "hunter2hunter2" not in response.get_data(as_text=True)


def test_passes_through_path_parameters_unchanged(validation_client):
    """Path parameters should be passed as strings, not validated."""
    test_uuid = "550e8400-e29b-41d4-a716-446655440000"
    response = validation_client.get(f"/test/path/{test_uuid}")

    assert response.status_code == 200
    assert response.get_json()["uuid"] == test_uuid


def test_path_param_with_body(validation_client):
    test_uuid = "550e8400-e29b-41d4-a716-446655440000"
    response = validation_client.put(
        f"/test/combined/{test_uuid}",
        json={"title": "Updated", "guests": 4}
    )

    assert response.status_code == 200
    assert response.get_json() == {"uuid": test_uuid, "title": "Updated", "guests": 4}


def test_raises_typeerror_when_function_has_no_parameters():
    def no_params():
        return "ok"

    with pytest.raises(TypeError) as exc_info:
        validate_request(no_params)

    assert "has no parameters to validate" in str(exc_info.value)


def test_raises_typeerror_when_first_param_lacks_annotation():
    def no_annotation(data):
        return "ok"

    with pytest.raises(TypeError) as exc_info:
        validate_request(no_annotation)

    assert "lacks a type annotation" in str(exc_info.value)


def test_raises_typeerror_for_body_param_without_basemodel(app):
    """Body parameters without BaseModel annotation raise TypeError at request time."""
    def wrong_annotation(data: str):
        return "ok"

    decorated = validate_request(wrong_annotation)

    with app.test_request_context("/test", method="POST", json={"data": "test"}):
        request.view_args = {}

        with pytest.raises(TypeError) as exc_info:
            decorated()

        assert "Pydantic BaseModel subclass" in str(exc_info.value)
