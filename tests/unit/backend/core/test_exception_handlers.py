"""
Unit Tests for Exception Handlers.

Tests the exception handler functions in isolation.
"""

import json

import pytest
from unittest.mock import MagicMock, patch
from fastapi import Request
from fastapi.exceptions import RequestValidationError

from notesapp.backend.core.exception_handlers import (
    application_error_handler,
    validation_error_handler,
    unhandled_exception_handler,
    EXCEPTION_STATUS_MAP,
    _get_request_id,
)
from notesapp.backend.core.exceptions import (
    ApplicationError,
    NotFoundError,
    ValidationError,
    DatabaseError,
    ExternalServiceError,
)


def _body(response) -> dict:
    return json.loads(response.body)


class TestExceptionStatusMapping:
    """Tests for exception to HTTP status code mapping."""

    def test_not_found_maps_to_404(self):
        """NotFoundError should map to 404."""
        assert EXCEPTION_STATUS_MAP[NotFoundError] == 404

    def test_validation_maps_to_400(self):
        """ValidationError should map to 400."""
        assert EXCEPTION_STATUS_MAP[ValidationError] == 400

    def test_external_service_maps_to_502(self):
        """ExternalServiceError should map to 502."""
        assert EXCEPTION_STATUS_MAP[ExternalServiceError] == 502

    def test_database_maps_to_500(self):
        """DatabaseError should map to 500."""
        assert EXCEPTION_STATUS_MAP[DatabaseError] == 500


class TestGetRequestId:
    """Tests for request ID extraction."""

    def test_extracts_from_request_state(self):
        """Should extract request_id from request.state."""
        request = MagicMock(spec=Request)
        request.state.request_id = "state-123"
        request.headers = {}

        assert _get_request_id(request) == "state-123"

    def test_extracts_from_header(self):
        """Should extract request_id from x-request-id header."""
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {"x-request-id": "header-456"}

        assert _get_request_id(request) == "header-456"

    def test_returns_none_when_not_present(self):
        """Should return None when no request_id available."""
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {}

        assert _get_request_id(request) is None


@pytest.fixture
def mock_request():
    """Create a mock request."""
    request = MagicMock(spec=Request)
    request.url.path = "/api/folders"
    request.method = "GET"
    request.headers = {"x-request-id": "test-123"}
    del request.state.request_id
    return request


class TestApplicationErrorHandler:
    """Tests for application_error_handler."""

    @pytest.mark.asyncio
    async def test_not_found_returns_404(self, mock_request):
        """NotFoundError should return 404 with the error envelope."""
        response = await application_error_handler(mock_request, NotFoundError("Folder not found"))

        assert response.status_code == 404
        body = _body(response)
        assert body["success"] is False
        assert body["error"]["code"] == "RES_NOT_FOUND"
        assert body["error"]["message"] == "Folder not found"
        assert body["metadata"]["request_id"] == "test-123"

    @pytest.mark.asyncio
    async def test_validation_error_includes_details(self, mock_request):
        """ValidationError should return 400 and carry its details."""
        exc = ValidationError("Folder does not exist", details={"folder_id": "f-9"})

        response = await application_error_handler(mock_request, exc)

        assert response.status_code == 400
        body = _body(response)
        assert body["error"]["code"] == "VAL_VALIDATION_ERROR"
        assert body["error"]["details"] == {"folder_id": "f-9"}

    @pytest.mark.asyncio
    async def test_database_error_returns_500(self, mock_request):
        """DatabaseError should return 500."""
        response = await application_error_handler(mock_request, DatabaseError())

        assert response.status_code == 500
        assert _body(response)["error"]["code"] == "SYS_DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_base_application_error_returns_500(self, mock_request):
        """Unmapped ApplicationError should return 500."""
        response = await application_error_handler(mock_request, ApplicationError("boom"))

        assert response.status_code == 500


class TestValidationErrorHandler:
    """Tests for validation_error_handler."""

    @pytest.mark.asyncio
    async def test_returns_400_with_field_errors(self, mock_request):
        """Request validation errors should be client errors (400)."""
        exc = RequestValidationError([
            {"loc": ("body", "name"), "msg": "Field required", "type": "missing"},
        ])

        response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 400
        body = _body(response)
        assert body["error"]["code"] == "VAL_REQUEST_INVALID"
        errors = body["error"]["details"]["validation_errors"]
        assert errors == [{"field": "body.name", "message": "Field required", "type": "missing"}]


class TestUnhandledExceptionHandler:
    """Tests for unhandled_exception_handler."""

    @pytest.mark.asyncio
    async def test_returns_generic_500(self, mock_request):
        """Should hide the message and return SYS_INTERNAL_ERROR."""
        config = MagicMock()
        config.features.api_detailed_errors = False
        with patch(
            "notesapp.backend.core.exception_handlers.get_app_config",
            return_value=config,
        ):
            response = await unhandled_exception_handler(mock_request, RuntimeError("secret"))

        assert response.status_code == 500
        body = _body(response)
        assert body["error"]["code"] == "SYS_INTERNAL_ERROR"
        assert "secret" not in response.body.decode()
        assert body["error"]["details"] is None

    @pytest.mark.asyncio
    async def test_detailed_errors_expose_type_only(self, mock_request):
        """Should include the exception type when detailed errors are enabled."""
        config = MagicMock()
        config.features.api_detailed_errors = True
        with patch(
            "notesapp.backend.core.exception_handlers.get_app_config",
            return_value=config,
        ):
            response = await unhandled_exception_handler(mock_request, RuntimeError("secret"))

        assert _body(response)["error"]["details"] == {"exception_type": "RuntimeError"}
        assert "secret" not in response.body.decode()
