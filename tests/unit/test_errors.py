"""
Test structured API errors and their HTTP status mapping.
"""
import pytest

from garden_shared.errors import (
    APIException,
    ErrorCode,
    NotFoundError,
    PayloadTooLargeError,
    UpstreamParseError,
    UpstreamServiceError,
    UpstreamUnavailableError,
    ValidationError,
    ValidationErrorDetail,
    create_validation_error,
    get_status_code,
)


@pytest.mark.unit
class TestAPIException:
    @pytest.mark.parametrize(
        "exc_type,status,code",
        [
            (ValidationError, 400, "VALIDATION_ERROR"),
            (NotFoundError, 404, "RESOURCE_NOT_FOUND"),
            (PayloadTooLargeError, 413, "PAYLOAD_TOO_LARGE"),
            (UpstreamServiceError, 502, "SERVICE_UPSTREAM_ERROR"),
            (UpstreamParseError, 502, "UPSTREAM_PARSE_ERROR"),
            (UpstreamUnavailableError, 503, "SERVICE_UNAVAILABLE"),
            (APIException, 500, "INTERNAL_ERROR"),
        ],
    )
    def test_default_codes(self, exc_type, status, code):
        exc = exc_type("boom")
        assert exc.status_code == status
        assert exc.error.error_code == code

    def test_response_mirrors_message_under_error(self):
        body = ValidationError("A non-empty 'query' string is required.", details={"field": "query"}).to_response()

        assert body["error"] == "A non-empty 'query' string is required."
        assert body["message"] == body["error"]
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == {"field": "query"}
        assert body["service"] == "herbal-garden"
        assert body["request_id"].startswith("req_")

    def test_explicit_code_and_status(self):
        exc = APIException("slow", error_code=ErrorCode.SERVICE_TIMEOUT)
        assert exc.status_code == 504
        assert APIException("x", status_code=418).status_code == 418

    def test_unknown_code_is_500(self):
        assert get_status_code("NOPE") == 500

    def test_create_validation_error(self):
        exc = create_validation_error("bad", [ValidationErrorDetail(field="scale", message="too big")])
        assert exc.status_code == 400
        assert exc.error.details == {"fields": [{"field": "scale", "message": "too big"}]}

    def test_parse_error_is_upstream_error(self):
        assert isinstance(UpstreamParseError("x"), UpstreamServiceError)
