"""Unit tests for HTTP error translation."""

from uuid import uuid4

from forum.adapter.error import AdapterError, StoreUnavailableError
from forum.domain.error import (
    CounterUnderflowError,
    DomainError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
)
from forum.interface.api.error import http_error


class TestHttpError:
    """Tests for http_error."""

    def test_maps_listed_errors(self):
        """Should map each listed error to its status code."""
        post_id = str(uuid4())

        assert http_error(NotAuthenticatedError("vote")).status_code == 401
        assert http_error(NotAuthorizedError("not yours")).status_code == 403
        assert http_error(NotFoundError("Post", post_id)).status_code == 404
        assert (
            http_error(CounterUnderflowError(post_id, {"up_votes": -1})).status_code
            == 409
        )

    def test_store_outage_is_retryable(self):
        """Should return 503 with Retry-After for a store outage."""
        # Act
        error = http_error(StoreUnavailableError("connection reset"))

        # Assert
        assert error.status_code == 503
        assert error.headers == {"Retry-After": "1"}

    def test_unlisted_domain_error_is_client_error(self):
        """Should fall back to 400 for other domain errors."""
        assert http_error(DomainError("bad input")).status_code == 400

    def test_unlisted_adapter_error_is_server_error(self):
        """Should fall back to 500 for other adapter errors."""
        # Act
        error = http_error(AdapterError("boom"))

        # Assert
        assert error.status_code == 500
        assert error.headers is None
        assert error.detail == "boom"
