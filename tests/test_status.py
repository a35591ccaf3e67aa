"""Tests for status mapping and resource classification."""

import pytest

from ldpmirror.exceptions import (
    AuthenticationRequiredError,
    AuthorizationDeniedError,
    ResourceNotFoundError,
    TransferFailedError,
    TransferStatusError,
)
from ldpmirror.resource import ResourceKind, classify_resource
from ldpmirror.status import StatusOutcome, check_status, classify_status
from ldpmirror.utils import (
    BASIC_CONTAINER,
    CONTAINER,
    DIRECT_CONTAINER,
    INDIRECT_CONTAINER,
    NON_RDF_SOURCE,
)

URI = "http://localhost:8080/rest/1"


class TestClassifyStatus:
    """Tests for classify_status."""

    @pytest.mark.parametrize("code", [200, 201, 204, 299])
    def test_success(self, code):
        assert classify_status(code) is StatusOutcome.SUCCESS

    @pytest.mark.parametrize(
        "code,outcome",
        [
            (401, StatusOutcome.AUTHENTICATION_REQUIRED),
            (403, StatusOutcome.AUTHORIZATION_DENIED),
            (404, StatusOutcome.NOT_FOUND),
            (100, StatusOutcome.FAILURE),
            (301, StatusOutcome.FAILURE),
            (409, StatusOutcome.FAILURE),
            (500, StatusOutcome.FAILURE),
        ],
    )
    def test_failures(self, code, outcome):
        assert classify_status(code) is outcome


class TestCheckStatus:
    """Tests for check_status."""

    def test_success_returns_none(self):
        assert check_status(201, URI) is None

    def test_unauthorized(self):
        with pytest.raises(AuthenticationRequiredError) as exc_info:
            check_status(401, URI)
        assert exc_info.value.uri == URI

    def test_forbidden_with_principal(self):
        with pytest.raises(AuthorizationDeniedError) as exc_info:
            check_status(403, URI, "fedoraAdmin")
        assert exc_info.value.principal == "fedoraAdmin"
        assert str(exc_info.value) == f"Access to {URI} denied for fedoraAdmin"

    def test_forbidden_anonymous(self):
        with pytest.raises(AuthorizationDeniedError) as exc_info:
            check_status(403, URI)
        assert "anonymous user" in str(exc_info.value)

    def test_not_found(self):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            check_status(404, URI)
        assert str(exc_info.value) == f"Resource not found: {URI}"

    def test_other_failure_carries_code(self):
        with pytest.raises(TransferFailedError) as exc_info:
            check_status(503, URI)
        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)

    @pytest.mark.parametrize("code", [401, 403, 404, 500])
    def test_all_failures_share_base_class(self, code):
        with pytest.raises(TransferStatusError):
            check_status(code, URI)


class TestClassifyResource:
    """Tests for classify_resource."""

    @pytest.mark.parametrize(
        "container_type",
        [CONTAINER, BASIC_CONTAINER, DIRECT_CONTAINER, INDIRECT_CONTAINER],
    )
    def test_containers(self, container_type):
        assert classify_resource([container_type]) is ResourceKind.CONTAINER

    def test_binary(self):
        assert classify_resource([NON_RDF_SOURCE]) is ResourceKind.BINARY

    def test_container_wins(self):
        kind = classify_resource([NON_RDF_SOURCE, BASIC_CONTAINER])
        assert kind is ResourceKind.CONTAINER

    def test_unknown(self):
        assert classify_resource([]) is ResourceKind.UNKNOWN
        kind = classify_resource(["http://www.w3.org/ns/ldp#RDFSource"])
        assert kind is ResourceKind.UNKNOWN
