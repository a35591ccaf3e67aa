"""Shared fixtures for ldpmirror tests."""

import json
from unittest.mock import Mock

import httpx
import pytest

from ldpmirror.api import LdpClient, LdpResponse
from ldpmirror.output import OutputFormatter
from ldpmirror.utils import CONTAINER, CONTAINS, NON_RDF_SOURCE


@pytest.fixture
def make_response():
    """Build an LdpResponse with Link headers.

    links is a list of (target, rel) tuples.
    """

    def _make(uri, status_code=200, links=(), content=b""):
        headers = httpx.Headers([("link", f'<{t}>; rel="{rel}"') for t, rel in links])
        return LdpResponse(
            url=uri, status_code=status_code, headers=headers, content=content
        )

    return _make


@pytest.fixture
def container_links():
    return [(CONTAINER, "type")]


@pytest.fixture
def binary_links():
    return [(NON_RDF_SOURCE, "type")]


@pytest.fixture
def jsonld():
    """Serialize a JSON-LD node with optional children, types and properties."""

    def _jsonld(uri, contains=(), types=(), properties=None):
        node = {"@id": uri}
        if contains:
            node[CONTAINS] = [{"@id": child} for child in contains]
        if types:
            node["@type"] = list(types)
        node.update(properties or {})
        return json.dumps(node).encode()

    return _jsonld


@pytest.fixture
def mock_client():
    """Create a mock repository client."""
    return Mock(spec=LdpClient)


@pytest.fixture
def mock_output():
    """Create a mock output formatter."""
    output = Mock(spec=OutputFormatter)
    output.quiet = True  # Suppress output during tests
    return output
