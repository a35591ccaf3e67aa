"""Extraction of containment relations from resource descriptions."""

from __future__ import annotations

import logging
from typing import Protocol

from rdflib import Graph, URIRef
from rdflib.namespace import RDF

from .exceptions import DescriptionParseError
from .resource import CONTAINER_TYPES
from .utils import CONTAINS, HAS_MIME_TYPE, NON_RDF_SOURCE

logger = logging.getLogger(__name__)

# Media types accepted by the repository, mapped to rdflib parser names
RDF_FORMATS: dict[str, str] = {
    "text/turtle": "turtle",
    "application/ld+json": "json-ld",
    "application/n-triples": "nt",
    "application/rdf+xml": "xml",
    "text/n3": "n3",
    "text/rdf+n3": "n3",
    "application/n-quads": "nquads",
}


class DescriptionParser(Protocol):
    """Capability the transfer code needs from a description format."""

    def contained(self, content: bytes, media_type: str, base_uri: str) -> set[str]:
        """Return the URIs of the resources contained by the description."""
        ...

    def describes_binary(
        self, content: bytes, media_type: str, base_uri: str
    ) -> bool:
        """Return True if the description is the metadata of a binary."""
        ...

    def mime_type(
        self, content: bytes, media_type: str, base_uri: str, subject: str
    ) -> str | None:
        """Return the mime type the description records for subject."""
        ...


class RdfDescriptionParser:
    """DescriptionParser backed by rdflib."""

    def _parse(self, content: bytes, media_type: str, base_uri: str) -> Graph:
        rdf_format = RDF_FORMATS.get(media_type.split(";")[0].strip().lower())
        if rdf_format is None:
            raise DescriptionParseError(f"Unsupported RDF media type: {media_type}")
        graph = Graph()
        try:
            graph.parse(data=content, format=rdf_format, publicID=base_uri)
        except Exception as e:
            raise DescriptionParseError(
                f"Unable to parse description of {base_uri}: {e}"
            ) from e
        return graph

    def contained(self, content: bytes, media_type: str, base_uri: str) -> set[str]:
        graph = self._parse(content, media_type, base_uri)
        children = {
            str(obj)
            for obj in graph.objects(predicate=URIRef(CONTAINS))
            if isinstance(obj, URIRef)
        }
        logger.debug("%s contains %d resource(s)", base_uri, len(children))
        return children

    def describes_binary(
        self, content: bytes, media_type: str, base_uri: str
    ) -> bool:
        """Whether the description is the metadata of a binary.

        The described resource is a binary when a subject typed
        ``ldp:NonRDFSource`` is not a member listed by ``ldp:contains``.
        A description whose own resource is a container, or lists members,
        never describes a binary.
        """
        graph = self._parse(content, media_type, base_uri)
        resource = URIRef(base_uri)
        if (resource, URIRef(CONTAINS), None) in graph:
            return False
        if any(str(t) in CONTAINER_TYPES for t in graph.objects(resource, RDF.type)):
            return False

        members = set(graph.objects(predicate=URIRef(CONTAINS)))
        return any(
            subject not in members
            for subject in graph.subjects(RDF.type, URIRef(NON_RDF_SOURCE))
        )

    def mime_type(
        self, content: bytes, media_type: str, base_uri: str, subject: str
    ) -> str | None:
        graph = self._parse(content, media_type, base_uri)
        value = graph.value(URIRef(subject), URIRef(HAS_MIME_TYPE))
        return str(value) if value is not None else None
