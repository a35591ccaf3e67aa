"""Classification of repository resources."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from .utils import (
    BASIC_CONTAINER,
    CONTAINER,
    DIRECT_CONTAINER,
    INDIRECT_CONTAINER,
    NON_RDF_SOURCE,
)

logger = logging.getLogger(__name__)

CONTAINER_TYPES = frozenset(
    {CONTAINER, BASIC_CONTAINER, DIRECT_CONTAINER, INDIRECT_CONTAINER}
)


class ResourceKind(Enum):
    """Kind of a resource, as advertised by its type links."""

    CONTAINER = "container"
    BINARY = "binary"
    UNKNOWN = "unknown"


def classify_resource(type_links: Iterable[str]) -> ResourceKind:
    """Decide a resource's kind from its ``rel="type"`` link targets.

    A container marker wins over a binary marker, so a resource carrying
    both is never exported as a binary.

    Args:
        type_links: Target URIs of the type links of a HEAD or GET response

    Returns:
        ResourceKind.CONTAINER, ResourceKind.BINARY or ResourceKind.UNKNOWN
    """
    types = set(type_links)
    if types & CONTAINER_TYPES:
        return ResourceKind.CONTAINER
    if NON_RDF_SOURCE in types:
        return ResourceKind.BINARY
    logger.debug("No known resource type among %s", sorted(types))
    return ResourceKind.UNKNOWN
