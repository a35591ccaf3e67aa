"""Mapping between resource URIs and files in the local mirror.

The on-disk layout mirrors the resource hierarchy: every URI path segment
becomes a directory or file name. Characters that are not unreserved in a
URI are percent-escaped so that any path the repository can serve maps to a
legal, unique file name, and the mapping can be reversed on import.

Examples:
    >>> encode_path("/rest/file1/fcr:metadata")
    'rest/file1/fcr%3Ametadata'
    >>> decode_path("rest/file1/fcr%3Ametadata")
    '/rest/file1/fcr:metadata'
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

# Segments a filesystem would interpret as directory navigation
_DOT_SEGMENTS = {".": "%2E", "..": "%2E%2E"}


def _encode_segment(segment: str, extension: str) -> str:
    if segment in _DOT_SEGMENTS:
        return _DOT_SEGMENTS[segment]
    encoded = quote(segment, safe="")
    # A name ending in the extension would clash with a description file
    if extension.startswith(".") and encoded.endswith(extension):
        encoded = encoded[: -len(extension)] + "%2E" + extension[1:]
    return encoded


def encode_path(uri_path: str, extension: str = "") -> str:
    """Encode a URI path as a relative file path.

    Args:
        uri_path: Path component of a URI (e.g. "/rest/a:b")
        extension: Description extension; segments ending in it are escaped
            so that no directory is named like a description file

    Returns:
        Relative path using forward slashes (e.g. "rest/a%3Ab")
    """
    return "/".join(
        _encode_segment(s, extension) for s in uri_path.lstrip("/").split("/")
    )


def decode_path(encoded: str) -> str:
    """Reverse encode_path.

    Args:
        encoded: Relative path produced by encode_path

    Returns:
        The URI path, with a leading slash
    """
    return "/" + "/".join(unquote(s) for s in encoded.split("/"))


def _replace_prefix(path: str, old: str, new: str) -> str:
    """Swap a leading path prefix, respecting segment boundaries."""
    old = old.rstrip("/")
    new = new.rstrip("/")
    if path == old:
        return new or "/"
    if old and path.startswith(old + "/"):
        return new + path[len(old) :]
    return path


class PathCodec:
    """Computes mirror paths for resources and resource URIs for mirror files.

    Args:
        resource_uri: Root URI of the transfer; its scheme and authority are
            attached to every decoded path
        description_root: Directory holding descriptions
        extension: Extension appended to description files (e.g. ".ttl")
        binary_root: Directory holding binaries, None for metadata-only
        source_uri: URI the mirror was exported from, when it differs from
            resource_uri (import into a different base path)
    """

    def __init__(
        self,
        resource_uri: str,
        description_root: Path,
        extension: str,
        binary_root: Path | None = None,
        source_uri: str | None = None,
    ):
        self.resource_uri = resource_uri
        self.description_root = Path(description_root)
        self.extension = extension
        self.binary_root = Path(binary_root) if binary_root is not None else None
        self._root = urlsplit(resource_uri)
        self._source_path = urlsplit(source_uri).path if source_uri else None

    def _mirror_path(self, uri: str) -> str:
        path = urlsplit(uri).path
        if self._source_path is not None:
            path = _replace_prefix(path, self._root.path, self._source_path)
        return encode_path(path, self.extension)

    def file_for_description(self, uri: str) -> Path:
        """Description mirror file for a resource URI."""
        return self.description_root / (self._mirror_path(uri) + self.extension)

    def file_for_binary(self, uri: str) -> Path | None:
        """Binary mirror file for a resource URI.

        Returns:
            The file path, or None when no binary root is configured
        """
        if self.binary_root is None:
            return None
        return self.binary_root / self._mirror_path(uri)

    def uri_for_file(self, file_path: Path, root: Path, extension: str = "") -> str:
        """Rebuild the resource URI a mirror file was written for.

        Args:
            file_path: File inside root
            root: Description or binary root the file belongs to
            extension: Extension to strip from the file name

        Returns:
            Absolute resource URI on the configured repository

        Raises:
            ValueError: If file_path is not inside root
        """
        relative = Path(file_path).relative_to(root).as_posix()
        if extension and relative.endswith(extension):
            relative = relative[: -len(extension)]
        path = decode_path(relative)
        if self._source_path is not None:
            path = _replace_prefix(path, self._source_path, self._root.path)
        return urlunsplit((self._root.scheme, self._root.netloc, path, "", ""))


def is_within(uri: str, root_uri: str) -> bool:
    """Whether uri is root_uri or one of its descendants."""
    parts = urlsplit(uri)
    root = urlsplit(root_uri)
    if (parts.scheme, parts.netloc) != (root.scheme, root.netloc):
        return False
    root_path = root.path.rstrip("/")
    return (
        not root_path
        or parts.path.rstrip("/") == root_path
        or parts.path.startswith(root_path + "/")
    )
