"""Directory scanning of the local mirror."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..paths import PathCodec

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """Which root a mirror file was found in."""

    BINARY = "binary"
    DESCRIPTION = "description"


@dataclass
class MirrorFile:
    """A file of the local mirror and the resource it stands for."""

    path: Path
    """Path to the file inside its root"""

    kind: EntryKind

    uri: str
    """Resource URI the file maps to"""

    @property
    def depth(self) -> int:
        """Number of path segments of the resource URI."""
        return len(
            [s for s in self.uri.split("://", 1)[-1].split("/")[1:] if s != ""]
        )


class MirrorScanner:
    """Scans the description and binary roots of a mirror.

    Examples:
        >>> scanner = MirrorScanner(codec)
        >>> for entry in scanner.scan():
        ...     print(entry.kind.value, entry.uri)
    """

    def __init__(self, codec: PathCodec):
        """Initialize mirror scanner.

        Args:
            codec: Path codec mapping files back to resource URIs
        """
        self.codec = codec

    def scan_directory(self, directory: Path) -> list[Path]:
        """Recursively list the files below a directory.

        Args:
            directory: Directory to scan

        Returns:
            File paths
        """
        files: list[Path] = []

        try:
            for item in directory.iterdir():
                if item.is_file():
                    files.append(item)
                elif item.is_dir():
                    files.extend(self.scan_directory(item))
        except PermissionError as e:
            # Skip directories we can't read
            logger.warning("Permission denied: %s", e)

        return files

    def scan(self) -> list[MirrorFile]:
        """Scan both roots and return entries in creation order.

        Entries are sorted by the depth of their resource URI, so that a
        container is always created before anything placed inside it.
        Description files without the configured extension are ignored.

        Returns:
            Ordered list of MirrorFile objects
        """
        entries: list[MirrorFile] = []
        extension = self.codec.extension

        root = self.codec.description_root
        if root.is_dir():
            for path in self.scan_directory(root):
                if not path.name.endswith(extension):
                    logger.debug("Ignoring file without %s extension: %s", extension, path)
                    continue
                entries.append(self._entry(path, root, EntryKind.DESCRIPTION, extension))

        root = self.codec.binary_root
        if root is not None and root.is_dir():
            for path in self.scan_directory(root):
                entries.append(self._entry(path, root, EntryKind.BINARY, ""))

        entries.sort(key=lambda e: (e.depth, e.kind is EntryKind.DESCRIPTION, e.uri))
        return entries

    def _entry(
        self, path: Path, root: Path, kind: EntryKind, extension: str
    ) -> MirrorFile:
        return MirrorFile(
            path=path,
            kind=kind,
            uri=self.codec.uri_for_file(path, root, extension),
        )
