"""Import of a local mirror into a repository."""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..exceptions import (
    ConfigurationError,
    DescriptionParseError,
    TransferStatusError,
    TransportError,
)
from ..paths import is_within
from ..utils import REL_DESCRIBEDBY, detect_mime_type, format_size
from .base import TransferProcess
from .scanner import EntryKind, MirrorFile, MirrorScanner

logger = logging.getLogger(__name__)


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise TransportError(f"Unable to read {path}: {e}") from e


class Importer(TransferProcess):
    """Recreates the resources of a mirror in the repository.

    Mirror files are PUT in order of resource depth, so a container always
    exists before its children are created. A binary is PUT first, with the
    mime type its exported description records (sniffed when absent); the
    ``describedby`` link of that response names its description resource,
    whose mirror file is then PUT in lenient mode and is not imported again
    on its own. Descriptions of binaries missing from the mirror are skipped.

    Examples:
        >>> importer = Importer(client, config)
        >>> stats = importer.import_("http://localhost:8080/rest")
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._claimed: set[Path] = set()
        self._descriptions: list[MirrorFile] = []

    def run(self) -> dict:
        """Import into the configured resource."""
        return self.import_(self.config.resource)

    def import_(self, uri: str) -> dict:
        """Import every mirror entry at or below a resource URI.

        Args:
            uri: Root URI of the tree to import

        Returns:
            Dictionary with import statistics

        Raises:
            ConfigurationError: If the description directory does not exist
            TransferStatusError: On a status failure, unless the run is
                configured to continue on resource errors
        """
        description_dir = self.config.description_dir
        if not description_dir.is_dir():
            raise ConfigurationError(
                f"Description directory does not exist: {description_dir}"
            )

        logger.info("Running importer for %s", uri)
        if not self.output.quiet:
            self.output.info(f"Importing: {description_dir} -> {uri}")

        entries = self._scan()
        self._claimed = set()
        self._descriptions = [e for e in entries if e.kind is EntryKind.DESCRIPTION]

        for entry in entries:
            if not is_within(entry.uri, uri):
                logger.debug("Outside of %s, skipping %s", uri, entry.uri)
                continue
            if entry.kind is EntryKind.BINARY:
                self._visit(entry, self._import_binary)
            elif entry.path in self._claimed:
                logger.debug("Already imported with its binary: %s", entry.path)
            else:
                self._visit(entry, self._import_description)

        if not self.output.quiet:
            self._display_summary()
        return self.stats

    def _scan(self) -> list[MirrorFile]:
        scanner = MirrorScanner(self.codec)
        if self.output.quiet:
            return scanner.scan()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            task = progress.add_task("Scanning mirror...", total=None)
            entries = scanner.scan()
            progress.update(task, description=f"Found {len(entries)} file(s)")
        return entries

    def _visit(self, entry: MirrorFile, action: Callable[[MirrorFile], Any]) -> None:
        """Run an import step, containing failures local to this entry."""
        try:
            action(entry)
        except TransferStatusError as e:
            self._handle_status_error(e)
        except (TransportError, DescriptionParseError) as e:
            self.stats["errors"] += 1
            logger.warning("Error importing %s: %s", entry.path, e)
            self.output.warning(f"Skipping {entry.path}: {e}")

    def _import_binary(self, entry: MirrorFile) -> None:
        content = _read(entry.path)
        content_type = self._recorded_mime_type(entry) or detect_mime_type(entry.path)
        logger.info("Importing binary %s (%s)", entry.path, content_type)

        response = self.client.put(entry.uri, content, content_type)
        self._check(response)
        self.stats["binaries"] += 1
        self.stats["bytes"] += len(content)

        links = response.links(REL_DESCRIBEDBY)
        if not links:
            logger.warning("No description link returned for binary %s", entry.uri)
            return

        description_uri = links[0]
        description_file = self.codec.file_for_description(description_uri)
        self._claimed.add(description_file)
        if not description_file.is_file():
            logger.warning(
                "No description file %s for binary %s", description_file, entry.uri
            )
            return
        self._put_description(description_uri, _read(description_file))

    def _recorded_mime_type(self, binary: MirrorFile) -> Optional[str]:
        """Mime type stored for a binary in a description below its URI."""
        for entry in self._descriptions:
            if not is_within(entry.uri, binary.uri):
                continue
            try:
                mime_type = self.parser.mime_type(
                    _read(entry.path), self.config.rdf_language, entry.uri, binary.uri
                )
            except (TransportError, DescriptionParseError) as e:
                logger.warning("Unable to read mime type from %s: %s", entry.path, e)
                continue
            if mime_type:
                return mime_type
        return None

    def _import_description(self, entry: MirrorFile) -> None:
        content = _read(entry.path)
        if self.parser.describes_binary(content, self.config.rdf_language, entry.uri):
            logger.info(
                "Skipping description of a binary not in the mirror: %s", entry.path
            )
            self.stats["skipped"] += 1
            return

        logger.info("Importing container %s", entry.path)
        self._put_description(entry.uri, content)

    def _put_description(self, uri: str, content: bytes) -> None:
        response = self.client.put(
            uri, content, self.config.rdf_language, lenient=True
        )
        self._check(response)
        self.stats["descriptions"] += 1
        self.stats["bytes"] += len(content)
        logger.info("Imported %s", uri)

    def _display_summary(self) -> None:
        self.output.print_summary(
            "Import Complete",
            [
                ("Descriptions", str(self.stats["descriptions"])),
                ("Binaries", str(self.stats["binaries"])),
                ("Size", format_size(self.stats["bytes"])),
                ("Skipped", str(self.stats["skipped"])),
                ("Errors", str(self.stats["errors"] + self.stats["failures"])),
            ],
        )
