"""Export of a repository resource tree to the local mirror."""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn

from ..api import LdpResponse
from ..exceptions import DescriptionParseError, TransferStatusError, TransportError
from ..resource import ResourceKind, classify_resource
from ..utils import REL_DESCRIBEDBY, REL_TYPE, format_size
from .base import TransferProcess

logger = logging.getLogger(__name__)


class Exporter(TransferProcess):
    """Walks a resource tree depth-first and writes it to the mirror.

    Containers are written as descriptions in the configured RDF language and
    their ``ldp:contains`` children are visited after the description file is
    on disk. Binaries are written verbatim to the binary root (or skipped in
    metadata-only mode); each written resource's ``describedby`` links are
    exported as descriptions.

    Examples:
        >>> exporter = Exporter(client, config)
        >>> stats = exporter.export("http://localhost:8080/rest/1")
        >>> print(f"Wrote {stats['descriptions']} description(s)")
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def run(self) -> dict:
        """Export the configured resource."""
        return self.export(self.config.resource)

    def export(self, uri: str) -> dict:
        """Export a resource and everything it contains.

        Args:
            uri: Root URI of the tree to export

        Returns:
            Dictionary with export statistics

        Raises:
            TransferStatusError: On a status failure, unless the run is
                configured to continue on resource errors
        """
        logger.info("Running exporter for %s", uri)
        if not self.output.quiet:
            self.output.info(f"Exporting: {uri}")
            if self.config.metadata_only:
                self.output.info("Metadata only: binaries will not be exported")

        if self.output.quiet:
            self._export_resource(uri)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                transient=True,
            ) as progress:
                self._progress = progress
                self._task = progress.add_task("Exporting...", total=None)
                try:
                    self._export_resource(uri)
                finally:
                    self._progress = None
            self._display_summary()

        return self.stats

    def _visit(self, uri: str, action: Callable[[str], Any]) -> None:
        """Run an export step, containing failures local to this resource."""
        if self._progress is not None:
            self._progress.update(self._task, description=f"Exporting {uri}")
        try:
            action(uri)
        except TransferStatusError as e:
            self._handle_status_error(e)
        except (TransportError, DescriptionParseError) as e:
            self.stats["errors"] += 1
            logger.warning("Error exporting %s: %s", uri, e)
            self.output.warning(f"Skipping {uri}: {e}")

    def _export_resource(self, uri: str) -> None:
        self._visit(uri, self._export_classified)

    def _export_classified(self, uri: str) -> None:
        response = self.client.head(uri)
        self._check(response)

        kind = classify_resource(response.links(REL_TYPE))
        if kind is ResourceKind.BINARY:
            self._export_binary(uri)
        elif kind is ResourceKind.CONTAINER:
            self._export_container(uri)
        else:
            logger.warning(
                "Resource is neither a container nor a binary, skipping: %s", uri
            )
            self.stats["skipped"] += 1

    def _export_binary(self, uri: str) -> None:
        file = self.codec.file_for_binary(uri)
        if file is None:
            logger.info("Skipping binary %s (no binary directory)", uri)
            self.stats["skipped"] += 1
            return

        response = self.client.get(uri)
        self._check(response)
        logger.info("Exporting binary: %s", uri)
        self.write_response(response, file)
        self.stats["binaries"] += 1
        self._export_described_by(response)

    def _export_container(self, uri: str) -> None:
        file = self._export_description(uri)
        self._export_members(uri, file)

    def _export_description(self, uri: str) -> Path:
        file = self.codec.file_for_description(uri)
        response = self.client.get(uri, accept=self.config.rdf_language)
        self._check(response)
        logger.info("Exporting description: %s", uri)
        self.write_response(response, file)
        self.stats["descriptions"] += 1
        self._export_described_by(response)
        return file

    def _export_described_by(self, response: LdpResponse) -> None:
        for description_uri in response.links(REL_DESCRIBEDBY):
            self._visit(description_uri, self._export_description)

    def _export_members(self, uri: str, file: Path) -> None:
        try:
            content = file.read_bytes()
        except OSError as e:
            raise TransportError(f"Unable to read {file}: {e}") from e

        children = self.parser.contained(content, self.config.rdf_language, uri)
        for child in sorted(children):
            self._export_resource(child)

    def write_response(self, response: LdpResponse, file: Path) -> None:
        """Write a response body verbatim, creating parent directories.

        Args:
            response: Successful repository response
            file: Destination in the mirror; overwritten if it exists

        Raises:
            TransportError: If the file cannot be written
        """
        try:
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_bytes(response.content)
        except OSError as e:
            raise TransportError(f"Unable to write {file}: {e}") from e
        self.stats["bytes"] += len(response.content)
        logger.info("Exported %s to %s", response.url, file.absolute())

    def _display_summary(self) -> None:
        self.output.print_summary(
            "Export Complete",
            [
                ("Descriptions", str(self.stats["descriptions"])),
                ("Binaries", str(self.stats["binaries"])),
                ("Size", format_size(self.stats["bytes"])),
                ("Skipped", str(self.stats["skipped"])),
                ("Errors", str(self.stats["errors"] + self.stats["failures"])),
            ],
        )
