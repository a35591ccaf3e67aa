"""Behaviour shared by the exporter and the importer."""

import logging
from typing import Optional

from ..api import LdpClient, LdpResponse
from ..config import TransferConfig
from ..exceptions import TransferStatusError
from ..output import OutputFormatter
from ..paths import PathCodec
from ..rdf import DescriptionParser, RdfDescriptionParser
from ..status import check_status

logger = logging.getLogger(__name__)


class TransferProcess:
    """Base class holding the collaborators of a transfer run."""

    def __init__(
        self,
        client: LdpClient,
        config: TransferConfig,
        output: Optional[OutputFormatter] = None,
        parser: Optional[DescriptionParser] = None,
    ):
        """Initialize the transfer process.

        Args:
            client: Repository client
            config: Transfer configuration
            output: Output formatter for displaying progress/status
            parser: Description parser (rdflib-backed by default)
        """
        self.client = client
        self.config = config
        self.output = output or OutputFormatter()
        self.parser = parser or RdfDescriptionParser()
        self.codec = PathCodec(
            resource_uri=config.resource,
            description_root=config.description_dir,
            extension=config.rdf_extension,
            binary_root=config.binary_dir,
            source_uri=config.source,
        )
        self.stats = self._create_empty_stats()

    def _create_empty_stats(self) -> dict:
        """Create an empty statistics dictionary."""
        return {
            "binaries": 0,
            "descriptions": 0,
            "bytes": 0,
            "skipped": 0,
            "errors": 0,
            "failures": 0,
        }

    def _check(self, response: LdpResponse) -> None:
        """Apply the status mapping to a response."""
        check_status(response.status_code, response.url, self.config.user)

    def _handle_status_error(self, error: TransferStatusError) -> None:
        """Abort the run, or contain the failure when configured to continue."""
        if not self.config.continue_on_error:
            raise error
        self.stats["failures"] += 1
        logger.warning("Status failure for %s: %s", error.uri, error)
        self.output.warning(str(error))
