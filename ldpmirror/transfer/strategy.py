"""Selection of the transfer to run for a configuration."""

from dataclasses import dataclass
from typing import Optional, Union

from ..api import LdpClient
from ..config import TransferConfig, TransferMode
from ..output import OutputFormatter
from .exporter import Exporter
from .importer import Importer


@dataclass(frozen=True)
class ExportStrategy:
    """Repository to mirror."""

    config: TransferConfig

    def run(self, client: LdpClient, output: Optional[OutputFormatter] = None) -> dict:
        return Exporter(client, self.config, output).export(self.config.resource)


@dataclass(frozen=True)
class ImportStrategy:
    """Mirror to repository."""

    config: TransferConfig

    def run(self, client: LdpClient, output: Optional[OutputFormatter] = None) -> dict:
        return Importer(client, self.config, output).import_(self.config.resource)


TransferStrategy = Union[ExportStrategy, ImportStrategy]


def select_strategy(config: TransferConfig) -> TransferStrategy:
    """Choose the transfer for a configuration.

    Args:
        config: Validated transfer configuration

    Returns:
        ExportStrategy or ImportStrategy
    """
    if config.mode is TransferMode.EXPORT:
        return ExportStrategy(config)
    return ImportStrategy(config)


def create_client(config: TransferConfig) -> LdpClient:
    """Create a repository client carrying the configured credentials."""
    return LdpClient(
        user=config.user,
        password=config.password,
        max_retries=config.max_retries,
        timeout=config.timeout,
    )
