"""Import and export of resource trees."""

from .exporter import Exporter
from .importer import Importer
from .scanner import EntryKind, MirrorFile, MirrorScanner
from .strategy import (
    ExportStrategy,
    ImportStrategy,
    TransferStrategy,
    create_client,
    select_strategy,
)

__all__ = [
    "Exporter",
    "Importer",
    "EntryKind",
    "MirrorFile",
    "MirrorScanner",
    "ExportStrategy",
    "ImportStrategy",
    "TransferStrategy",
    "create_client",
    "select_strategy",
]
