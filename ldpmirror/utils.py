"""Constants and small helpers shared by the transfer code."""

import mimetypes
from pathlib import Path

# =============================================================================
# Vocabulary
# =============================================================================

LDP_NAMESPACE: str = "http://www.w3.org/ns/ldp#"
CONTAINER: str = LDP_NAMESPACE + "Container"
BASIC_CONTAINER: str = LDP_NAMESPACE + "BasicContainer"
DIRECT_CONTAINER: str = LDP_NAMESPACE + "DirectContainer"
INDIRECT_CONTAINER: str = LDP_NAMESPACE + "IndirectContainer"
NON_RDF_SOURCE: str = LDP_NAMESPACE + "NonRDFSource"
CONTAINS: str = LDP_NAMESPACE + "contains"

EBUCORE_NAMESPACE: str = "http://www.ebu.ch/metadata/ontologies/ebucore/ebucore#"
HAS_MIME_TYPE: str = EBUCORE_NAMESPACE + "hasMimeType"

# Link relations consumed from response headers
REL_TYPE: str = "type"
REL_DESCRIBEDBY: str = "describedby"

# Lets a restore re-assert server-managed triples captured during export
PREFER_LENIENT: str = 'handling=lenient; received="minimal"'

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_RDF_EXT: str = ".ttl"
DEFAULT_RDF_LANG: str = "text/turtle"

# Retry configuration for transient network errors
DEFAULT_MAX_RETRIES: int = 3
DEFAULT_RETRY_DELAY: float = 1.0  # seconds
DEFAULT_TIMEOUT: float = 30.0  # seconds


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string (e.g., "1.5 MB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


# =============================================================================
# MIME type detection
# =============================================================================


def detect_mime_type(file_path: Path) -> str:
    """Detect the MIME type of a file.

    Mirror files carry no extension, so content sniffing through python-magic
    is tried first, then the ``mimetypes`` guess.

    Args:
        file_path: Path to the file

    Returns:
        MIME type string (defaults to 'application/octet-stream' if detection fails)
    """
    mime_type = None

    # Try python-magic first for more accurate detection
    try:
        import magic  # type: ignore

        try:
            mime_type = magic.from_file(str(file_path), mime=True)
        except Exception:
            mime_type = None
    except ImportError:
        # libmagic not available on this system
        pass

    if not mime_type:
        mime_type, _ = mimetypes.guess_type(str(file_path))

    if not mime_type:
        mime_type = "application/octet-stream"

    return mime_type
