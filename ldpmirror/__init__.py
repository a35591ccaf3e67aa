"""ldpmirror - mirror LDP resource trees to the filesystem and back."""

from .api import LdpClient, LdpResponse
from .config import TransferConfig, TransferMode
from .exceptions import (
    AuthenticationRequiredError,
    AuthorizationDeniedError,
    ConfigurationError,
    DescriptionParseError,
    LdpMirrorError,
    ResourceNotFoundError,
    TransferFailedError,
    TransferStatusError,
    TransportError,
)
from .paths import PathCodec, decode_path, encode_path
from .resource import ResourceKind, classify_resource
from .status import StatusOutcome, check_status, classify_status

__all__ = [
    "LdpClient",
    "LdpResponse",
    "TransferConfig",
    "TransferMode",
    "AuthenticationRequiredError",
    "AuthorizationDeniedError",
    "ConfigurationError",
    "DescriptionParseError",
    "LdpMirrorError",
    "ResourceNotFoundError",
    "TransferFailedError",
    "TransferStatusError",
    "TransportError",
    "PathCodec",
    "decode_path",
    "encode_path",
    "ResourceKind",
    "classify_resource",
    "StatusOutcome",
    "check_status",
    "classify_status",
]
