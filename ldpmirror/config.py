"""Transfer configuration and config file loading."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlsplit

import yaml

from .exceptions import ConfigurationError
from .utils import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RDF_EXT,
    DEFAULT_RDF_LANG,
    DEFAULT_TIMEOUT,
)

logger = logging.getLogger(__name__)

USER_ENV_VAR = "LDPMIRROR_USER"

# Keys accepted in a config file; they match the long command-line options
CONFIG_FILE_KEYS = frozenset(
    {
        "mode",
        "resource",
        "desc_dir",
        "bin_dir",
        "rdf_ext",
        "rdf_lang",
        "source",
        "user",
        "continue_on_error",
        "retries",
        "timeout",
    }
)


class TransferMode(Enum):
    """Direction of a transfer."""

    IMPORT = "import"
    EXPORT = "export"

    @classmethod
    def from_string(cls, value: str) -> "TransferMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Invalid mode: {value!r} (expected 'import' or 'export')"
            ) from None


@dataclass(frozen=True)
class TransferConfig:
    """Settings for one import or export run."""

    mode: TransferMode

    resource: str
    """Root URI of the resource tree to transfer"""

    description_dir: Path
    """Directory holding descriptions"""

    binary_dir: Optional[Path] = None
    """Directory holding binaries; None means metadata-only"""

    rdf_extension: str = DEFAULT_RDF_EXT

    rdf_language: str = DEFAULT_RDF_LANG

    source: Optional[str] = None
    """URI the mirror was exported from, when importing to another base path"""

    user: Optional[str] = None

    password: Optional[str] = None

    continue_on_error: bool = False
    """Contain status failures at the resource instead of aborting the run"""

    max_retries: int = DEFAULT_MAX_RETRIES

    timeout: float = DEFAULT_TIMEOUT

    @property
    def metadata_only(self) -> bool:
        return self.binary_dir is None

    @classmethod
    def from_options(
        cls,
        mode: Optional[str] = None,
        resource: Optional[str] = None,
        desc_dir: Optional[str] = None,
        bin_dir: Optional[str] = None,
        rdf_ext: Optional[str] = None,
        rdf_lang: Optional[str] = None,
        source: Optional[str] = None,
        user: Optional[str] = None,
        continue_on_error: bool = False,
        retries: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> "TransferConfig":
        """Build and validate a configuration from raw option values.

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        if not mode:
            raise ConfigurationError("Missing required option: mode")
        if not resource:
            raise ConfigurationError("Missing required option: resource")
        if not desc_dir:
            raise ConfigurationError("Missing required option: desc_dir")

        transfer_mode = TransferMode.from_string(str(mode))
        _validate_uri(resource, "resource")
        if source:
            _validate_uri(source, "source")

        extension = rdf_ext or DEFAULT_RDF_EXT
        if not extension.startswith("."):
            extension = "." + extension

        username, password = _split_credentials(user)

        return cls(
            mode=transfer_mode,
            resource=resource,
            description_dir=Path(desc_dir),
            binary_dir=Path(bin_dir) if bin_dir else None,
            rdf_extension=extension,
            rdf_language=rdf_lang or DEFAULT_RDF_LANG,
            source=source or None,
            user=username,
            password=password,
            continue_on_error=continue_on_error,
            max_retries=DEFAULT_MAX_RETRIES if retries is None else retries,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
        )


def _validate_uri(value: str, name: str) -> None:
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Invalid {name} URI: {value!r}")


def _split_credentials(
    credentials: Optional[str],
) -> tuple[Optional[str], Optional[str]]:
    """Split "user:password" into its parts."""
    if not credentials:
        return None, None
    if ":" not in credentials:
        return credentials, None
    user, password = credentials.split(":", 1)
    return user, password


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------

# Matches ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


def interpolate_env_vars(value: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` patterns with env values."""

    def _replace(match: re.Match) -> str:
        env_val = os.environ.get(match.group(1))
        if env_val:
            return env_val
        default = match.group(2)
        return default if default is not None else ""

    return _ENV_VAR_PATTERN.sub(_replace, value)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load option values from a YAML config file.

    The file is a mapping whose keys are the long option names with
    underscores, e.g.::

        mode: export
        resource: http://localhost:8080/rest
        desc_dir: /data/rdf
        bin_dir: /data/bin
        user: ${FEDORA_USER}

    Args:
        path: Path to the YAML file

    Returns:
        Option values keyed by option name

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if not path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Unable to read configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    options: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in CONFIG_FILE_KEYS:
            raise ConfigurationError(f"Unknown configuration key {key!r} in {path}")
        options[name] = interpolate_env_vars(value) if isinstance(value, str) else value

    logger.debug("Loaded %d option(s) from %s", len(options), path)
    return options
