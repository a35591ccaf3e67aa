"""Command-line interface for ldpmirror."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .config import USER_ENV_VAR, TransferConfig, load_config_file
from .exceptions import ConfigurationError, TransferStatusError
from .output import OutputFormatter
from .transfer import create_client, select_strategy
from .utils import DEFAULT_RDF_EXT, DEFAULT_RDF_LANG

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("ldpmirror").setLevel(logging.DEBUG)
    else:
        # Set default logging level to WARNING to suppress debug/info messages
        logging.basicConfig(level=logging.WARNING)


def build_config(
    config_file: Optional[Path], cli_options: dict[str, Any]
) -> TransferConfig:
    """Merge config file values with command-line values.

    Command-line values win over values from the config file.

    Args:
        config_file: Optional YAML config file
        cli_options: Option values from the command line (None when not given)

    Returns:
        Validated TransferConfig

    Raises:
        ConfigurationError: If the merged options are invalid
    """
    options: dict[str, Any] = load_config_file(config_file) if config_file else {}
    continue_on_error = bool(cli_options.pop("continue_on_error", False))
    for key, value in cli_options.items():
        if value is not None:
            options[key] = value
    if continue_on_error:
        options["continue_on_error"] = True
    return TransferConfig.from_options(**options)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--mode",
    "-m",
    type=click.Choice(["import", "export"], case_sensitive=False),
    help="Mode: import or export",
)
@click.option("--resource", "-r", help="Resource (URI) to import/export")
@click.option("--desc-dir", "-d", help="Directory to store RDF descriptions")
@click.option(
    "--bin-dir",
    "-b",
    help="Directory to store binaries (omit to transfer metadata only)",
)
@click.option(
    "--rdf-ext", "-x", help=f"RDF filename extension (default: {DEFAULT_RDF_EXT})"
)
@click.option(
    "--rdf-lang", "-l", help=f"RDF language (default: {DEFAULT_RDF_LANG})"
)
@click.option(
    "--source",
    "-s",
    help="URI the mirror was exported from, when importing to another location",
)
@click.option(
    "--user",
    "-u",
    envvar=USER_ENV_VAR,
    help="username:password for repository basic authentication",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a YAML config file",
)
@click.option(
    "--continue-on-error",
    is_flag=True,
    help="Log status failures of single resources and keep going",
)
@click.option("--retries", type=int, help="Retries on network errors (default: 3)")
@click.option("--timeout", type=float, help="Request timeout in seconds")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", "json_output", is_flag=True, help="Output summary as JSON")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.pass_context
def main(
    ctx: Any,
    mode: Optional[str],
    resource: Optional[str],
    desc_dir: Optional[str],
    bin_dir: Optional[str],
    rdf_ext: Optional[str],
    rdf_lang: Optional[str],
    source: Optional[str],
    user: Optional[str],
    config_file: Optional[Path],
    continue_on_error: bool,
    retries: Optional[int],
    timeout: Optional[float],
    quiet: bool,
    json_output: bool,
    verbose: bool,
) -> None:
    """ldpmirror - Import and export LDP resource trees to and from files."""
    _configure_logging(verbose)
    out = OutputFormatter(json_output=json_output, quiet=quiet)

    try:
        config = build_config(
            config_file,
            {
                "mode": mode,
                "resource": resource,
                "desc_dir": desc_dir,
                "bin_dir": bin_dir,
                "rdf_ext": rdf_ext,
                "rdf_lang": rdf_lang,
                "source": source,
                "user": user,
                "continue_on_error": continue_on_error,
                "retries": retries,
                "timeout": timeout,
            },
        )
    except ConfigurationError as e:
        out.error(str(e))
        click.echo(ctx.get_help(), err=True)
        ctx.exit(2)
        return

    strategy = select_strategy(config)
    client = create_client(config)
    exit_code = 0
    try:
        strategy.run(client, out)
    except ConfigurationError as e:
        out.error(str(e))
        exit_code = 2
    except TransferStatusError as e:
        logger.debug("Transfer aborted", exc_info=True)
        out.error(str(e))
        exit_code = 1
    except KeyboardInterrupt:
        out.warning("Transfer interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT
    finally:
        client.close()

    ctx.exit(exit_code)
