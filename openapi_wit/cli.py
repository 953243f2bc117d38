"""
Command-line interface for the OpenAPI to WIT translator.

Usage:
  openapi-wit petstore.yaml --package-name petstore:api -o wit/
  openapi-wit --url https://example.com/openapi.json
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import GenerationResult, generate_code, get_generator
from .codegen.core.config import ERROR_MODEL_STYLES, GeneratorConfig, load_config
from .logging_config import configure_logging, get_logger
from .utils import DocumentLoaderError, load_document

logger = get_logger(__name__)

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="openapi-wit",
        description="Translate an OpenAPI description into a WIT package",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  openapi-wit petstore.yaml
  openapi-wit petstore.json -o wit/ --package-name petstore:api
  openapi-wit --url https://example.com/openapi.json --strict
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        "source", nargs="?", help="OpenAPI document (JSON or YAML)"
    )
    input_group.add_argument("--url", help="URL to fetch the OpenAPI document from")

    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Output directory for the WIT package (default: stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")

    # Generation options
    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--package-name", metavar="NAME", help="WIT package name (e.g. petstore:api)"
    )
    gen_group.add_argument(
        "--project-name", metavar="NAME", help="Project name, used for the world and file"
    )
    gen_group.add_argument(
        "--error-model",
        choices=ERROR_MODEL_STYLES,
        help="Error model style (only variant is synthesized)",
    )
    gen_group.add_argument(
        "--strict",
        action="store_true",
        help="Reject anyOf schemas and deduplicate fields and enum cases",
    )
    gen_group.add_argument(
        "--no-readme", action="store_true", help="Don't write README.md"
    )
    gen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to the generated WIT",
    )

    # Output verbosity
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Command line arguments, ``sys.argv[1:]`` when None

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        source, document = _load_input(args)
        console.print(f"Loaded: {source}")

        config = _build_config(args)
        generator = get_generator(config)

        with console.status("[green]Generating WIT package..."):
            result = generate_code(generator, document)

        return _output_result(result, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        return 1


def _load_input(args: argparse.Namespace):
    """Load the OpenAPI document from a file or URL."""
    try:
        return load_document(file_path=args.source, url=args.url)
    except FileNotFoundError as e:
        raise CLIError(str(e)) from e
    except DocumentLoaderError as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    config_dict = {}

    if args.package_name:
        config_dict["package_name"] = args.package_name

    if args.project_name:
        config_dict["project_name"] = args.project_name

    if args.error_model:
        config_dict["error_model"] = args.error_model

    if args.strict:
        config_dict["strict_mode"] = True

    if args.no_readme:
        config_dict["generate_readme"] = False

    if args.no_comments:
        config_dict["add_comments"] = False

    if args.output:
        config_dict["output_dir"] = args.output

    try:
        return load_config(custom_config=config_dict, config_file=args.config)
    except Exception as e:
        raise CLIError(f"Configuration error: {e}") from e


def _output_result(result: GenerationResult, args: argparse.Namespace) -> int:
    """Write or display the generated package with rich formatting."""
    if not result.success:
        console.print(f"[red]✗ {result.error_message}[/red]")
        if result.exception is not None:
            console.print(f"[dim]Details: {type(result.exception).__name__}[/dim]")
        return 1

    if args.output:
        written = write_result(result, Path(args.output))
        console.print(
            Panel(
                "\n".join(f"[cyan]{path}[/cyan]" for path in written),
                title="[green]✓ WIT package generated[/green]",
                border_style="green",
            )
        )
    else:
        console.print(Syntax(result.code, "rust", theme="monokai", word_wrap=True))

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    if result.warnings:
        warnings_table = Table(
            title="⚠️  Warnings", box=box.ROUNDED, title_style="bold yellow"
        )
        warnings_table.add_column("Message", style="yellow")
        for warning in result.warnings:
            warnings_table.add_row(warning)
        console.print(warnings_table)

    return 0


def write_result(result: GenerationResult, output_dir: Path) -> List[Path]:
    """
    Write the main WIT file and supporting files into a directory.

    Returns:
        Paths of the written files
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        main_file = output_dir / result.metadata["output_file"]
        main_file.write_text(result.code, encoding="utf-8")
        written = [main_file]

        for file_name, content in result.files.items():
            path = output_dir / file_name
            path.write_text(content, encoding="utf-8")
            written.append(path)
    except OSError as e:
        raise CLIError(f"Failed to write to {output_dir}: {e}") from e

    logger.info("Wrote %d files to %s", len(written), output_dir)
    return written


if __name__ == "__main__":
    raise SystemExit(main())
