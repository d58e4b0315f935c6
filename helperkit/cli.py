#!/usr/bin/env python3
"""
helperkit CLI Entry Point

Usage:
    helperkit validate-xml schema.xsd document.xml [--fail-fast]
    helperkit copy SOURCE TARGET
    helperkit move SOURCE TARGET
    helperkit clean PATH
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from lxml import etree

from .config import DEFAULT_CONFIG_PATH, Config
from .culture import format_number, set_default_culture
from .error_handler import HelperKitError, handle_error
from .file_utils import clean_directory, copy_directory, count_files, move_directory
from .logging_config import get_logger
from .progress import ProgressBar
from .xml_utils import (
    generate_validation_report,
    load_xml_document,
    load_xml_schema,
    validate_xml_document,
)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="helperkit",
        description="Filesystem and XML helper commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  helperkit validate-xml orders.xsd orders.xml
  helperkit copy build/ backup/build/
  helperkit --quiet move staging/ archive/2024-01/
  helperkit clean tmp/
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to configuration YAML file (default: {DEFAULT_CONFIG_PATH})"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate-xml", help="Validate an XML document against an XSD schema")
    validate.add_argument("schema", type=Path, help="Path to the .xsd schema")
    validate.add_argument("document", type=Path, help="Path to the .xml document")
    validate.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first mismatch instead of reporting every deviation"
    )

    for name, help_text in (("copy", "Copy a directory tree"), ("move", "Move a directory tree")):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("source", type=Path, help="Existing source directory")
        command.add_argument("target", type=Path, help="Target directory (must not exist)")

    clean = subparsers.add_parser("clean", help="Delete the contents of a directory")
    clean.add_argument("path", type=Path, help="Directory to empty")

    return parser


def _validate_xml(args: argparse.Namespace, config: Config) -> int:
    schema = load_xml_schema(args.schema)
    document = load_xml_document(args.document)

    fail_fast = config.xml.fail_fast if args.fail_fast is None else args.fail_fast
    if fail_fast:
        validate_xml_document(document, schema)
        print(f"✓ {args.document} matches {args.schema}")
        return 0

    report = generate_validation_report(document, schema)
    print(etree.tostring(report, pretty_print=True, encoding="unicode"), end="")
    return 0 if report.get("Quantity") == "0" else 1


def _transfer(args: argparse.Namespace, config: Config, show_progress: bool) -> int:
    operation = move_directory if args.command == "move" else copy_directory

    if not show_progress:
        operation(args.source, args.target)
    else:
        total = count_files(args.source)
        label = "Moving" if args.command == "move" else "Copying"
        with ProgressBar(total, bar_width=config.progress.bar_width, label=label) as bar:
            operation(args.source, args.target, on_file_copied=lambda _path: bar.advance())

    print(f"✓ {args.source} -> {args.target}")
    return 0


def _clean(args: argparse.Namespace) -> int:
    removed = clean_directory(args.path)
    print(f"✓ Removed {format_number(removed)} entries from {args.path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config_path = args.config
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH

    config = Config.load(config_path)
    if args.verbose:
        config.logging.level = "DEBUG"
    elif args.quiet:
        config.logging.level = "WARNING"
    config.setup_logging()

    show_progress = config.progress.show_progress and not args.quiet
    logger.debug(f"Running {args.command} (config: {config_path or 'defaults'})")

    try:
        set_default_culture(config.culture.default_culture)

        if args.command == "validate-xml":
            return _validate_xml(args, config)
        if args.command in ("copy", "move"):
            return _transfer(args, config, show_progress)
        return _clean(args)

    except KeyboardInterrupt:
        print("\nCancelled by user")
        return 130

    except (HelperKitError, OSError) as e:
        title, message = handle_error(e, args.command)
        print(f"Error: {title}\n{message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
