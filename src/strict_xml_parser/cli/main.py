"""Main CLI entry point for the strict-xml command-line tool.

Parses XML files (or a built-in sample document) and prints the document
outline and inner text, or a JSON rendering of the tree.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from strict_xml_parser import StrictXMLParser, __version__
from strict_xml_parser.shared.config import (
    VALID_OUTPUT_FORMATS,
    ConfigError,
    ParserConfig,
)
from strict_xml_parser.shared.logging import configure_logging, get_logger
from strict_xml_parser.tools.profiling import ParseProfiler
from strict_xml_parser.tree.node import Document

SAMPLE_LABEL = "<sample>"

SAMPLE_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<!--Comment stest stes ets etest -->
<node>
<!--Comment stest stes ets etest -->
    <test value="test">TEST<![CDATA[<ads> Scripting]]>TEST</test>
    <value>
        text before test tag&#160;&lt;&#x2663;
        <test value='"&apos;test"'/>
        text after test tag
    </value>
</node>
"""


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig.default()
        self.output_format = self.parser_config.output.default_output_format
        self.show_inner_text = self.parser_config.output.show_inner_text
        self.profile = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognized keys are ``preset`` (``default``, ``diagnostic`` or
        ``quiet``), ``parser`` (a serialized :class:`ParserConfig`),
        ``output_format``, ``show_inner_text`` and ``profile``. A file that
        cannot be read or validated leaves the defaults in place and prints a
        warning.
        """
        config = cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ConfigError("Configuration file must hold a JSON object")

            preset = data.get("preset")
            if preset is not None:
                if preset not in _PRESETS:
                    raise ConfigError(f"Unknown preset: {preset}")
                config.parser_config = _PRESETS[preset]()
            if "parser" in data:
                config.parser_config = ParserConfig.from_dict(data["parser"])

            output = config.parser_config.output
            config.output_format = data.get("output_format", output.default_output_format)
            config.show_inner_text = bool(data.get("show_inner_text", output.show_inner_text))
            config.profile = bool(data.get("profile", config.profile))

            if config.output_format not in VALID_OUTPUT_FORMATS:
                raise ConfigError(f"Unknown output format: {config.output_format}")

        except (OSError, ValueError, ConfigError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
            return cls()

        return config


_PRESETS = {
    "default": ParserConfig.default,
    "diagnostic": ParserConfig.diagnostic,
    "quiet": ParserConfig.quiet,
}


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="strict-xml",
        description="Strict XML parser reporting the first well-formedness violation"
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse XML files")
    parse_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="XML files to parse (default: a built-in sample document)"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=VALID_OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)"
    )
    parse_parser.add_argument(
        "--no-inner-text",
        action="store_true",
        help="Do not print the inner text after the document outline"
    )
    parse_parser.add_argument(
        "--profile",
        action="store_true",
        help="Report parse time and memory usage on stderr"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def render_text(document: Document, show_inner_text: bool = True) -> str:
    """Document outline, then a blank line and the root's inner text."""
    output = document.description()
    if show_inner_text:
        output += "\n" + document.inner_text()
    return output


def render_json(document: Document, indent: int = 2) -> str:
    """JSON rendering of the document tree."""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def _logging_level(args: argparse.Namespace, config: CLIConfig) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return config.parser_config.global_.logging_level


def _load_sources(paths: List[Path], encoding: str) -> List[Tuple[str, str]]:
    if not paths:
        return [(SAMPLE_LABEL, SAMPLE_DOCUMENT)]
    return [(str(path), path.read_text(encoding=encoding)) for path in paths]


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    # Load configuration
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)

    # Apply command-line overrides
    if args.format:
        config.output_format = args.format
    if args.no_inner_text:
        config.show_inner_text = False
    if args.profile:
        config.profile = True

    configure_logging(_logging_level(args, config))
    logger = get_logger(__name__, None, "cli")

    try:
        sources = _load_sources(args.paths, config.parser_config.api.file_encoding)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser = StrictXMLParser(config=config.parser_config)
    profiler = ParseProfiler() if config.profile else None
    exit_code = 0

    for label, text in sources:
        if profiler is not None:
            with profiler.measure(label, len(text)) as profile:
                result = parser.try_parse(text)
            profile.record(result)
        else:
            result = parser.try_parse(text)

        if result.error is not None:
            print(f"Error: {result.error.message}", file=sys.stderr)
            exit_code = 1
            continue

        document = result.unwrap()
        if len(sources) > 1:
            print(f"==> {label} <==")
        if config.output_format == "json":
            print(render_json(document, config.parser_config.output.indent))
        else:
            print(render_text(document, config.show_inner_text))

    if profiler is not None:
        for profile in profiler.report().profiles:
            print(
                f"{profile.label}: {profile.elapsed_ms:.3f} ms, "
                f"memory delta {profile.rss_delta} bytes",
                file=sys.stderr
            )

    logger.debug(
        "Parse command finished",
        extra={
            "source_count": len(sources),
            "error_count": parser.error_count,
        }
    )
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to appropriate command handler
    try:
        if args.command == "parse":
            return cmd_parse(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
