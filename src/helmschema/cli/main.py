#!/usr/bin/env python3
"""
HELMSCHEMA CLI
--------------
Primary interface: generates values.schema.json from a chart's values.yaml
and reviews the result against Helm best practices.

Author: HelmSchema Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from helmschema.core.engine import SchemaEngine
from helmschema.core.errors import HelmSchemaError
from helmschema.core.models import SchemaVersion, Severity
from helmschema.core.options import DEFAULT_TITLE, GeneratorOptions
from helmschema.cli.formatter import ReportFormatter

__version__ = "0.1.0"

# Global console for consistent styling across the application
console = Console()


def _schema_version(value: str) -> SchemaVersion:
    try:
        return SchemaVersion.from_tag(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"unsupported schema version '{value}' (use draft-07, 2019-09, 2020-12 or a full URL)"
        )


class HelmSchemaCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self, out: Console = None):
        self.console = out or console
        self.formatter = ReportFormatter(self.console)
        self.parser = argparse.ArgumentParser(
            prog="helmschema",
            description="HelmSchema - JSON Schema generator for Helm chart values",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("--version", action="version", version=f"helmschema v{__version__}")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
        self.parser.add_argument("--debug", action="store_true", help="Enable debug output (comment tracing)")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        # 'generate' subcommand - writes values.schema.json
        gen_parser = subparsers.add_parser("generate", help="📝 Generate values.schema.json")
        self._add_input_args(gen_parser)
        gen_parser.add_argument("-o", "--output", default="values.schema.json", help="Output schema file")
        gen_parser.add_argument("--validate", action="store_true", help="Also report Helm best-practice issues")
        gen_parser.add_argument("--dry-run", action="store_true", help="Print the schema instead of writing it")

        # 'lint' subcommand - read-only review
        lint_parser = subparsers.add_parser("lint", help="🔍 Review values against Helm best practices")
        self._add_input_args(lint_parser)
        lint_parser.add_argument("--strict", action="store_true", help="Exit non-zero when errors are found")

    def _add_input_args(self, sub: argparse.ArgumentParser):
        sub.add_argument("-f", "--file", default="values.yaml", help="Input values.yaml file")
        sub.add_argument("--schema-version", type=_schema_version, default=SchemaVersion.DRAFT_07,
                         help="JSON Schema version to use (default: draft-07)")
        sub.add_argument("--title", default=DEFAULT_TITLE, help="Schema title")
        sub.add_argument("--description", default="", help="Schema description")
        sub.add_argument("--require-all", action="store_true", help="Make all non-null properties required")
        sub.add_argument("--include-examples", action=argparse.BooleanOptionalAction, default=True,
                         help="Include examples from values")
        sub.add_argument("--extract-descriptions", action=argparse.BooleanOptionalAction, default=True,
                         help="Extract descriptions from comments")

    def _options_from(self, args: argparse.Namespace) -> GeneratorOptions:
        return GeneratorOptions(
            schema_version=args.schema_version,
            title=args.title,
            description=args.description,
            require_by_default=args.require_all,
            include_examples=args.include_examples,
            extract_descriptions=args.extract_descriptions,
            debug=args.debug,
        )

    def print_header(self, subtitle: str):
        self.console.print(Panel.fit(
            f"[bold cyan]HelmSchema v{__version__}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _run_generate(self, args: argparse.Namespace) -> int:
        engine = SchemaEngine(self._options_from(args))
        report = engine.generate_file(args.file, args.output, validate=args.validate, dry_run=args.dry_run)

        if args.dry_run:
            self.formatter.display_schema(report["schema"], title=args.output)
        else:
            self.console.print(f"[bold green]✅ Schema written to[/bold green] {report['output']}")

        if args.validate:
            self.formatter.print_diagnostics(report["diagnostics"])
        return 0

    def _run_lint(self, args: argparse.Namespace) -> int:
        engine = SchemaEngine(self._options_from(args))
        source_path = engine.validate_path(args.file)
        if not source_path.exists():
            raise FileNotFoundError(f"input file not found: {source_path}")

        schema = engine.generate_from_yaml(source_path.read_bytes())
        diagnostics = engine.lint(schema)
        self.formatter.print_diagnostics(diagnostics)

        if args.strict and any(d.severity == Severity.ERROR for d in diagnostics):
            return 1
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        args = self.parser.parse_args(argv)
        configure_logging(args.verbose, args.debug)

        if args.command is None:
            self.print_header("Helm Values Schema Generator")
            self.parser.print_help()
            return 0

        try:
            if args.command == "generate":
                return self._run_generate(args)
            return self._run_lint(args)
        except (HelmSchemaError, OSError) as e:
            self.console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1


def configure_logging(verbose: bool = False, debug: bool = False):
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("helmschema").setLevel(level)


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(HelmSchemaCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
