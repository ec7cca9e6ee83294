# src/helmschema/cli/formatter.py
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from helmschema.core.models import Diagnostic, SchemaNode, Severity
from helmschema.rules.practices import SEVERITY_ORDER, count_by_severity

# Initialize the Rich console for high-quality terminal output
console = Console()

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


class ReportFormatter:
    """
    ReportFormatter: renders generated schemas and best-practices findings.
    """

    def __init__(self, out: Console = None):
        self.console = out or console

    def display_schema(self, schema: SchemaNode, title: str = "values.schema.json"):
        """Shows the rendered schema as highlighted JSON (used by --dry-run)."""
        syntax = Syntax(schema.to_json(), "json", theme="monokai", line_numbers=True)
        self.console.print(Panel(syntax, title=f"Preview: {title}", border_style="green"))

    def print_diagnostics(self, diagnostics: List[Diagnostic]):
        """
        Grouped findings table: errors, then warnings, then info,
        each group in the order the linter found them.
        """
        if not diagnostics:
            self.console.print("[bold green]✅ No validation issues found.[/bold green]")
            return

        table = Table(title="Helm Best Practices Validation", show_header=True, header_style="bold magenta")
        table.add_column("Severity")
        table.add_column("Path", style="dim")
        table.add_column("Message")

        for severity in SEVERITY_ORDER:
            style = SEVERITY_STYLES[severity]
            for d in diagnostics:
                if d.severity == severity:
                    table.add_row(f"[{style}]{severity.value.upper()}[/{style}]", escape(d.path), escape(d.message))

        self.console.print(table)

        counts = count_by_severity(diagnostics)
        self.console.print(Panel(
            f"[bold white]Found {len(diagnostics)} issues[/bold white]\n"
            f"Errors:   [red]{counts[Severity.ERROR]}[/red]\n"
            f"Warnings: [yellow]{counts[Severity.WARNING]}[/yellow]\n"
            f"Info:     [cyan]{counts[Severity.INFO]}[/cyan]",
            border_style="dim"
        ))
