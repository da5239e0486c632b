"""Console output for the grader."""

import os

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

import config
from core.grader import GradeReport

# The report goes to stdout. Tables, warnings and errors go to stderr.
console = Console(highlight=False)
err_console = Console(stderr=True)

def display_report(markdown: str):
    """Prints the Markdown report verbatim."""
    console.print(markdown, markup=False, highlight=False, emoji=False, soft_wrap=True)

def display_error(message: str):
    """Displays an error message in a standard format."""
    err_console.print(Panel(f"[bold red]Error:[/bold red] {message}", title="Error", border_style="red"))

def display_warning(message: str):
    """Displays a warning message."""
    err_console.print(f"[yellow]Warning:[/yellow] {message}")

def display_score_table(report: GradeReport):
    """Displays category scores and the grand total as a table.

    Args:
        report: The graded report.
    """
    table = Table(title="Grade Summary", show_header=True, header_style="bold magenta")
    table.add_column("Section", style="cyan")
    table.add_column("Points", justify="right")
    table.add_column("Max", justify="right", style="dim")

    credit = report.credit
    table.add_row("Submission", str(credit.points), str(credit.max_points))
    for task in report.tasks:
        for category, score in task.categories.items():
            style = "green" if score.points == score.max_points else "yellow"
            table.add_row(f"Task {task.task} {category}", f"[{style}]{score.points}[/{style}]", str(score.max_points))
        table.add_row(f"[bold]Task {task.task} total[/bold]", str(task.total), str(task.max_points))
    table.add_row("[bold]Grand total[/bold]", f"[bold]{report.grand_total}[/bold]", str(report.grand_max))

    err_console.print(table)
    failed = len(report.deductions)
    if failed:
        err_console.print(f"{failed} check(s) not satisfied. See {os.path.join(config.OUTPUT_DIR, config.REPORT_MD_FILE)} for details.")
