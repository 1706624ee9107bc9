"""
macrodoc CLI - Reference documentation generator

A command-line tool for building reference documents from annotated macro
files:
1. Extracting the tagged comment blocks of the input file
2. Grouping them into scopes and items
3. Writing one XML document per scope plus a topic index
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from macrodoc.config import GeneratorConfig, load_config
from macrodoc.generator import ReferenceGenerator
from macrodoc.schemas import IncompleteDocItemError

app = typer.Typer(
    name="macrodoc",
    help="Reference documentation generator for annotated macro files",
    add_completion=False,
)

console = Console()


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _resolve_config(
    config_file: Optional[str],
    input_file: Optional[str],
    output_dir: Optional[str],
    location: Optional[str],
    title: Optional[str],
) -> GeneratorConfig:
    return load_config(
        config_file=Path(config_file) if config_file else None,
        overrides={
            "input_file": input_file,
            "output_dir": output_dir,
            "location": location,
            "title": title,
        },
    )


ConfigOption = typer.Option(None, "--config", "-c", help="JSON config file")
InputOption = typer.Option(None, "--input", "-i", help="Annotated macro file (overrides config)")
OutputOption = typer.Option(None, "--output-dir", "-o", help="Output root directory (overrides config)")
LocationOption = typer.Option(None, "--location", help="Location slug, e.g. 'about/drc_ref' (overrides config)")
TitleOption = typer.Option(None, "--title", help="Index title (overrides config)")


@app.command()
def generate(
    config_file: Optional[str] = ConfigOption,
    input_file: Optional[str] = InputOption,
    output_dir: Optional[str] = OutputOption,
    location: Optional[str] = LocationOption,
    title: Optional[str] = TitleOption,
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
):
    """
    Generate all reference documents.

    Every scope document and the index are rewritten on each run.

    Example:
        macrodoc generate \\
            --input src/drc/drc/built-in-macros/drc.lym \\
            --output-dir src/lay/lay/doc \\
            --location about/drc_ref \\
            --title "DRC Reference"
    """
    _setup_logging(verbose)

    try:
        config = _resolve_config(config_file, input_file, output_dir, location, title)

        console.print(Panel.fit(
            f"[bold cyan]{config.title}[/bold cyan]\n\n"
            f"Input: [yellow]{config.input_file}[/yellow]\n"
            f"Output: [yellow]{config.output_dir}[/yellow]\n"
            f"Location: [yellow]{config.location}[/yellow]"
        ))

        generator = ReferenceGenerator(config, command_line=" ".join(sys.argv))
        result = generator.generate()

    except IncompleteDocItemError as e:
        console.print(f"\n[red]❌ Authoring error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except (OSError, ValueError) as e:
        console.print(f"\n[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for generated in result.files:
        console.print(f"---> [cyan]{generated.path}[/cyan] written.")

    summary_table = Table(show_header=True, header_style="bold cyan")
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")

    summary_table.add_row("Scopes", str(result.total_scopes))
    summary_table.add_row("Items", str(result.total_items))
    summary_table.add_row("Files Written", str(len(result.files)))
    summary_table.add_row("Dropped Blocks", str(result.dropped_blocks))

    console.print()
    console.print(summary_table)
    console.print("\n[bold green]✅ Generation Complete![/bold green]")


@app.command()
def inspect(
    config_file: Optional[str] = ConfigOption,
    input_file: Optional[str] = InputOption,
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
):
    """
    List the scopes and items found in the input file without writing anything.
    """
    _setup_logging(verbose)

    try:
        config = _resolve_config(config_file, input_file, None, None, None)
        collector = ReferenceGenerator(config, command_line="").collect()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not collector.scopes:
        console.print("[yellow]No scopes found.[/yellow]")
        return

    table = Table(title=f"Scopes in {config.input_file}", show_header=True, header_style="bold cyan")
    table.add_column("Scope", style="cyan")
    table.add_column("Brief")
    table.add_column("Items", justify="right")
    table.add_column("Names")

    for name, scope in collector.sorted_scopes():
        item_names = ", ".join(key for key, _ in scope.sorted_items())
        table.add_row(
            escape(name) if name else "[red]<missing @name>[/red]",
            escape(scope.brief or ""),
            str(len(scope.items)),
            escape(item_names)
        )

    console.print(table)


@app.command("show-config")
def show_config(
    config_file: Optional[str] = ConfigOption,
    input_file: Optional[str] = InputOption,
    output_dir: Optional[str] = OutputOption,
    location: Optional[str] = LocationOption,
    title: Optional[str] = TitleOption,
):
    """Print the effective configuration as JSON."""
    try:
        config = _resolve_config(config_file, input_file, output_dir, location, title)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print_json(config.model_dump_json())


if __name__ == "__main__":
    app()
