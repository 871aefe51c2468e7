"""CLI entry point for kdl2wezterm."""

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from kdl2wezterm import __version__
from kdl2wezterm.config import Config, display_config_warnings, load_config, save_config
from kdl2wezterm.generator import describe_pane, generate_config
from kdl2wezterm.panes import Pane
from kdl2wezterm.xdg_paths import ensure_directories, get_config_file_path

app = typer.Typer(
    name="kdl2wezterm",
    help="Generate a wezterm.lua startup script from a KDL pane layout.",
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kdl2wezterm {__version__}")
        raise typer.Exit()


def _print_trace(depth: int, pane: Pane) -> None:
    console.print(f"[dim]{depth}: {escape(describe_pane(pane))}[/]")


def _init_config() -> None:
    ensure_directories()
    config_file = get_config_file_path()

    if config_file.exists():
        err_console.print(f"[yellow]Config file already exists:[/] {config_file}")
        raise typer.Exit(1)

    save_config(Config(), config_file)
    console.print(f"[green]✓[/] Created config file: {config_file}")


@app.command()
def main(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="KDL layout file (default: layout.kdl)."),
    ] = None,
    output_path: Annotated[
        Path | None,
        typer.Argument(help="Lua script to write (default: wezterm.lua)."),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Tab and window title."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-C", help="Config file path."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Print the script instead of writing it."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-D", help="Print every pane as it is parsed."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with error on config warnings or unusable layouts."),
    ] = False,
    dump_config: Annotated[
        bool,
        typer.Option("--dump-config", help="Output current configuration."),
    ] = False,
    init_config: Annotated[
        bool,
        typer.Option("--init-config", help="Create default configuration file."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version."),
    ] = None,
) -> None:
    """Convert a KDL layout into a WezTerm gui-startup script."""
    if init_config:
        _init_config()
        return

    config, config_warnings = load_config(config_path, project_dir=Path.cwd(), strict=strict)

    if config_warnings:
        display_config_warnings(config_warnings, err_console)
        if strict:
            raise typer.Exit(1)

    if title is not None:
        config = config.model_copy(update={"title": title})

    if dump_config:
        console.print(yaml.dump(config.model_dump(), default_flow_style=False), markup=False)
        raise typer.Exit()

    effective_input = input_path or Path(config.default_input)
    effective_output = output_path or Path(config.default_output)

    if debug:
        console.print(f"[dim]Config file: {get_config_file_path()}[/]")
        console.print(f"[dim]Input: {effective_input}[/]")
        console.print(f"[dim]Output: {effective_output}[/]")

    try:
        result = generate_config(
            effective_input,
            effective_output,
            config=config,
            console=console,
            err_console=err_console,
            trace=_print_trace if debug else None,
            dry_run=dry_run,
        )
    except OSError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None

    if result is None:
        if strict:
            raise typer.Exit(1)
        return

    if dry_run:
        console.print(result.script, markup=False, emoji=False, highlight=False, soft_wrap=True, end="")


if __name__ == "__main__":
    app()
