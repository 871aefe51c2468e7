"""Read a KDL layout, build the pane tree and write the wezterm.lua script."""

from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from kdl2wezterm.config import Config
from kdl2wezterm.document import DocumentParseError, MissingLayoutError, find_layout, parse_document
from kdl2wezterm.emitter import render_script
from kdl2wezterm.linearizer import Linearization, NamingContext, linearize
from kdl2wezterm.panes import Pane, PaneTrace, build_pane_tree


@dataclass
class GenerationResult:
    """Outcome of a successful generation run."""

    output_path: Path
    script: str
    plan: Linearization
    written: bool = False
    warnings: list[str] = field(default_factory=list)


def read_text(path: Path) -> str:
    """Read a UTF-8 text file."""
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 text file."""
    path.write_text(content, encoding="utf-8")


def describe_pane(pane: Pane) -> str:
    """Short one-line description of a pane for diagnostics."""
    parts = [f"name={pane.name!r}"]
    if pane.command:
        parts.append(f"command={pane.command!r}")
    if pane.split_direction:
        parts.append(f"split_direction={pane.split_direction!r}")
    return "pane " + " ".join(parts)


def generate_config(
    input_path: Path,
    output_path: Path,
    config: Config | None = None,
    console: Console | None = None,
    err_console: Console | None = None,
    trace: PaneTrace | None = None,
    dry_run: bool = False,
) -> GenerationResult | None:
    """Convert a KDL layout file into a WezTerm startup script.

    Args:
        input_path: KDL layout to read.
        output_path: Where to write the Lua script.
        config: Settings for title and identifier handling. Defaults if None.
        console: Console for progress messages.
        err_console: Console for diagnostics.
        trace: Optional callback receiving every pane as it is built.
        dry_run: If True, build the script without writing it.

    Returns:
        The generation result, or None when the document could not be used.
        No file is written in that case.

    Raises:
        OSError: If the input file cannot be read or the output cannot be written.
    """
    config = config or Config()
    console = console or Console()
    err_console = err_console or Console(stderr=True)

    text = read_text(input_path)

    try:
        layout = find_layout(parse_document(text))
    except DocumentParseError as e:
        err_console.print("[red]Error parsing KDL:[/]")
        for error in e.errors:
            err_console.print(f"  {error}", markup=False)
        return None
    except MissingLayoutError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        return None

    root = build_pane_tree(layout.children, trace=trace)
    plan = linearize(root, NamingContext(dedupe=config.dedupe_identifiers))
    script = render_script(plan, title=config.title)

    result = GenerationResult(output_path=output_path, script=script, plan=plan)
    for pane in plan.ignored:
        result.warnings.append(f"{describe_pane(pane)} is nested too deeply and was not created")

    if config.warn_on_ignored_panes:
        for warning in result.warnings:
            err_console.print(f"[yellow]Warning:[/] {escape(warning)}", highlight=False)

    if dry_run:
        return result

    write_text(output_path, script)
    result.written = True
    console.print(f"Generated WezTerm config at {escape(str(output_path))}")
    return result
