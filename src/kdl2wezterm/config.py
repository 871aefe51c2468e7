"""Configuration management for kdl2wezterm."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from kdl2wezterm.xdg_paths import get_config_file_path

PROJECT_CONFIG_NAME = ".kdl2wezterm.yaml"
PROJECT_LOCAL_CONFIG_NAME = ".kdl2wezterm.yaml.local"


class Config(BaseModel):
    """Configuration settings for kdl2wezterm."""

    default_input: str = "layout.kdl"
    default_output: str = "wezterm.lua"
    title: str = "dgame"  # tab and window title set by the startup hook
    dedupe_identifiers: bool = False  # suffix repeated pane identifiers with _2, _3, ...
    warn_on_ignored_panes: bool = True

    # When true in a project config, ignore all parent configs (user config)
    ignore_parent_configs: bool = False


@dataclass
class ConfigWarning:
    """A config validation warning."""

    file: str
    field_name: str
    message: str
    value: object = field(default=None, repr=False)


def _load_yaml_file(path: Path) -> tuple[dict[str, object], list[ConfigWarning]]:
    """Load a YAML mapping, returning warnings instead of raising.

    Args:
        path: Path to the YAML file.

    Returns:
        Tuple of (parsed dict, list of warnings). Empty dict on missing/invalid.
    """
    if not path.exists():
        return {}, []
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return {}, [ConfigWarning(file=str(path), field_name="(file)", message=f"YAML parse error: {e}")]
    except OSError as e:
        return {}, [ConfigWarning(file=str(path), field_name="(file)", message=f"File read error: {e}")]
    if not isinstance(raw, dict):
        return {}, []
    return cast(dict[str, object], raw), []


def _config_layers(config_path: Path | None, project_dir: Path | None) -> list[Path]:
    """Config files to apply, lowest precedence first."""
    user_file = config_path or get_config_file_path()
    if not project_dir:
        return [user_file]
    return [user_file, project_dir / PROJECT_CONFIG_NAME, project_dir / PROJECT_LOCAL_CONFIG_NAME]


def _warnings_from(error: ValidationError) -> list[ConfigWarning]:
    return [
        ConfigWarning(
            file="merged config",
            field_name=".".join(str(loc) for loc in detail["loc"]),
            message=detail["msg"],
            value=detail.get("input"),
        )
        for detail in error.errors()
    ]


def load_config(
    config_path: Path | None = None,
    project_dir: Path | None = None,
    strict: bool = False,
) -> tuple[Config, list[ConfigWarning]]:
    """Load configuration with layered merging.

    Loading order (last value wins):
    1. User config (~/.config/kdl2wezterm/config.yaml) - base
    2. Project config (.kdl2wezterm.yaml in project_dir)
    3. Project local config (.kdl2wezterm.yaml.local in project_dir)

    If a project config sets ``ignore_parent_configs: true``, the user config is
    skipped and only project configs are used.

    Args:
        config_path: Optional path to user config file. Uses default if None.
        project_dir: Optional project directory containing project config files.
        strict: If True, fall back to defaults instead of dropping invalid keys.

    Returns:
        Tuple of (loaded Config, list of ConfigWarnings).
    """
    warnings: list[ConfigWarning] = []
    layers: list[dict[str, object]] = []
    for path in _config_layers(config_path, project_dir):
        data, file_warnings = _load_yaml_file(path)
        layers.append(data)
        warnings.extend(file_warnings)

    if any(layer.get("ignore_parent_configs") for layer in layers[1:]):
        layers = layers[1:]

    # Config is flat, so a shallow merge is enough
    merged: dict[str, object] = {}
    for layer in layers:
        merged = {**merged, **layer}

    try:
        return Config.model_validate(merged), warnings
    except ValidationError as e:
        warnings.extend(_warnings_from(e))
        if strict:
            return Config(), warnings
        bad_keys = {str(detail["loc"][0]) for detail in e.errors() if detail["loc"]}

    recovered = {key: value for key, value in merged.items() if key not in bad_keys}
    try:
        return Config.model_validate(recovered), warnings
    except ValidationError:
        return Config(), warnings


def display_config_warnings(warnings: list[ConfigWarning], console: Console) -> None:
    """Show config warnings in a yellow panel, one line per warning."""
    if not warnings:
        return

    lines = []
    for warning in warnings:
        line = Text.assemble(
            (f"  {warning.file}: ", "dim"),
            (warning.field_name, "bold"),
            (f" - {warning.message}", "yellow"),
        )
        if warning.value is not None:
            line.append(f" (got: {warning.value!r})", style="dim")
        lines.append(line)

    console.print(Panel(Text("\n").join(lines), title="[yellow]Config Warnings[/]", border_style="yellow"))


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: The configuration to save.
        config_path: Optional path to config file. Uses default if None.
    """
    path = config_path or get_config_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
