"""Shared fixtures for kdl2wezterm tests."""

import io
from pathlib import Path

import pytest
from rich.console import Console

SAMPLE_LAYOUT = """
layout {
    pane {
        pane name="x" command="ssh" {
            args "-p" "22" "host"
        }
        pane name="y" command="htop"
    }
    pane name="main"
}
"""


@pytest.fixture
def capture_console() -> tuple[Console, io.StringIO]:
    """A console writing plain text into a buffer."""
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config at a temp dir and run from an empty project dir."""
    config_home = tmp_path / "xdg"
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.chdir(project_dir)
    return project_dir


@pytest.fixture
def sample_layout() -> str:
    """A two-group layout with commands and args."""
    return SAMPLE_LAYOUT
