"""Render a linearized pane layout as a wezterm.lua startup script."""

from kdl2wezterm.linearizer import Linearization, NamingContext, SplitStep, linearize
from kdl2wezterm.panes import Pane
from kdl2wezterm.utils import lua_string

DEFAULT_TITLE = "dgame"

_PROLOGUE = """local wezterm = require 'wezterm'
local mux = wezterm.mux

wezterm.on('gui-startup', function(cmd)
  local tab, pane, window

  tab, pane, window = mux.spawn_window {{
    cwd = cmd.args[1]
  }}
  tab:set_title {title}
  window:set_title {title}

  wezterm.log_warn(cmd.args[1])

"""

_EPILOGUE = """
end)


config = {}

-- fix windows in virtualbox
config.prefer_egl=true

return config
"""


def render_split(step: SplitStep) -> str:
    """Render one split statement.

    Args:
        step: The split to render.

    Returns:
        Lua source for the statement, newline terminated.
    """
    lines = [
        "  -- we create a new horizontal pane",
        f"  local {step.identifier} = {step.parent}:split {{",
    ]
    if step.pane.command:
        args = ", ".join(lua_string(arg) for arg in [step.pane.command, *step.pane.args])
        lines.append(f"    args = {{{args}}},")
    lines.append(f"    direction = '{step.direction}'")
    lines.append("  }")
    return "\n".join(lines) + "\n"


def render_script(plan: Linearization, title: str = DEFAULT_TITLE) -> str:
    """Wrap planned split statements in the startup handler."""
    body = "".join(render_split(step) for step in plan.steps)
    return _PROLOGUE.format(title=lua_string(title)) + body + _EPILOGUE


def emit(root: Pane, title: str = DEFAULT_TITLE, naming: NamingContext | None = None) -> str:
    """Generate the full wezterm.lua script for a pane tree.

    Args:
        root: Synthetic root pane returned by ``build_pane_tree``.
        title: Tab and window title set at startup.
        naming: Identifier context. A fresh one is used if None.

    Returns:
        The script text.
    """
    return render_script(linearize(root, naming), title=title)
