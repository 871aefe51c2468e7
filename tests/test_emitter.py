"""Tests for kdl2wezterm.emitter module."""

from kdl2wezterm.emitter import emit, render_split
from kdl2wezterm.linearizer import NamingContext, SplitDirection, SplitStep
from kdl2wezterm.panes import Pane


def _layout(*groups: Pane) -> Pane:
    return Pane(children=[*groups, Pane(name="main")])


class TestRenderSplit:
    """Tests for render_split function."""

    def test_without_command(self) -> None:
        """Should omit args when the pane has no command."""
        step = SplitStep(parent="pane", identifier="pane_a", direction=SplitDirection.BOTTOM, pane=Pane(name="a"))
        assert render_split(step) == (
            "  -- we create a new horizontal pane\n"
            "  local pane_a = pane:split {\n"
            "    direction = 'Bottom'\n"
            "  }\n"
        )

    def test_command_only(self) -> None:
        """Should emit the command alone when there are no args."""
        pane = Pane(name="top", command="htop")
        step = SplitStep(parent="pane_a", identifier="pane_top", direction=SplitDirection.RIGHT, pane=pane)
        text = render_split(step)
        assert "    args = {'htop'},\n" in text
        assert "  local pane_top = pane_a:split {\n" in text
        assert "    direction = 'Right'\n" in text

    def test_command_with_args(self) -> None:
        """Should emit the command followed by its quoted args."""
        pane = Pane(name="remote", command="ssh", args=["-p", "22", "host"])
        step = SplitStep(parent="pane", identifier="pane_remote", direction=SplitDirection.BOTTOM, pane=pane)
        assert "    args = {'ssh', '-p', '22', 'host'},\n" in render_split(step)

    def test_args_escaped(self) -> None:
        """Should escape quotes inside arguments."""
        pane = Pane(command="echo", args=["it's"])
        step = SplitStep(parent="pane", identifier="pane_unnamed", direction=SplitDirection.BOTTOM, pane=pane)
        assert "args = {'echo', 'it\\'s'}," in render_split(step)


class TestEmit:
    """Tests for emit function."""

    def test_prologue_and_epilogue(self) -> None:
        """Should wrap the body in the gui-startup handler and config object."""
        script = emit(Pane())
        assert script.startswith("local wezterm = require 'wezterm'\nlocal mux = wezterm.mux\n")
        assert "wezterm.on('gui-startup', function(cmd)" in script
        assert "cwd = cmd.args[1]" in script
        assert "tab:set_title 'dgame'" in script
        assert "window:set_title 'dgame'" in script
        assert "wezterm.log_warn(cmd.args[1])" in script
        assert "config.prefer_egl=true" in script
        assert script.endswith("return config\n")

    def test_custom_title(self) -> None:
        """Should use the given title for tab and window."""
        script = emit(Pane(), title="work")
        assert "tab:set_title 'work'" in script
        assert "window:set_title 'work'" in script

    def test_single_group_has_no_splits(self) -> None:
        """Should emit no split statements for a single group."""
        root = Pane(children=[Pane(name="a", children=[Pane(name="b"), Pane(name="c")])])
        assert ":split {" not in emit(root)

    def test_two_groups_order(self) -> None:
        """Should emit pane_y from the base pane, then pane_x from pane_y."""
        root = _layout(Pane(children=[Pane(name="x"), Pane(name="y")]))
        script = emit(root)
        assert script.count(":split {") == 2
        first = script.index("local pane_y = pane:split {")
        second = script.index("local pane_x = pane_y:split {")
        assert first < second

    def test_splits_inside_handler(self) -> None:
        """Should place split statements before the handler closes."""
        script = emit(_layout(Pane(children=[Pane(name="x")])))
        assert script.index("local pane_x") < script.index("end)")
        assert script.index("wezterm.log_warn") < script.index("local pane_x")

    def test_naming_context(self) -> None:
        """Should honor the given naming context."""
        root = _layout(Pane(children=[Pane(name="a"), Pane(name="a")]))
        script = emit(root, naming=NamingContext(dedupe=True))
        assert "local pane_a = pane:split {" in script
        assert "local pane_a_2 = pane_a:split {" in script
