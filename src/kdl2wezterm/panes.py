"""Pane tree model and builder for kdl2wezterm."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from kdl2wezterm.document import GenericNode

PANE_NODE = "pane"
ARGS_NODE = "args"

# Receives (depth, pane) for every pane the builder constructs
PaneTrace = Callable[[int, "Pane"], None]


@dataclass
class Pane:
    """A terminal pane declared in the layout document."""

    name: str | None = None
    command: str | None = None
    args: list[str] = field(default_factory=list)
    split_direction: str | None = None  # passed through, never interpreted
    children: list["Pane"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Whether this pane has no nested panes."""
        return not self.children


def _build_children(nodes: Iterable[GenericNode], parent: Pane, depth: int, trace: PaneTrace | None) -> None:
    for node in nodes:
        if node.name != PANE_NODE:
            continue

        pane = Pane(
            name=node.properties.get("name"),
            command=node.properties.get("command"),
            split_direction=node.properties.get("split_direction"),
        )
        if trace is not None:
            trace(depth, pane)

        # args only mean something for a pane that runs a command
        if pane.command:
            args_node = node.find_child(ARGS_NODE)
            if args_node is not None:
                pane.args = list(args_node.values)

        _build_children(node.children_named(PANE_NODE), pane, depth + 1, trace)
        parent.children.append(pane)


def build_pane_tree(nodes: Iterable[GenericNode], trace: PaneTrace | None = None) -> Pane:
    """Build a pane tree from the children of a layout node.

    Args:
        nodes: The layout node's children, in document order.
        trace: Optional callback receiving (depth, pane) per constructed pane.

    Returns:
        A synthetic root pane whose children are the top-level groups.
    """
    root = Pane()
    _build_children(nodes, root, 0, trace)
    return root
