"""Turn a pane tree into an ordered sequence of WezTerm split operations.

WezTerm creates the first pane itself when the startup hook spawns the
window. Every other pane has to be created by splitting a pane that
already exists, and the splits render bottom-up, so the declared order is
reversed before any split is planned.

Only two levels are walked: top-level groups, and the panes inside each
group. Anything nested deeper is reported in ``Linearization.ignored``.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from kdl2wezterm.panes import Pane
from kdl2wezterm.utils import pane_identifier

T = TypeVar("T")

# Lua variable bound to the pane spawned by the startup hook
BASE_IDENTIFIER = "pane"


class SplitDirection(StrEnum):
    """Direction argument passed to ``pane:split``."""

    BOTTOM = "Bottom"  # first pane of a group, split from the base pane
    RIGHT = "Right"  # following panes, chained from the previous one


@dataclass(frozen=True)
class MainPane:
    """The top-level group WezTerm creates outside the layout.

    It is never split from anything and produces no statement.
    """

    pane: Pane


@dataclass(frozen=True)
class SplitStep:
    """A single ``local <identifier> = <parent>:split {...}`` statement."""

    parent: str
    identifier: str
    direction: SplitDirection
    pane: Pane


@dataclass
class Linearization:
    """Result of planning the splits for a pane tree."""

    main: MainPane | None = None
    steps: list[SplitStep] = field(default_factory=list)
    ignored: list[Pane] = field(default_factory=list)


class NamingContext:
    """Issues Lua identifiers for the panes of a single script.

    Args:
        dedupe: Append ``_2``, ``_3``, ... to identifiers already issued.
    """

    def __init__(self, dedupe: bool = False) -> None:
        self.dedupe = dedupe
        self._issued: set[str] = set()

    def identifier_for(self, pane: Pane, index: int) -> str:
        """Return the identifier for the pane at ``index`` within its group.

        Args:
            pane: The pane to name.
            index: Position of the pane in the group's reversed order.

        Returns:
            ``pane_<name>``, falling back to ``unnamed`` or ``unnamed_<index>``.
        """
        fallback = "unnamed" if index == 0 else f"unnamed_{index}"
        identifier = pane_identifier(pane.name, fallback)
        if self.dedupe:
            candidate = identifier
            suffix = 1
            while candidate in self._issued:
                suffix += 1
                candidate = f"{identifier}_{suffix}"
            identifier = candidate
        self._issued.add(identifier)
        return identifier


def reverse_render_order(items: Sequence[T]) -> list[T]:
    """Convert top-to-bottom declaration order into WezTerm creation order."""
    return list(reversed(items))


def _descendants(pane: Pane) -> list[Pane]:
    found: list[Pane] = []
    for child in pane.children:
        found.append(child)
        found.extend(_descendants(child))
    return found


def linearize(root: Pane, naming: NamingContext | None = None) -> Linearization:
    """Plan the split statements that recreate a pane tree.

    Args:
        root: Synthetic root pane returned by ``build_pane_tree``.
        naming: Identifier context for this script. A fresh one is used if None.

    Returns:
        The main pane marker, the ordered split steps, and the panes skipped
        because they are nested more than two levels deep.
    """
    naming = naming or NamingContext()
    result = Linearization()

    groups = reverse_render_order(root.children)
    if not groups:
        return result

    result.main = MainPane(groups[0])

    for group in groups[1:]:
        parent = BASE_IDENTIFIER
        direction = SplitDirection.BOTTOM
        for index, pane in enumerate(reverse_render_order(group.children)):
            identifier = naming.identifier_for(pane, index)
            result.steps.append(SplitStep(parent=parent, identifier=identifier, direction=direction, pane=pane))
            parent = identifier
            direction = SplitDirection.RIGHT
            result.ignored.extend(_descendants(pane))

    return result
