"""KDL document loading for kdl2wezterm.

The layout file is parsed with kdl-py and converted into plain
``GenericNode`` trees so the rest of the package never touches the
parser's own node types.
"""

from dataclasses import dataclass, field

import kdl

LAYOUT_NODE = "layout"


class LayoutError(Exception):
    """Base class for layout document errors."""


class DocumentParseError(LayoutError):
    """The document is not valid KDL."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors) or "KDL parse error")


class MissingLayoutError(LayoutError):
    """The document has no top-level layout node."""

    def __init__(self) -> None:
        super().__init__("No layout node found in KDL file")


@dataclass(frozen=True)
class GenericNode:
    """A parsed document node, independent of the KDL library."""

    name: str
    properties: dict[str, str] = field(default_factory=dict)
    children: tuple["GenericNode", ...] = ()
    values: tuple[str, ...] = ()

    def find_child(self, name: str) -> "GenericNode | None":
        """Return the first direct child with the given name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def children_named(self, name: str) -> list["GenericNode"]:
        """Return all direct children with the given name, in document order."""
        return [child for child in self.children if child.name == name]


def _value_text(value: object) -> str:
    """Render a KDL scalar as the string the layout vocabulary expects.

    kdl-py returns untagged numbers as floats, so integral values are
    written back without the trailing ``.0``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _convert(node: kdl.Node) -> GenericNode:
    return GenericNode(
        name=node.name,
        properties={key: _value_text(value) for key, value in node.props.items()},
        children=tuple(_convert(child) for child in node.nodes),
        values=tuple(_value_text(value) for value in node.args),
    )


def parse_document(text: str) -> list[GenericNode]:
    """Parse KDL text into generic nodes.

    Args:
        text: Raw KDL document text.

    Returns:
        The top-level nodes in document order.

    Raises:
        DocumentParseError: If the text is not valid KDL.
    """
    try:
        document = kdl.parse(text)
    except kdl.ParseError as e:
        raise DocumentParseError([str(e)]) from e
    return [_convert(node) for node in document.nodes]


def find_layout(nodes: list[GenericNode]) -> GenericNode:
    """Find the top-level layout node.

    Raises:
        MissingLayoutError: If no top-level node is named ``layout``.
    """
    for node in nodes:
        if node.name == LAYOUT_NODE:
            return node
    raise MissingLayoutError()
