"""Utility functions for kdl2wezterm."""

import re

IDENTIFIER_PREFIX = "pane_"


def sanitize_identifier(name: str) -> str:
    """Sanitize a pane name into a Lua-safe identifier fragment.

    Args:
        name: The original pane name.

    Returns:
        The name with every character outside [a-zA-Z0-9_] replaced by an underscore, lowercased.
    """
    return re.sub(r"[^a-zA-Z0-9_]", "_", name).lower()


def pane_identifier(name: str | None, fallback: str) -> str:
    """Build the Lua variable name for a pane.

    Args:
        name: The pane name, if any.
        fallback: Name to use when the pane is unnamed.

    Returns:
        Identifier of the form ``pane_<sanitized name>``.
    """
    return IDENTIFIER_PREFIX + sanitize_identifier(name or fallback)


def lua_string(value: str) -> str:
    """Render a value as a single-quoted Lua string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"
