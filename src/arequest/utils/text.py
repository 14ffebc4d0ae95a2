r"""String helpers."""

from __future__ import annotations

__all__ = ["is_blank"]


def is_blank(value: str | None) -> bool:
    """Indicate if a string is missing, empty or only whitespace.

    Args:
        value: The string to check.

    Returns:
        ``True`` if the string is blank.

    Example:
        ```pycon
        >>> from arequest.utils.text import is_blank
        >>> is_blank(None), is_blank("  "), is_blank("A")
        (True, True, False)

        ```
    """
    return value is None or not value.strip()
