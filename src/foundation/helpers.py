"""Shorthand accessors for settings and static content."""
from typing import Any, Optional

from .static_content import StaticContent
from .variable import Setting


def get_setting(key: str) -> Any:
    """Retrieve the value of a setting."""
    return Setting.get(key)


def static_content(block: str, area: Optional[str] = None, field: Optional[str] = None) -> Any:
    """Look up a static content block, or one field of one of its areas.

    Args:
        block: Static content block alias
        area: Area alias within the block. If omitted the block itself is returned.
        field: Content field within the area. Defaults to the area's content type.

    Returns:
        The block, the field value, or None when the block or area is unknown.

    Example:
        >>> static_content("footer", "address")
        'Storgata 1, Oslo'
    """
    static = StaticContent.retrieve(block)

    if not area or static is None:
        return static

    item = static.area(area)
    if item is None:
        return None
    return item.get(field)
