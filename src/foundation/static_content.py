"""
Netflex Static Content.

Static content blocks are global, page-independent content (footers,
contact details, opening hours) edited in the Netflex admin. Each block has
an alias and a list of areas ("globals"); each area holds its content keyed
by content type.
"""
import logging
from typing import Any, List, Optional

from netflex import get_cache, get_client
from .remote_object import RemoteObject

logger = logging.getLogger(__name__)


class GlobalContent(RemoteObject):
    """One area within a static content block.

    Attributes:
        alias: Area alias within its block
        content_type: Default content field of the area (e.g., "text", "image")
        content: Mapping of field name to value
    """

    def get(self, field: Optional[str] = None) -> Any:
        """Return a content field, defaulting to the area's own content type."""
        content = self.content or {}
        return content.get(field or self.content_type)


class StaticContent(RemoteObject):
    """A static content block with its areas."""

    base_path = "foundation/globals"
    cache_key = "statics"

    def get_globals_attribute(self, value: Any) -> List[GlobalContent]:
        return [GlobalContent(item) for item in value or []]

    def area(self, alias: str) -> Optional[GlobalContent]:
        """Return the area with the given alias, or None."""
        for item in self.globals:
            if item.alias == alias:
                return item
        return None

    @classmethod
    def all(cls) -> List["StaticContent"]:
        records = get_cache().remember_forever(
            cls.cache_key,
            lambda: get_client().get(cls.base_path)
        )
        return [cls(record) for record in records or []]

    @classmethod
    def retrieve(cls, alias: str) -> Optional["StaticContent"]:
        """Return the static content block with the given alias, or None."""
        for block in cls.all():
            if block.alias == alias:
                return block

        logger.debug(f"Static content block '{alias}' not found")
        return None
