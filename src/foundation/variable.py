"""
Netflex Variables and Settings.

Variables are site-wide key/value entries managed in the Netflex admin.
The full list is fetched once from the API and cached for the lifetime of
the cache; individual lookups are then resolved by alias in memory.

Usage:
    >>> from foundation import Variable
    >>> Variable.get("site_name")
    'Example Site'
"""
import json
import logging
from typing import Any, List, Optional

from netflex import get_cache, get_client
from .remote_object import RemoteObject

logger = logging.getLogger(__name__)


class Variable(RemoteObject):
    """A single Netflex variable.

    The raw value is coerced according to the variable's format:
        boolean -> bool (the API sends "0"/"1"; anything non-numeric is False)
        json    -> decoded JSON when the value is a string (None if malformed)
        other   -> unchanged
    """

    base_path = "foundation/variables"
    cache_key = "variables"

    def get_value_attribute(self, value: Any) -> Any:
        if self._attributes.get("format") == "boolean":
            try:
                return bool(int(value or 0))
            except (TypeError, ValueError):
                logger.warning(f"Variable '{self.alias}' has non-numeric boolean value {value!r}")
                return False
        if self._attributes.get("format") == "json" and isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as e:
                logger.warning(f"Variable '{self.alias}' holds invalid JSON: {e}")
                return None
        return value

    @classmethod
    def all(cls) -> List["Variable"]:
        """Return every variable, fetching them from the API on the first call."""
        records = get_cache().remember_forever(
            cls.cache_key,
            lambda: get_client().get(cls.base_path)
        )
        return [cls(record) for record in records or []]

    @classmethod
    def retrieve(cls, alias: str) -> Optional["Variable"]:
        """Return the variable with the given alias, or None."""
        for variable in cls.all():
            if variable.alias == alias:
                return variable

        logger.debug(f"{cls.__name__} '{alias}' not found")
        return None

    @classmethod
    def get(cls, alias: str) -> Any:
        """Return the (format-coerced) value of a variable, or None."""
        variable = cls.retrieve(alias)
        return variable.value if variable else None


class Setting(Variable):
    """Settings are variables under their older name."""
