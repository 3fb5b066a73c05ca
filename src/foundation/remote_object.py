"""
Attribute-style wrapper around records returned by the Netflex API.
"""
from typing import Any, Dict, Optional


class RemoteObject:
    """A read-only view over a JSON object from the API.

    Attributes are looked up in the wrapped dictionary; a missing attribute
    is None rather than an AttributeError. Subclasses can post-process an
    attribute by defining get_<name>_attribute(raw_value).
    """

    def __init__(self, attributes: Optional[Dict[str, Any]] = None):
        self.__dict__["_attributes"] = dict(attributes or {})

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_attributes":
            raise AttributeError(name)

        value = self._attributes.get(name)
        accessor = getattr(type(self), f"get_{name}_attribute", None)
        if accessor is not None:
            return accessor(self, value)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteObject):
            return NotImplemented
        return type(self) is type(other) and self._attributes == other._attributes

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
