"""Interfaces for objects that can be turned into wallet passes."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pkpass import PKPass


class PKPassRepresentable(ABC):
    """Implemented by domain objects (tickets, memberships, ...) that can render a pass.

    Example:
        >>> class Ticket(PKPassRepresentable):
        ...     def to_pkpass(self):
        ...         return PKPass.event_ticket().serial_number(self.code)
    """

    @abstractmethod
    def to_pkpass(self) -> "PKPass":
        """Return the pass for this object."""
