"""
Element provider interface.

The interpreter never touches domain objects directly: it asks a provider
to create them and to read or write their fields. A provider decides what
type names exist, what counts as an addressable element and which
elements are root resources.

The assign_* methods return the element on success and None when the
assignment does not apply to the field (wrong shape, unknown field), so
the interpreter can try the next strategy. Failures that must be reported
as they are raise a ProviderError subclass.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, List, Optional, Union


INDEX_OUT_OF_ORDER = "index out of order (must start at '0' and must not skip positions)."
FIELD_INVALID = "the field doesn't exist or the element type doesn't match."


class ProviderError(Exception):
    """Base class for provider failures; the message is user-facing."""
    pass


class UnknownType(ProviderError):
    """No element type is registered under the requested name."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"'{type_name}' is not a valid resource.")


class FieldMissing(ProviderError):
    """The element has no field with the requested name."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(FIELD_INVALID)


class IndexOutOfOrder(ProviderError):
    """An index skipped a position of a repeatable field."""

    def __init__(self, field: str, index: int, size: int):
        self.field = field
        self.index = index
        self.size = size
        super().__init__(INDEX_OUT_OF_ORDER)


class InvalidEnumValue(ProviderError):
    """A value is not one of an enumerated field's allowed values."""

    def __init__(self, field: str, owner: str, value: str, allowed: List[str]):
        self.field = field
        self.owner = owner
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"'{field}' field on '{owner}' has required parameter and '{value}' is invalid. "
            f"Valid parameters are: {', '.join(self.allowed)}.")


class WrongShape(ProviderError):
    """The field does not take a value of the given kind."""

    def __init__(self, field: str, kind: str):
        self.field = field
        self.kind = kind
        super().__init__(f"the property does not expect a {kind} value.")


class ElementProvider(ABC):
    """Creates domain objects and reads and writes their fields."""

    # --- Objects ---

    @abstractmethod
    def instantiate(self, type_name: str) -> Any:
        """Create a new element. Raises UnknownType."""

    @abstractmethod
    def is_element(self, obj: Any) -> bool:
        """True if obj has addressable fields."""

    @abstractmethod
    def is_root(self, obj: Any) -> bool:
        """True if obj may be emitted as a bundle entry."""

    @abstractmethod
    def type_names(self) -> List[str]:
        """Names accepted by instantiate(), sorted."""

    # --- Reading ---

    @abstractmethod
    def read_field(self, element: Any, field: str, index: int = 0) -> Any:
        """
        Read a field, creating nested elements on first access.

        Raises:
            FieldMissing: If the element has no such field
            IndexOutOfOrder: If index skips a position
        """

    @abstractmethod
    def check_position(self, element: Any, field: str, index: int) -> None:
        """Raise IndexOutOfOrder if a field that holds one value is given index > 0."""

    # --- Generic assignment strategies ---

    @abstractmethod
    def assign_primitive_list_entry(self, element: Any, field: str, value: Any,
                                    index: Optional[int] = None) -> Optional[Any]:
        """Append to a list of scalars of the value's type."""

    @abstractmethod
    def assign_enumerated_value(self, element: Any, field: str, value: Any) -> Optional[Any]:
        """Set an enumerated field. Raises InvalidEnumValue for a miss."""

    @abstractmethod
    def assign_indexed_collection(self, element: Any, field: str, index: int,
                                  value: Any) -> Optional[Any]:
        """Replace or append a list entry. Raises IndexOutOfOrder."""

    @abstractmethod
    def assign_date(self, element: Any, field: str, value: Union[date, str]) -> Optional[Any]:
        """Set a date field, parsing strings. Raises CoercionError."""

    @abstractmethod
    def assign_direct(self, element: Any, field: str, value: Any) -> Optional[Any]:
        """Set a field to a value its declared type accepts."""

    # --- Typed assignment ---

    @abstractmethod
    def assign_boolean(self, element: Any, field: str, value: bool) -> Any:
        """Raises WrongShape if the field is not boolean."""

    @abstractmethod
    def assign_integer(self, element: Any, field: str, value: int) -> Any:
        """Raises WrongShape if the field is not an integer."""

    @abstractmethod
    def assign_decimal(self, element: Any, field: str, value: float) -> Any:
        """Raises WrongShape if the field is not a decimal."""
