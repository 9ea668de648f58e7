"""
Element provider backed by pydantic models.

Field shapes are derived from the model annotations:

    Optional[X]            -> X
    List[X]                -> repeatable X
    BaseModel subclass     -> nested element
    Enum subclass          -> enumerated ("required") value
    bool/int/float/date/str -> scalar

Fields are addressed by their alias (birthDate) or attribute name
(birth_date).
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum, auto
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from ..models import Resource, default_registry
from ..types import TypeService
from .provider import (
    ElementProvider,
    FieldMissing,
    IndexOutOfOrder,
    InvalidEnumValue,
    UnknownType,
    WrongShape,
)

logger = logging.getLogger(__name__)


class FieldKind(Enum):
    """What a field (or each entry of a repeatable field) holds."""
    ELEMENT = auto()    # nested BaseModel
    ENUM = auto()       # required value set
    BOOLEAN = auto()
    INTEGER = auto()
    DECIMAL = auto()
    DATE = auto()
    STRING = auto()
    OTHER = auto()


SCALAR_KINDS = {FieldKind.BOOLEAN, FieldKind.INTEGER, FieldKind.DECIMAL,
                FieldKind.DATE, FieldKind.STRING}


@dataclass(frozen=True)
class FieldShape:
    """Shape of one model field."""
    attr: str           # Python attribute name
    alias: str          # Name used in listings
    kind: FieldKind
    item_type: Any      # The unwrapped annotation (entry type for lists)
    repeated: bool


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _kind_of(tp: Any) -> FieldKind:
    if not isinstance(tp, type):
        return FieldKind.OTHER
    if issubclass(tp, BaseModel):
        return FieldKind.ELEMENT
    if issubclass(tp, Enum):
        return FieldKind.ENUM
    # bool before int: bool is an int subclass
    if issubclass(tp, bool):
        return FieldKind.BOOLEAN
    if issubclass(tp, int):
        return FieldKind.INTEGER
    if issubclass(tp, float):
        return FieldKind.DECIMAL
    if issubclass(tp, date):
        return FieldKind.DATE
    if issubclass(tp, str):
        return FieldKind.STRING
    return FieldKind.OTHER


def shape_of(attr: str, alias: str, annotation: Any) -> FieldShape:
    """Derive the shape of a field from its annotation."""
    tp = _unwrap_optional(annotation)
    repeated = get_origin(tp) in (list, List)
    if repeated:
        args = get_args(tp)
        tp = _unwrap_optional(args[0]) if args else Any
    return FieldShape(attr, alias, _kind_of(tp), tp, repeated)


@lru_cache(maxsize=None)
def model_shapes(model: Type[BaseModel]) -> Dict[str, FieldShape]:
    """Map alias and attribute name to shape for every field of a model."""
    shapes = {}
    generator = model.model_config.get("alias_generator")
    for attr, info in model.model_fields.items():
        alias = info.alias or (generator(attr) if callable(generator) else attr)
        shape = shape_of(attr, alias, info.annotation)
        shapes[attr] = shape
        shapes[alias] = shape
    return shapes


def _matches_kind(value: Any, kind: FieldKind) -> bool:
    """True if value is exactly of the scalar kind (no conversion)."""
    if kind == FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if kind == FieldKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == FieldKind.DECIMAL:
        return isinstance(value, float)
    if kind == FieldKind.DATE:
        return isinstance(value, date)
    if kind == FieldKind.STRING:
        return isinstance(value, str) and not isinstance(value, Enum)
    return False


def match_enum(enum_type: Type[Enum], text: str) -> Optional[Enum]:
    """Find a member by name or value, ignoring case."""
    wanted = text.lower()
    for member in enum_type:
        if member.name.lower() == wanted or str(member.value).lower() == wanted:
            return member
    return None


class ModelElementProvider(ElementProvider):
    """
    ElementProvider over a registry of pydantic models.

    Usage:
        provider = ModelElementProvider()                 # built-in models
        provider = ModelElementProvider({"A": MyModel})   # custom registry
    """

    def __init__(self, registry: Optional[Mapping[str, Type[BaseModel]]] = None,
                 type_service: Optional[TypeService] = None):
        self.registry: Dict[str, Type[BaseModel]] = (
            dict(registry) if registry is not None else default_registry())
        self.type_service = type_service if type_service is not None else TypeService()

    # =========================================================================
    # Objects
    # =========================================================================

    def instantiate(self, type_name: str) -> BaseModel:
        model = self.registry.get(type_name)
        if model is None:
            raise UnknownType(type_name)
        logger.debug("instantiating %s", type_name)
        return model()

    def is_element(self, obj: Any) -> bool:
        return isinstance(obj, BaseModel)

    def is_root(self, obj: Any) -> bool:
        return isinstance(obj, Resource)

    def type_names(self) -> List[str]:
        return sorted(self.registry)

    def shape(self, element: BaseModel, field: str) -> Optional[FieldShape]:
        """Shape of a field, or None if the element has no such field."""
        return model_shapes(type(element)).get(field)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _store(self, element: BaseModel, shape: FieldShape, value: Any) -> Any:
        """Validate and set a field; return the value as stored."""
        setattr(element, shape.attr, value)
        return getattr(element, shape.attr)

    def _entries(self, element: BaseModel, shape: FieldShape) -> list:
        """The live list behind a repeatable field, created if unset."""
        entries = getattr(element, shape.attr)
        if entries is None:
            entries = self._store(element, shape, [])
        return entries

    # =========================================================================
    # Reading
    # =========================================================================

    def read_field(self, element: BaseModel, field: str, index: int = 0) -> Any:
        shape = self.shape(element, field)
        if shape is None:
            raise FieldMissing(field)

        if shape.repeated:
            entries = self._entries(element, shape)
            if index < len(entries):
                return entries[index]
            if index > len(entries):
                raise IndexOutOfOrder(field, index, len(entries))
            if shape.kind != FieldKind.ELEMENT:
                return None
            entry = shape.item_type()
            entries.append(entry)
            return entry

        self.check_position(element, field, index)

        current = getattr(element, shape.attr)
        if current is None and shape.kind == FieldKind.ELEMENT:
            current = self._store(element, shape, shape.item_type())
        return current

    def check_position(self, element, field, index):
        shape = self.shape(element, field)
        if shape is not None and not shape.repeated and index != 0:
            raise IndexOutOfOrder(field, index, 1)

    # =========================================================================
    # Generic assignment strategies
    # =========================================================================

    def assign_primitive_list_entry(self, element, field, value, index=None):
        shape = self.shape(element, field)
        if shape is None or not shape.repeated or shape.kind not in SCALAR_KINDS:
            return None
        if not _matches_kind(value, shape.kind):
            return None
        entries = self._entries(element, shape)
        if index is not None and index != len(entries):
            return None
        entries.append(value)
        return element

    def assign_enumerated_value(self, element, field, value):
        shape = self.shape(element, field)
        if shape is None or shape.repeated or shape.kind != FieldKind.ENUM:
            return None
        if not isinstance(value, str):
            return None
        member = match_enum(shape.item_type, value)
        if member is None:
            allowed = [str(m.value).lower() for m in shape.item_type]
            raise InvalidEnumValue(shape.alias, type(element).__name__, value, allowed)
        self._store(element, shape, member)
        return element

    def assign_indexed_collection(self, element, field, index, value):
        shape = self.shape(element, field)
        if shape is None or not shape.repeated:
            return None
        entries = list(getattr(element, shape.attr) or [])
        if index > len(entries):
            raise IndexOutOfOrder(field, index, len(entries))
        if index < len(entries):
            entries[index] = value
        else:
            entries.append(value)
        try:
            self._store(element, shape, entries)
        except ValidationError:
            return None
        return element

    def assign_date(self, element, field, value):
        shape = self.shape(element, field)
        if shape is None or shape.repeated or shape.kind != FieldKind.DATE:
            return None
        if isinstance(value, str):
            value = self.type_service.as_date(value)
        elif not isinstance(value, date):
            return None
        self._store(element, shape, value)
        return element

    def assign_direct(self, element, field, value):
        shape = self.shape(element, field)
        if shape is None:
            return None
        if not shape.repeated and shape.kind in SCALAR_KINDS:
            if shape.kind == FieldKind.BOOLEAN and isinstance(value, str):
                value = self.type_service.as_boolean(value)
            elif shape.kind == FieldKind.DECIMAL and _matches_kind(value, FieldKind.INTEGER):
                value = float(value)
            # Scalars take only their own kind; strings reach numbers through parsing
            if not _matches_kind(value, shape.kind):
                return None
        try:
            self._store(element, shape, value)
        except ValidationError:
            return None
        return element

    # =========================================================================
    # Typed assignment
    # =========================================================================

    def _assign_typed(self, element, field, value, kind: FieldKind, label: str):
        shape = self.shape(element, field)
        if shape is None or shape.repeated or shape.kind != kind:
            raise WrongShape(field, label)
        try:
            self._store(element, shape, value)
        except ValidationError:
            raise WrongShape(field, label) from None
        return element

    def assign_boolean(self, element, field, value):
        return self._assign_typed(element, field, value, FieldKind.BOOLEAN, "boolean")

    def assign_integer(self, element, field, value):
        return self._assign_typed(element, field, value, FieldKind.INTEGER, "integer")

    def assign_decimal(self, element, field, value):
        return self._assign_typed(element, field, float(value), FieldKind.DECIMAL, "decimal")
