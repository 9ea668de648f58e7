"""Base classes for FDL domain models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

__all__ = [
    "Element",
    "BackboneElement",
    "Resource",
    "prune_empty",
]


class Element(BaseModel):
    """Any addressable object.

    Fields are exposed under their camelCase alias (birthDate), which is
    the spelling used in listings. Assignments are validated.
    """
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "validate_assignment": True,
    }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with aliases, omitting unset and empty fields."""
        return prune_empty(self.model_dump(mode="json", by_alias=True, exclude_none=True))


class BackboneElement(Element):
    """An element that only exists nested inside a resource."""
    pass


class Resource(Element):
    """A top-level element; only resources are emitted in a bundle."""
    id: Optional[str] = None

    @property
    def resource_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        data = {"resourceType": self.resource_type}
        data.update(super().to_dict())
        return data


def prune_empty(value: Any) -> Any:
    """Recursively drop empty lists and dicts from dumped model data."""
    if isinstance(value, dict):
        pruned = {k: prune_empty(v) for k, v in value.items()}
        return {k: v for k, v in pruned.items() if v not in ({}, [])}
    if isinstance(value, list):
        return [prune_empty(v) for v in value]
    return value
