"""Reusable data types shared by the built-in resources."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import Element

__all__ = [
    "NameUse",
    "ContactPointSystem",
    "ContactPointUse",
    "Coding",
    "CodeableConcept",
    "Quantity",
    "HumanName",
    "ContactPoint",
    "Address",
]


class NameUse(str, Enum):
    USUAL = "usual"
    OFFICIAL = "official"
    TEMP = "temp"
    NICKNAME = "nickname"
    ANONYMOUS = "anonymous"
    OLD = "old"
    MAIDEN = "maiden"


class ContactPointSystem(str, Enum):
    PHONE = "phone"
    FAX = "fax"
    EMAIL = "email"
    PAGER = "pager"
    URL = "url"
    SMS = "sms"
    OTHER = "other"


class ContactPointUse(str, Enum):
    HOME = "home"
    WORK = "work"
    TEMP = "temp"
    OLD = "old"
    MOBILE = "mobile"


class Coding(Element):
    """A code defined by a terminology system."""
    system: Optional[str] = None
    version: Optional[str] = None
    code: Optional[str] = None
    display: Optional[str] = None


class CodeableConcept(Element):
    """A concept given by one or more codings and/or free text."""
    coding: List[Coding] = Field(default_factory=list)
    text: Optional[str] = None


class Quantity(Element):
    """A measured amount."""
    value: Optional[float] = None
    unit: Optional[str] = None
    system: Optional[str] = None
    code: Optional[str] = None


class HumanName(Element):
    """A person's name."""
    use: Optional[NameUse] = None
    text: Optional[str] = None
    family: Optional[str] = None
    given: List[str] = Field(default_factory=list)
    prefix: List[str] = Field(default_factory=list)
    suffix: List[str] = Field(default_factory=list)


class ContactPoint(Element):
    """Phone number, email address and similar."""
    system: Optional[ContactPointSystem] = None
    value: Optional[str] = None
    use: Optional[ContactPointUse] = None
    rank: Optional[int] = None


class Address(Element):
    """A postal address."""
    text: Optional[str] = None
    line: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
