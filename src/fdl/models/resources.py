"""Built-in healthcare resources."""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import BackboneElement, Resource
from .datatypes import (
    Address,
    CodeableConcept,
    ContactPoint,
    HumanName,
    Quantity,
)

__all__ = [
    "AdministrativeGender",
    "ObservationStatus",
    "GoalLifecycleStatus",
    "ImmunizationStatus",
    "PatientContact",
    "Patient",
    "Observation",
    "GoalTarget",
    "Goal",
    "Immunization",
]


class AdministrativeGender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"


class ObservationStatus(str, Enum):
    REGISTERED = "registered"
    PRELIMINARY = "preliminary"
    FINAL = "final"
    AMENDED = "amended"
    CORRECTED = "corrected"
    CANCELLED = "cancelled"
    ENTERED_IN_ERROR = "entered-in-error"
    UNKNOWN = "unknown"


class GoalLifecycleStatus(str, Enum):
    PROPOSED = "proposed"
    PLANNED = "planned"
    ACCEPTED = "accepted"
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ENTERED_IN_ERROR = "entered-in-error"
    REJECTED = "rejected"


class ImmunizationStatus(str, Enum):
    COMPLETED = "completed"
    ENTERED_IN_ERROR = "entered-in-error"
    NOT_DONE = "not-done"


class PatientContact(BackboneElement):
    """A contact party (guardian, partner, friend) for the patient."""
    relationship: List[CodeableConcept] = Field(default_factory=list)
    name: Optional[HumanName] = None
    telecom: List[ContactPoint] = Field(default_factory=list)
    address: Optional[Address] = None
    gender: Optional[AdministrativeGender] = None


class Patient(Resource):
    """Demographics of a person receiving care."""
    active: Optional[bool] = None
    name: List[HumanName] = Field(default_factory=list)
    telecom: List[ContactPoint] = Field(default_factory=list)
    gender: Optional[AdministrativeGender] = None
    birth_date: Optional[date] = None
    deceased_boolean: Optional[bool] = None
    address: List[Address] = Field(default_factory=list)
    multiple_birth_integer: Optional[int] = None
    contact: List[PatientContact] = Field(default_factory=list)


class Observation(Resource):
    """A measurement or simple assertion about a subject."""
    status: Optional[ObservationStatus] = None
    category: List[CodeableConcept] = Field(default_factory=list)
    code: Optional[CodeableConcept] = None
    subject: Optional[Patient] = None
    effective_date: Optional[date] = None
    value_quantity: Optional[Quantity] = None
    value_string: Optional[str] = None
    value_boolean: Optional[bool] = None
    note: List[str] = Field(default_factory=list)


class GoalTarget(BackboneElement):
    """A target outcome for a goal."""
    measure: Optional[CodeableConcept] = None
    detail_quantity: Optional[Quantity] = None
    detail_integer: Optional[int] = None
    due_date: Optional[date] = None


class Goal(Resource):
    """An intended objective for a patient."""
    lifecycle_status: Optional[GoalLifecycleStatus] = None
    description: Optional[CodeableConcept] = None
    subject: Optional[Patient] = None
    start_date: Optional[date] = None
    target: List[GoalTarget] = Field(default_factory=list)


class Immunization(Resource):
    """The administration of a vaccine."""
    status: Optional[ImmunizationStatus] = None
    vaccine_code: Optional[CodeableConcept] = None
    patient: Optional[Patient] = None
    occurrence_date: Optional[date] = None
    primary_source: Optional[bool] = None
    lot_number: Optional[str] = None
    expiration_date: Optional[date] = None
    dose_quantity: Optional[Quantity] = None
