"""
Built-in domain model for FDL.

Element types are pydantic models. Every class registered here can be
named in a listing (Patient, HumanName, ...); only Resource subclasses
are emitted as bundle entries.
"""

from typing import Dict, Type

from .base import Element, BackboneElement, Resource, prune_empty
from .datatypes import (
    NameUse,
    ContactPointSystem,
    ContactPointUse,
    Coding,
    CodeableConcept,
    Quantity,
    HumanName,
    ContactPoint,
    Address,
)
from .resources import (
    AdministrativeGender,
    ObservationStatus,
    GoalLifecycleStatus,
    ImmunizationStatus,
    PatientContact,
    Patient,
    Observation,
    GoalTarget,
    Goal,
    Immunization,
)
from .bundle import Bundle


_ELEMENT_TYPES = (
    # Resources
    Patient,
    Observation,
    Goal,
    Immunization,
    # Backbone elements
    PatientContact,
    GoalTarget,
    # Data types
    Coding,
    CodeableConcept,
    Quantity,
    HumanName,
    ContactPoint,
    Address,
)


def default_registry() -> Dict[str, Type[Element]]:
    """Return a new name -> class map of the built-in element types."""
    return {cls.__name__: cls for cls in _ELEMENT_TYPES}


__all__ = [
    # Base
    'Element',
    'BackboneElement',
    'Resource',
    'prune_empty',

    # Data types
    'NameUse',
    'ContactPointSystem',
    'ContactPointUse',
    'Coding',
    'CodeableConcept',
    'Quantity',
    'HumanName',
    'ContactPoint',
    'Address',

    # Resources
    'AdministrativeGender',
    'ObservationStatus',
    'GoalLifecycleStatus',
    'ImmunizationStatus',
    'PatientContact',
    'Patient',
    'Observation',
    'GoalTarget',
    'Goal',
    'Immunization',

    # Bundle
    'Bundle',
    'default_registry',
]
