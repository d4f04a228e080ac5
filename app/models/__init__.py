"""
Pure Python data models for circuit-lab.

This package contains Qt-free data classes that represent circuit elements.
All models use only Python standard library types.
"""

from .circuit import CircuitModel
from .component import (
    COMPONENT_PINS,
    COMPONENT_SYMBOLS,
    COMPONENT_TYPES,
    PROPERTY_CLASSES,
    ComponentData,
    MultimeterMode,
    PinDef,
)
from .wire import WireData

__all__ = [
    "CircuitModel",
    "ComponentData",
    "COMPONENT_TYPES",
    "COMPONENT_SYMBOLS",
    "COMPONENT_PINS",
    "PROPERTY_CLASSES",
    "MultimeterMode",
    "PinDef",
    "WireData",
]
