"""
Common utilities, enums, and base classes for the metadata manager.
"""

from .common import (
    RunStatus,
    SetCategory,
    LOG_NAME,
    CLASSIFIER_NAME_CONFIG_SEPARATOR,
)
from .classifier_key import ClassifierKey, MalformedInputError
from .sentinel import MISSING_VALUE_SENTINEL, encode_measurement, decode_measurement
from .serializable import YAMLSerializable
from .factory import Factory

__all__ = [
    # Enums and constants
    'RunStatus',
    'SetCategory',
    'LOG_NAME',
    'CLASSIFIER_NAME_CONFIG_SEPARATOR',
    # Keys
    'ClassifierKey',
    'MalformedInputError',
    # Sentinel codec
    'MISSING_VALUE_SENTINEL',
    'encode_measurement',
    'decode_measurement',
    # Serialization
    'YAMLSerializable',
    'Factory',
]
