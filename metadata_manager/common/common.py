from enum import Enum

"""Common constants and enumerations shared across Metadata Manager.

This module centralises enums (RunStatus, SetCategory) and the literals
that other tools rely on when they read the database, so that the rest of
the codebase can import them from a single place. Add new enums here
whenever you introduce additional categorical fields to avoid scattering
hard-coded strings throughout the code.
"""

LOG_NAME = "metadata_manager"

# Separates a classifier name from its configuration in joined keys.
# Other tools parse this literal, do not change it.
CLASSIFIER_NAME_CONFIG_SEPARATOR = " with configuration: "


class RunStatus(Enum):
    """Values of the ``status`` column of the run tables."""
    CREATED = "created"
    RUNNING = "running"
    FINISHED = "finished"
    ERROR = "error"


class SetCategory(Enum):
    CLASSIFIER = "classifier"
    DATASET = "dataset"
    METAFEATURE = "metafeature"


# Public exports for `from metadata_manager.common.common import *`
__all__ = [
    "LOG_NAME",
    "CLASSIFIER_NAME_CONFIG_SEPARATOR",
    "RunStatus",
    "SetCategory",
]
