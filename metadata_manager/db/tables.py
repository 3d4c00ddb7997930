"""Rows of the run tables."""
from dataclasses import dataclass
from typing import Optional

from metadata_manager.common.classifier_key import ClassifierKey
from metadata_manager.common.common import RunStatus

@dataclass
class ClassifierRun:
    """Represents a classifier evaluation run in the database."""
    id: int
    dataset_id: int
    classifier: ClassifierKey
    evaluation_method: Optional[str]
    performance: Optional[float]  # decoded; NaN for an undefined result
    status: RunStatus

@dataclass
class MetaFeatureRun:
    """Represents a meta feature computation run in the database."""
    id: int
    dataset_id: int
    status: RunStatus
