"""
Plain-data snapshot of fitted Gaussian Naive Bayes parameters.

The snapshot is the only persisted layout:

    {
        "version": 1,
        "class_categories": [...],
        "mean": [[...], ...],
        "variance": [[...], ...]
    }

Snapshots written without a version field are read as version 1, and the
key ``classCategories`` is accepted in place of ``class_categories``.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List

import numpy as np

from .backend import Backend, get_backend
from .config import SNAPSHOT_VERSION, SUPPORTED_SNAPSHOT_VERSIONS
from .errors import InvalidInputError
from .estimator import FittedModel


@dataclass
class ModelSnapshot:
    """Fitted parameters as nested Python lists."""
    class_categories: List[Hashable]
    mean: List[List[float]]
    variance: List[List[float]]
    version: int = field(default=SNAPSHOT_VERSION)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Check the snapshot is internally consistent."""
        if self.version not in SUPPORTED_SNAPSHOT_VERSIONS:
            raise InvalidInputError(
                f"Unsupported snapshot version {self.version!r}, "
                f"expected one of {SUPPORTED_SNAPSHOT_VERSIONS}"
            )

        try:
            mean = np.array(self.mean, dtype=np.float64)
            variance = np.array(self.variance, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Snapshot matrices must be numeric and rectangular: {e}") from None

        if mean.ndim != 2 or variance.ndim != 2:
            raise InvalidInputError(
                f"Snapshot mean and variance must be 2-D, got {mean.ndim}-D and {variance.ndim}-D"
            )
        if mean.shape != variance.shape:
            raise InvalidInputError(
                f"Snapshot mean shape {mean.shape} differs from variance shape {variance.shape}"
            )
        if mean.shape[0] != len(self.class_categories):
            raise InvalidInputError(
                f"Snapshot has {len(self.class_categories)} classes but {mean.shape[0]} parameter rows"
            )
        if mean.shape[1] == 0:
            raise InvalidInputError("Snapshot must describe at least one feature")
        try:
            distinct = set(self.class_categories)
        except TypeError:
            raise InvalidInputError("Snapshot class_categories must be hashable") from None
        if len(distinct) != len(self.class_categories):
            raise InvalidInputError("Snapshot class_categories contains duplicates")
        if np.any(variance < 0) or np.any(np.isnan(variance)):
            raise InvalidInputError("Snapshot variance must be non-negative")

    @classmethod
    def from_model(cls, model: FittedModel, backend: Backend = None) -> 'ModelSnapshot':
        """Deep copy a fitted model into plain lists."""
        backend = get_backend(backend)
        return cls(
            class_categories=list(model.class_categories),
            mean=backend.to_list(model.mean),
            variance=backend.to_list(model.variance),
        )

    def to_model(self, backend: Backend = None) -> FittedModel:
        """Build a FittedModel from the snapshot without recomputation."""
        backend = get_backend(backend)
        return FittedModel(
            class_categories=tuple(self.class_categories),
            mean=backend.freeze(backend.asarray(self.mean)),
            variance=backend.freeze(backend.asarray(self.variance)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'version': self.version,
            'class_categories': list(self.class_categories),
            'mean': [list(row) for row in self.mean],
            'variance': [list(row) for row in self.variance],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ModelSnapshot':
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise InvalidInputError(f"Snapshot must be a dict, got {type(data).__name__}")

        if 'class_categories' in data:
            categories = data['class_categories']
        elif 'classCategories' in data:
            categories = data['classCategories']
        else:
            raise InvalidInputError("Snapshot is missing class_categories")

        for key in ('mean', 'variance'):
            if key not in data:
                raise InvalidInputError(f"Snapshot is missing {key}")

        for key, value in (('class_categories', categories),
                           ('mean', data['mean']),
                           ('variance', data['variance'])):
            if not isinstance(value, (list, tuple, np.ndarray)):
                raise InvalidInputError(
                    f"Snapshot {key} must be a list, got {type(value).__name__}"
                )

        return cls(
            class_categories=list(categories),
            mean=list(data['mean']),
            variance=list(data['variance']),
            version=data.get('version', SNAPSHOT_VERSION),
        )

    def save_json(self, path: str) -> str:
        """
        Write the snapshot to a JSON file.

        Args:
            path: Destination file path

        Returns:
            The path written
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    @classmethod
    def load_json(cls, path: str) -> 'ModelSnapshot':
        """Read a snapshot written by save_json()."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"Snapshot not found at {path}")

        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)
