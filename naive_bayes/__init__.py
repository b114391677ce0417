"""
Gaussian Naive Bayes - classifier with per-class Gaussian feature models.

Estimator:
- fit_parameters: per-class, per-feature mean and population variance
- FittedModel: immutable (class_categories, mean, variance)

Classifier:
- GaussianNB: fit, predict, predict_one, predict_iter (lazy), score
- export_state / import_state: plain-data snapshots (ModelSnapshot)

Errors:
- InvalidInputError, DimensionMismatchError, UnfittedModelError
"""

from .backend import Backend, NumpyBackend, get_backend
from .errors import (
    NaiveBayesError,
    InvalidInputError,
    DimensionMismatchError,
    UnfittedModelError,
)
from .estimator import FittedModel, fit_parameters, partition_by_class
from .gaussian import GaussianNB, gaussian_density, joint_likelihood
from .snapshot import ModelSnapshot
from .logging_util import setup_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Backend
    'Backend',
    'NumpyBackend',
    'get_backend',

    # Errors
    'NaiveBayesError',
    'InvalidInputError',
    'DimensionMismatchError',
    'UnfittedModelError',

    # Estimator
    'FittedModel',
    'fit_parameters',
    'partition_by_class',

    # Classifier
    'GaussianNB',
    'gaussian_density',
    'joint_likelihood',

    # Snapshot
    'ModelSnapshot',

    # Logging
    'setup_logging',
    'get_logger',
]
