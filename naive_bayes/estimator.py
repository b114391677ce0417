"""
Parameter estimation for Gaussian Naive Bayes.

Splits the training rows by class label and summarises every class with the
per-feature mean and population variance:

    mu[c, j]  = (1 / n_c) * sum_{i: y_i = c} x_ij
    var[c, j] = (1 / n_c) * sum_{i: y_i = c} (x_ij - mu[c, j])^2

The divisor is the class size n_c (no Bessel correction). A class with a
single row therefore gets zero variance on every feature; that is a valid
result and is only reported as a warning.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Tuple

from .backend import Backend, get_backend
from .config import DEFAULT_VAR_SMOOTHING, NEAR_ZERO_VARIANCE
from .errors import InvalidInputError
from .logging_util import get_logger
from .validation import check_feature_matrix, check_labels, sorted_catalog

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class FittedModel:
    """
    Fitted Gaussian Naive Bayes parameters.

    Row i of ``mean`` and ``variance`` describes ``class_categories[i]``.
    The arrays are frozen by the backend; a new fit produces a new instance.
    """
    class_categories: Tuple[Hashable, ...]
    mean: Any
    variance: Any

    @property
    def n_classes(self) -> int:
        return len(self.class_categories)

    @property
    def n_features(self) -> int:
        return int(self.mean.shape[1])


def partition_by_class(labels: List[Hashable]) -> Dict[Hashable, List[int]]:
    """
    Group row indices by label, keeping the original row order in each group.

    Args:
        labels: One label per row

    Returns:
        Mapping label -> list of row indices
    """
    groups = OrderedDict()
    for index, label in enumerate(labels):
        groups.setdefault(label, []).append(index)
    return groups


def fit_parameters(X, y, backend: Backend = None,
                   var_smoothing: float = DEFAULT_VAR_SMOOTHING) -> FittedModel:
    """
    Estimate per-class, per-feature mean and variance.

    Args:
        X: Training features (n_samples, n_features)
        y: Training labels (n_samples,), numbers or strings
        backend: Numeric backend (NumPy by default)
        var_smoothing: Non-negative constant added to every variance

    Returns:
        FittedModel with classes sorted ascending

    Raises:
        InvalidInputError: If X or y violate the training set constraints
    """
    backend = get_backend(backend)

    if var_smoothing is None or var_smoothing < 0:
        raise InvalidInputError(f"var_smoothing must be >= 0, got {var_smoothing}")

    X = backend.asarray(check_feature_matrix(X, "X"))
    labels = check_labels(y, backend.shape(X)[0])
    class_categories = sorted_catalog(labels)

    groups = partition_by_class(labels)

    means = []
    variances = []
    for category in class_categories:
        class_rows = backend.take_rows(X, groups[category])
        means.append(backend.column_mean(class_rows))
        variances.append(backend.column_var(class_rows))

    mean = backend.stack(means)
    variance = backend.stack(variances)
    if var_smoothing:
        variance = variance + var_smoothing

    _report_low_variance(class_categories, backend.to_list(variance))

    logger.debug(
        "Fitted %d samples, %d features, %d classes",
        len(labels), backend.shape(mean)[1], len(class_categories)
    )

    return FittedModel(
        class_categories=class_categories,
        mean=backend.freeze(mean),
        variance=backend.freeze(variance),
    )


def _report_low_variance(class_categories, variance_rows):
    """Log every class/feature whose variance is zero or close to it."""
    for category, row in zip(class_categories, variance_rows):
        low = [j for j, v in enumerate(row) if v <= NEAR_ZERO_VARIANCE]
        if low:
            logger.warning(
                "Near-zero variance for class %r on features %s; "
                "predictions for this class may be degenerate",
                category, low
            )
