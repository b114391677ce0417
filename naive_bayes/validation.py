"""
Input validation for training data, labels and prediction rows.

All checks raise InvalidInputError (or DimensionMismatchError for a wrong
feature count) naming the constraint that failed. Inputs are never
padded, truncated or coerced beyond float conversion.
"""

import numbers
from typing import Any, Hashable, List, Optional, Sequence

import numpy as np

from .errors import InvalidInputError, DimensionMismatchError


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, np.number)) and not isinstance(value, np.complexfloating)


def check_feature_matrix(X: Any, name: str = "X", allow_empty: bool = False,
                         n_features: Optional[int] = None) -> np.ndarray:
    """
    Validate a 2-D numeric matrix and return it as a float64 array.

    Args:
        X: Array-like of shape (n_samples, n_features)
        name: Argument name used in error messages
        allow_empty: Accept zero rows (prediction batches)
        n_features: Required row length (fitted models). Every row is
            checked against it before any other shape check.

    Returns:
        Float64 copy of X

    Raises:
        DimensionMismatchError: If a row length differs from n_features
    """
    if X is None:
        raise InvalidInputError(f"{name} must not be None")

    if isinstance(X, np.ndarray):
        if X.ndim != 2:
            if X.ndim == 1 and X.size == 0 and allow_empty:
                return np.empty((0, 0), dtype=np.float64)
            raise InvalidInputError(f"{name} must be 2-D, got {X.ndim}-D array")
        if X.shape[0] == 0:
            if allow_empty:
                return np.array(X, dtype=np.float64)
            raise InvalidInputError(f"{name} must not be empty")
        if n_features is not None and X.shape[1] != n_features:
            raise DimensionMismatchError(n_features, X.shape[1])
        if not (np.issubdtype(X.dtype, np.number) or X.dtype == np.bool_) \
                or np.issubdtype(X.dtype, np.complexfloating):
            raise InvalidInputError(f"{name} must be numeric, got dtype {X.dtype}")
        matrix = np.array(X, dtype=np.float64)
    else:
        rows = _as_rows(X, name)
        if not rows:
            if allow_empty:
                return np.empty((0, 0), dtype=np.float64)
            raise InvalidInputError(f"{name} must not be empty")

        if n_features is not None:
            for row in rows:
                if len(row) != n_features:
                    raise DimensionMismatchError(n_features, len(row))

        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise InvalidInputError(
                    f"{name} is ragged: row 0 has {width} values, row {i} has {len(row)}"
                )
            for value in row:
                if not _is_number(value):
                    raise InvalidInputError(
                        f"{name} row {i} contains non-numeric value {value!r}"
                    )
        if width == 0:
            raise InvalidInputError(f"{name} rows must have at least one feature")
        matrix = np.stack([_to_float_vector(row, f"{name} row {i}") for i, row in enumerate(rows)])

    if matrix.shape[1] == 0:
        raise InvalidInputError(f"{name} rows must have at least one feature")

    if not np.all(np.isfinite(matrix)):
        bad_row = int(np.argwhere(~np.isfinite(matrix))[0][0])
        raise InvalidInputError(f"{name} row {bad_row} contains NaN or infinite values")

    return matrix


def _to_float_vector(values: Sequence, name: str) -> np.ndarray:
    try:
        return np.array(values, dtype=np.float64)
    except (OverflowError, ValueError, TypeError):
        raise InvalidInputError(f"{name} contains a value that does not fit a float64") from None


def _as_rows(X: Any, name: str) -> List[Sequence]:
    if isinstance(X, (str, bytes)):
        raise InvalidInputError(f"{name} must be a sequence of rows, got a string")
    try:
        rows = list(X)
    except TypeError:
        raise InvalidInputError(f"{name} must be a sequence of rows") from None

    checked = []
    for i, row in enumerate(rows):
        checked.append(_as_row(row, f"{name} row {i}"))
    return checked


def _as_row(row: Any, name: str) -> Sequence:
    if isinstance(row, (str, bytes)) or _is_number(row):
        raise InvalidInputError(f"{name} must be a sequence of numbers")
    try:
        return list(row)
    except TypeError:
        raise InvalidInputError(f"{name} must be a sequence of numbers") from None


def check_row(row: Any, n_features: int) -> np.ndarray:
    """
    Validate a single prediction row and return it as a 1-D float array.

    Raises:
        DimensionMismatchError: If the row length differs from n_features
    """
    if row is None:
        raise InvalidInputError("row must not be None")

    if isinstance(row, np.ndarray):
        if row.ndim != 1:
            raise InvalidInputError(f"row must be 1-D, got {row.ndim}-D array")
        values = list(row.tolist())
    else:
        values = _as_row(row, "row")

    if len(values) != n_features:
        raise DimensionMismatchError(n_features, len(values))

    for value in values:
        if not _is_number(value):
            raise InvalidInputError(f"row contains non-numeric value {value!r}")

    vector = _to_float_vector(values, "row")
    if not np.all(np.isfinite(vector)):
        raise InvalidInputError("row contains NaN or infinite values")
    return vector


def check_labels(y: Any, n_samples: int) -> List[Hashable]:
    """
    Validate training labels and return them as plain Python values.

    Args:
        y: One label per training row (numbers or strings)
        n_samples: Number of training rows

    Returns:
        List of labels
    """
    if y is None:
        raise InvalidInputError("y must not be None")
    if isinstance(y, (str, bytes)):
        raise InvalidInputError("y must be a sequence of labels, got a string")

    if isinstance(y, np.ndarray):
        if y.ndim != 1:
            raise InvalidInputError(f"y must be 1-D, got {y.ndim}-D array")
        labels = y.tolist()
    else:
        try:
            labels = [v.item() if isinstance(v, np.generic) else v for v in y]
        except TypeError:
            raise InvalidInputError("y must be a sequence of labels") from None

    if not labels:
        raise InvalidInputError("y must not be empty")

    if len(labels) != n_samples:
        raise InvalidInputError(
            f"X and y length mismatch: {n_samples} rows, {len(labels)} labels"
        )

    for i, label in enumerate(labels):
        if label is None:
            raise InvalidInputError(f"label {i} is None")
        if isinstance(label, (list, tuple, dict, set, np.ndarray)):
            raise InvalidInputError(f"label {i} is not a scalar: {label!r}")
        if isinstance(label, float) and label != label:
            raise InvalidInputError(f"label {i} is NaN")
        try:
            hash(label)
        except TypeError:
            raise InvalidInputError(f"label {i} is not hashable: {label!r}") from None

    return labels


def sorted_catalog(labels: Sequence[Hashable]) -> tuple:
    """Distinct labels in ascending natural order."""
    try:
        return tuple(sorted(set(labels)))
    except TypeError as e:
        raise InvalidInputError(f"labels must share a total order: {e}") from None
