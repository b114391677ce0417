"""
Numeric backend abstraction.

The estimator and the classifier only need a handful of dense-array
primitives: construction, column reductions (mean, population variance),
stacking, elementwise sqrt/exp, a product along rows and an index-of-maximum.
Everything else is ordinary elementwise arithmetic on the arrays the backend
returns.

NumpyBackend is the default implementation.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, List, Sequence

import numpy as np

from .config import FLOAT_DTYPE


class Backend(ABC):
    """Dense-array primitives used by the Naive Bayes core."""

    @abstractmethod
    def asarray(self, data: Any) -> Any:
        """Convert nested numeric data to a float array (copying)."""

    @abstractmethod
    def column_mean(self, matrix: Any) -> Any:
        """Mean of every column of a 2-D array."""

    @abstractmethod
    def column_var(self, matrix: Any) -> Any:
        """Population variance (divisor n) of every column of a 2-D array."""

    @abstractmethod
    def stack(self, rows: Sequence[Any]) -> Any:
        """Stack equal-length 1-D arrays into a 2-D array."""

    @abstractmethod
    def take_rows(self, matrix: Any, indices: Sequence[int]) -> Any:
        """Rows of a 2-D array at the given positions, in that order."""

    @abstractmethod
    def transpose(self, matrix: Any) -> Any:
        pass

    @abstractmethod
    def empty(self, shape: tuple) -> Any:
        """Uninitialised float array of the given shape."""

    @abstractmethod
    def sqrt(self, x: Any) -> Any:
        pass

    @abstractmethod
    def exp(self, x: Any) -> Any:
        pass

    @abstractmethod
    def prod_rows(self, matrix: Any) -> Any:
        """Product along the last axis."""

    @abstractmethod
    def any_rows(self, mask: Any) -> Any:
        """Logical OR along the last axis."""

    @abstractmethod
    def argmax_rows(self, matrix: Any) -> Any:
        """Index of the first maximum along the last axis."""

    @abstractmethod
    def where(self, condition: Any, x: Any, y: Any) -> Any:
        pass

    @abstractmethod
    def shape(self, x: Any) -> tuple:
        pass

    @abstractmethod
    def to_list(self, x: Any) -> List:
        """Nested plain Python lists (no backend handles)."""

    @abstractmethod
    def freeze(self, x: Any) -> Any:
        """Return ``x`` marked as immutable where the backend supports it."""

    @contextmanager
    def errstate(self):
        """Silence floating point warnings inside the block."""
        yield


class NumpyBackend(Backend):
    """Backend built on NumPy float64 arrays."""

    def __init__(self, dtype=FLOAT_DTYPE):
        self.dtype = dtype

    def asarray(self, data: Any) -> np.ndarray:
        return np.array(data, dtype=self.dtype)

    def column_mean(self, matrix: np.ndarray) -> np.ndarray:
        return np.mean(matrix, axis=0)

    def column_var(self, matrix: np.ndarray) -> np.ndarray:
        return np.var(matrix, axis=0, ddof=0)

    def stack(self, rows: Sequence[np.ndarray]) -> np.ndarray:
        return np.stack(rows)

    def take_rows(self, matrix: np.ndarray, indices: Sequence[int]) -> np.ndarray:
        return np.take(matrix, indices, axis=0)

    def transpose(self, matrix: np.ndarray) -> np.ndarray:
        return np.transpose(matrix)

    def empty(self, shape: tuple) -> np.ndarray:
        return np.empty(shape, dtype=self.dtype)

    def sqrt(self, x: np.ndarray) -> np.ndarray:
        return np.sqrt(x)

    def exp(self, x: np.ndarray) -> np.ndarray:
        return np.exp(x)

    def prod_rows(self, matrix: np.ndarray) -> np.ndarray:
        return np.prod(matrix, axis=-1)

    def any_rows(self, mask: np.ndarray) -> np.ndarray:
        return np.any(mask, axis=-1)

    def argmax_rows(self, matrix: np.ndarray) -> np.ndarray:
        return np.argmax(matrix, axis=-1)

    def where(self, condition, x, y) -> np.ndarray:
        return np.where(condition, x, y)

    def shape(self, x: np.ndarray) -> tuple:
        return tuple(np.shape(x))

    def to_list(self, x: np.ndarray) -> List:
        return np.asarray(x).tolist()

    def freeze(self, x: np.ndarray) -> np.ndarray:
        x.flags.writeable = False
        return x

    @contextmanager
    def errstate(self):
        with np.errstate(divide='ignore', invalid='ignore', over='ignore', under='ignore'):
            yield


_DEFAULT_BACKEND = NumpyBackend()


def get_backend(backend: Backend = None) -> Backend:
    """Return ``backend`` or the shared default NumPy backend."""
    return backend if backend is not None else _DEFAULT_BACKEND
