"""
Gaussian Naive Bayes Classifier.

Features are assumed Gaussian and conditionally independent given the class:

    P(x_j | c) = (1 / (sqrt(2π) * sqrt(σ²))) * exp(-(x_j - μ)² / (2σ²))
    score(c)   = ∏_j P(x_j | c)
    y_pred     = argmax_c score(c)

Class priors are not part of the score. Ties go to the class that sorts
first.

Zero variance: the density is +inf when x_j equals the class mean exactly
and 0 otherwise. A class with any zero density scores 0, so the product
never becomes NaN.
"""

from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional

import numpy as np

from evaluation.metrics import accuracy_score

from .backend import Backend, get_backend
from .config import DEFAULT_VAR_SMOOTHING, SQRT_2PI
from .errors import UnfittedModelError
from .estimator import FittedModel, fit_parameters
from .logging_util import get_logger
from .snapshot import ModelSnapshot
from .validation import check_feature_matrix, check_row

logger = get_logger(__name__)


def gaussian_density(x, mean, variance, backend: Backend = None):
    """
    Elementwise Gaussian density with the zero-variance policy applied.

    Args:
        x: Values, broadcastable against mean/variance
        mean: Means
        variance: Variances (>= 0)
        backend: Numeric backend

    Returns:
        Array of densities
    """
    backend = get_backend(backend)
    diff = x - mean

    with backend.errstate():
        exponent = backend.exp(-(diff ** 2) / (variance * 2))
        density = (1.0 / (backend.sqrt(variance) * SQRT_2PI)) * exponent

    at_mean = backend.where(diff == 0, float("inf"), 0.0)
    return backend.where(variance == 0, at_mean, density)


def joint_likelihood(X, model: FittedModel, backend: Backend = None):
    """
    Product of per-feature densities for every sample and class.

    Args:
        X: Validated float matrix (n_samples, n_features)
        model: Fitted parameters

    Returns:
        Score matrix (n_samples, n_classes)
    """
    backend = get_backend(backend)
    columns = []

    for i in range(model.n_classes):
        density = gaussian_density(X, model.mean[i], model.variance[i], backend)
        with backend.errstate():
            score = backend.prod_rows(density)
        # A single zero density excludes the class, even next to +inf
        columns.append(backend.where(backend.any_rows(density == 0), 0.0, score))

    return backend.transpose(backend.stack(columns))


class GaussianNB:
    """
    Gaussian Naive Bayes Classifier.

    Example:
        >>> nb = GaussianNB().fit([[1, 20], [2, 21], [3, 22], [4, 22]], [1, 0, 1, 0])
        >>> nb.predict([[1, 20]])
        [1]

    The fitted parameters live in a single immutable FittedModel that fit()
    and import_state() replace wholesale. Instances are not safe for
    concurrent fit/predict; callers must serialize access.
    """

    def __init__(self, var_smoothing: float = DEFAULT_VAR_SMOOTHING,
                 backend: Optional[Backend] = None):
        """
        Initialize Gaussian Naive Bayes.

        Args:
            var_smoothing: Added to every variance at fit time
            backend: Numeric backend (NumPy by default)
        """
        self.var_smoothing = var_smoothing
        self.backend = get_backend(backend)

        self._model: Optional[FittedModel] = None

    # -------------------------------------------------------------------------
    # Fitting
    # -------------------------------------------------------------------------

    def fit(self, X, y) -> 'GaussianNB':
        """
        Fit Gaussian Naive Bayes model.

        Args:
            X: Training features (n_samples, n_features)
            y: Training labels (n_samples,)

        Returns:
            self
        """
        model = fit_parameters(X, y, backend=self.backend,
                               var_smoothing=self.var_smoothing)
        self._model = model

        logger.info(
            "GaussianNB fitted: %d classes, %d features",
            model.n_classes, model.n_features
        )
        return self

    # -------------------------------------------------------------------------
    # Prediction
    # -------------------------------------------------------------------------

    def _require_model(self) -> FittedModel:
        if self._model is None:
            raise UnfittedModelError()
        return self._model

    def _check_matrix(self, X, model: FittedModel):
        X = check_feature_matrix(X, "X", allow_empty=True, n_features=model.n_features)
        return self.backend.asarray(X)

    def joint_likelihood(self, X) -> np.ndarray:
        """
        Per-class likelihood scores.

        Args:
            X: Feature matrix (n_samples, n_features)

        Returns:
            Score matrix (n_samples, n_classes), columns in classes_ order
        """
        model = self._require_model()
        X = self._check_matrix(X, model)
        if self.backend.shape(X)[0] == 0:
            return self.backend.empty((0, model.n_classes))
        return joint_likelihood(X, model, self.backend)

    def _predict_vector(self, x, model: FittedModel) -> Hashable:
        scores = joint_likelihood(self.backend.stack([self.backend.asarray(x)]), model, self.backend)
        index = int(self.backend.argmax_rows(scores)[0])
        return model.class_categories[index]

    def predict_one(self, x) -> Hashable:
        """
        Predict the class label of a single row.

        Args:
            x: Feature vector (n_features,)

        Returns:
            Predicted class label
        """
        model = self._require_model()
        return self._predict_vector(check_row(x, model.n_features), model)

    def predict(self, X) -> List[Hashable]:
        """
        Predict class labels.

        Args:
            X: Feature matrix (n_samples, n_features)

        Returns:
            Predicted class labels, one per row
        """
        model = self._require_model()
        X = self._check_matrix(X, model)
        if self.backend.shape(X)[0] == 0:
            return []

        indices = self.backend.argmax_rows(joint_likelihood(X, model, self.backend))
        return [model.class_categories[int(i)] for i in self.backend.to_list(indices)]

    def predict_iter(self, rows: Iterable) -> Iterator[Hashable]:
        """
        Lazily predict a stream of rows.

        One row is pulled from ``rows`` for every label produced. The model
        is captured when the stream is created, so a later fit() does not
        affect labels still to come.

        Args:
            rows: Iterable of feature vectors, possibly unbounded

        Returns:
            Iterator of predicted labels
        """
        model = self._require_model()
        return self._predict_stream(iter(rows), model)

    def _predict_stream(self, rows: Iterator, model: FittedModel) -> Iterator[Hashable]:
        for row in rows:
            yield self._predict_vector(check_row(row, model.n_features), model)

    def score(self, X, y) -> float:
        """Calculate accuracy."""
        return accuracy_score(y, self.predict(X))

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_fitted(self) -> bool:
        return self._model is not None

    @property
    def classes_(self) -> tuple:
        return self._require_model().class_categories

    @property
    def n_features(self) -> int:
        return self._require_model().n_features

    def model(self) -> Dict[str, Any]:
        """
        Live fitted parameters (read-only arrays, not copies).

        Returns:
            Dict with class_categories, mean and variance
        """
        model = self._require_model()
        return {
            'class_categories': list(model.class_categories),
            'mean': model.mean,
            'variance': model.variance,
        }

    def export_state(self) -> Dict[str, Any]:
        """
        Deep copy of the fitted parameters as plain data.

        Returns:
            Snapshot dict (version, class_categories, mean, variance)
        """
        model = self._require_model()
        return ModelSnapshot.from_model(model, self.backend).to_dict()

    def import_state(self, state) -> 'GaussianNB':
        """
        Replace the fitted parameters with a snapshot.

        No statistics are recomputed.

        Args:
            state: Snapshot dict or ModelSnapshot

        Returns:
            self
        """
        if not isinstance(state, ModelSnapshot):
            state = ModelSnapshot.from_dict(state)
        else:
            state.validate()

        self._model = state.to_model(self.backend)
        logger.info(
            "GaussianNB state imported: %d classes, %d features",
            self._model.n_classes, self._model.n_features
        )
        return self

    def save(self, path: str) -> str:
        """Write the fitted parameters to a JSON snapshot file."""
        model = self._require_model()
        return ModelSnapshot.from_model(model, self.backend).save_json(path)

    @classmethod
    def load(cls, path: str, **kwargs) -> 'GaussianNB':
        """Create a classifier from a JSON snapshot file."""
        return cls(**kwargs).import_state(ModelSnapshot.load_json(path))

    def get_params(self) -> dict:
        """Get constructor parameters."""
        return {
            'var_smoothing': self.var_smoothing,
            'backend': self.backend,
        }

    def __repr__(self) -> str:
        if self._model is None:
            return f"GaussianNB(var_smoothing={self.var_smoothing}, unfitted)"
        return (
            f"GaussianNB(var_smoothing={self.var_smoothing}, "
            f"classes={list(self._model.class_categories)}, "
            f"n_features={self._model.n_features})"
        )
