"""Exceptions raised by the Gaussian Naive Bayes package."""


class NaiveBayesError(Exception):
    """Base class for all package errors."""


class InvalidInputError(NaiveBayesError, ValueError):
    """Training data, prediction data or a snapshot is malformed."""


class DimensionMismatchError(NaiveBayesError, ValueError):
    """A prediction row does not have the trained number of features."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} features, got {actual}"
        )


class UnfittedModelError(NaiveBayesError, ValueError):
    """The classifier has no parameters yet."""

    def __init__(self, message: str = "Model not fitted. Call fit() or import_state() first."):
        super().__init__(message)
