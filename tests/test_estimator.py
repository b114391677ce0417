"""
Parameter estimation tests.

Tests for:
- Per-class mean and population variance
- Class catalog ordering
- Training input validation
"""

import logging
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from naive_bayes import fit_parameters, partition_by_class, InvalidInputError


X_REF = [[1, 20], [2, 21], [3, 22], [4, 22]]
Y_REF = [1, 0, 1, 0]


def test_reference_parameters():
    """Mean/variance of the reference data set (divisor = class size)."""
    model = fit_parameters(X_REF, Y_REF)

    assert model.class_categories == (0, 1)
    np.testing.assert_allclose(model.mean, [[3.0, 21.5], [2.0, 21.0]])
    np.testing.assert_allclose(model.variance, [[1.0, 0.25], [1.0, 1.0]])
    assert model.n_classes == 2
    assert model.n_features == 2


def test_catalog_sorted_regardless_of_label_order():
    """Class catalog is ascending and independent of first appearance."""
    rng = np.random.RandomState(0)
    X = rng.randn(30, 3)
    y = [5, 2, 9] * 10

    model = fit_parameters(X, y)
    shuffled = rng.permutation(30)
    model_shuffled = fit_parameters(X[shuffled], np.array(y)[shuffled])

    assert model.class_categories == (2, 5, 9)
    assert model_shuffled.class_categories == (2, 5, 9)
    np.testing.assert_allclose(model.mean, model_shuffled.mean)
    np.testing.assert_allclose(model.variance, model_shuffled.variance)


def test_string_labels_sorted():
    model = fit_parameters([[0.0], [1.0], [2.0], [3.0]], ['dog', 'cat', 'dog', 'bird'])
    assert model.class_categories == ('bird', 'cat', 'dog')
    np.testing.assert_allclose(model.mean[:, 0], [3.0, 1.0, 1.0])


def test_numeric_labels_sort_numerically():
    model = fit_parameters([[0.0], [1.0], [2.0]], [10, 9, 100])
    assert model.class_categories == (9, 10, 100)


def test_numpy_labels_become_plain_values():
    model = fit_parameters(np.array(X_REF), np.array(Y_REF, dtype=np.int64))
    assert all(type(c) is int for c in model.class_categories)


def test_variance_non_negative():
    """Variance is never negative on random data."""
    rng = np.random.RandomState(42)
    for _ in range(5):
        X = rng.randn(50, 4) * rng.uniform(0.01, 100)
        y = rng.randint(0, 4, size=50)
        model = fit_parameters(X, y)
        assert np.all(model.variance >= 0)


def test_matches_numpy_population_variance():
    rng = np.random.RandomState(7)
    X = rng.randn(40, 5)
    y = rng.randint(0, 3, size=40)

    model = fit_parameters(X, y)

    for i, cls in enumerate(model.class_categories):
        X_cls = X[y == cls]
        np.testing.assert_allclose(model.mean[i], X_cls.mean(axis=0))
        np.testing.assert_allclose(model.variance[i], X_cls.var(axis=0, ddof=0))


def test_single_sample_class_has_zero_variance(caplog):
    """A class with one row gets variance 0 and a warning is logged."""
    X = [[1.0, 2.0], [1.5, 2.5], [10.0, 20.0]]
    y = ['a', 'a', 'b']

    with caplog.at_level(logging.WARNING, logger="naive_bayes"):
        model = fit_parameters(X, y)

    np.testing.assert_array_equal(model.variance[1], [0.0, 0.0])
    np.testing.assert_allclose(model.mean[1], [10.0, 20.0])
    assert any("Near-zero variance" in r.getMessage() and "'b'" in r.getMessage()
               for r in caplog.records)


def test_var_smoothing_added():
    model = fit_parameters(X_REF, Y_REF, var_smoothing=0.5)
    np.testing.assert_allclose(model.variance, [[1.5, 0.75], [1.5, 1.5]])


def test_negative_var_smoothing_rejected():
    with pytest.raises(InvalidInputError):
        fit_parameters(X_REF, Y_REF, var_smoothing=-1.0)


def test_parameters_are_read_only():
    model = fit_parameters(X_REF, Y_REF)
    with pytest.raises(ValueError):
        model.mean[0, 0] = 99.0


def test_inputs_not_mutated():
    X = np.array(X_REF, dtype=np.float64)
    y = list(Y_REF)
    X_before = X.copy()

    fit_parameters(X, y)

    np.testing.assert_array_equal(X, X_before)
    assert y == Y_REF


def test_partition_preserves_row_order():
    groups = partition_by_class(['b', 'a', 'b', 'a', 'b'])
    assert groups['a'] == [1, 3]
    assert groups['b'] == [0, 2, 4]


@pytest.mark.parametrize("X, y, message", [
    (None, [1], "must not be None"),
    ([[1.0]], None, "must not be None"),
    ([], [], "must not be empty"),
    ([[1.0], [2.0]], [1], "length mismatch"),
    ([[1.0, 2.0], [3.0]], [0, 1], "ragged"),
    ([[1.0, 'x'], [3.0, 4.0]], [0, 1], "non-numeric"),
    ([[1.0, float('nan')]], [0], "NaN"),
    ([[], []], [0, 1], "at least one feature"),
    ([[1.0], [2.0]], [[0], [1]], "not a scalar"),
    ([[1.0], [2.0]], [0, 'a'], "total order"),
    (np.zeros(3), [0, 1, 2], "2-D"),
    ([[10 ** 400], [1]], [0, 1], "float64"),
])
def test_invalid_training_input(X, y, message):
    with pytest.raises(InvalidInputError, match=message):
        fit_parameters(X, y)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        fit_parameters([], [])
