"""
Evaluation Metrics for label classifiers.

Labels may be numbers or strings; matrices are laid out in sorted label
order, the same order GaussianNB uses for its classes.

Classification Metrics:
- Accuracy
- Confusion Matrix (label-aware)

Cross-Validation:
- Stratified k-fold index generation
- K-fold cross-validated accuracy
"""

import numpy as np
from typing import Tuple, List, Optional, Sequence, Hashable


# =============================================================================
# CLASSIFICATION METRICS
# =============================================================================

def accuracy_score(y_true: Sequence, y_pred: Sequence) -> float:
    """
    Calculate classification accuracy.

    Parameters
    ----------
    y_true : sequence
        Ground truth labels.
    y_pred : sequence
        Predicted labels.

    Returns
    -------
    float
        Accuracy score in [0, 1].

    Mathematical Definition
    -----------------------
    Accuracy = correct_predictions / total_predictions
    """
    y_true = list(np.asarray(y_true, dtype=object).ravel())
    y_pred = list(np.asarray(y_pred, dtype=object).ravel())

    if len(y_true) != len(y_pred):
        raise ValueError(
            f"y_true and y_pred length mismatch: {len(y_true)} vs {len(y_pred)}"
        )

    if len(y_true) == 0:
        return 0.0

    correct = sum(1 for t, p in zip(y_true, y_pred) if t == p)
    return correct / len(y_true)


def confusion_matrix(y_true: Sequence, y_pred: Sequence,
                     labels: Optional[Sequence[Hashable]] = None,
                     normalize: Optional[str] = None) -> np.ndarray:
    """
    Compute confusion matrix for arbitrary labels.

    Parameters
    ----------
    y_true : sequence
        Ground truth labels.
    y_pred : sequence
        Predicted labels.
    labels : sequence, optional
        Row/column order. If None, the sorted union of both label sets.
    normalize : str, optional
        Normalization mode: 'true' (by row), 'pred' (by column), 'all'.

    Returns
    -------
    np.ndarray
        Matrix of shape (n_labels, n_labels). Row i, column j counts samples
        with true label labels[i] predicted as labels[j].

    Example
    -------
    >>> confusion_matrix(['a', 'a', 'b'], ['a', 'b', 'b'])
    array([[1, 1],
           [0, 1]])
    """
    y_true = list(np.asarray(y_true, dtype=object).ravel())
    y_pred = list(np.asarray(y_pred, dtype=object).ravel())

    if labels is None:
        labels = sorted(set(y_true) | set(y_pred))
    index = {label: i for i, label in enumerate(labels)}

    cm = np.zeros((len(labels), len(labels)), dtype=np.int64)

    # Pairs with labels outside `labels` are ignored
    for true_label, pred_label in zip(y_true, y_pred):
        if true_label in index and pred_label in index:
            cm[index[true_label], index[pred_label]] += 1

    if normalize == 'true':
        row_sums = cm.sum(axis=1, keepdims=True)
        row_sums[row_sums == 0] = 1
        cm = cm.astype(np.float64) / row_sums
    elif normalize == 'pred':
        col_sums = cm.sum(axis=0, keepdims=True)
        col_sums[col_sums == 0] = 1
        cm = cm.astype(np.float64) / col_sums
    elif normalize == 'all':
        total = cm.sum()
        if total > 0:
            cm = cm.astype(np.float64) / total
    elif normalize is not None:
        raise ValueError(f"Unknown normalize mode: {normalize}")

    return cm


# =============================================================================
# CROSS-VALIDATION
# =============================================================================

def stratified_k_fold(y: Sequence, n_folds: int = 5,
                      shuffle: bool = True,
                      random_state: Optional[int] = None) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Generate stratified k-fold cross-validation indices.

    Parameters
    ----------
    y : sequence
        Target labels (for stratification).
    n_folds : int
        Number of folds.
    shuffle : bool
        Whether to shuffle indices before splitting.
    random_state : int, optional
        Random seed for reproducibility.

    Returns
    -------
    list
        List of (train_indices, test_indices) tuples.

    Stratification
    --------------
    Each fold receives approximately the same share of every class as the
    complete dataset.
    """
    if n_folds < 2:
        raise ValueError(f"n_folds must be at least 2, got {n_folds}")

    labels = list(np.asarray(y, dtype=object).ravel())
    if len(labels) < n_folds:
        raise ValueError(f"Cannot split {len(labels)} samples into {n_folds} folds")

    rng = np.random.RandomState(random_state)

    class_indices = {}
    for i, label in enumerate(labels):
        class_indices.setdefault(label, []).append(i)

    folds = [{'train': [], 'test': []} for _ in range(n_folds)]

    for label in sorted(class_indices):
        indices = np.array(class_indices[label])
        if shuffle:
            rng.shuffle(indices)

        n_cls = len(indices)
        fold_sizes = [n_cls // n_folds] * n_folds
        for i in range(n_cls % n_folds):
            fold_sizes[i] += 1

        current_idx = 0
        for fold_idx in range(n_folds):
            fold_size = fold_sizes[fold_idx]
            test_idx = indices[current_idx:current_idx + fold_size]
            train_idx = np.concatenate([
                indices[:current_idx],
                indices[current_idx + fold_size:]
            ])
            folds[fold_idx]['test'].extend(test_idx.tolist())
            folds[fold_idx]['train'].extend(train_idx.tolist())
            current_idx += fold_size

    result = []
    for fold in folds:
        train_indices = np.array(fold['train'], dtype=np.int64)
        test_indices = np.array(fold['test'], dtype=np.int64)
        if shuffle:
            rng.shuffle(train_indices)
            rng.shuffle(test_indices)
        result.append((train_indices, test_indices))

    return result


def cross_val_score(model, X, y,
                    cv: int = 5,
                    stratify: bool = True,
                    random_state: Optional[int] = None,
                    verbose: bool = False) -> np.ndarray:
    """
    Evaluate a classifier using cross-validated accuracy.

    Parameters
    ----------
    model : object
        Classifier with fit(), predict() and get_params(). A fresh instance
        is built for every fold from get_params().
    X : array-like
        Feature matrix.
    y : sequence
        Target labels.
    cv : int
        Number of cross-validation folds.
    stratify : bool
        Whether to use stratified k-fold.
    random_state : int, optional
        Random seed.
    verbose : bool
        Whether to print per-fold scores.

    Returns
    -------
    np.ndarray
        Accuracy for each fold.
    """
    X = np.asarray(X, dtype=np.float64)
    labels = np.asarray(y, dtype=object).ravel()

    if stratify:
        folds = stratified_k_fold(labels, n_folds=cv, shuffle=True,
                                  random_state=random_state)
    else:
        rng = np.random.RandomState(random_state)
        indices = np.arange(len(labels))
        rng.shuffle(indices)
        fold_size = len(labels) // cv
        folds = []
        for i in range(cv):
            start = i * fold_size
            end = start + fold_size if i < cv - 1 else len(labels)
            test_idx = indices[start:end]
            train_idx = np.concatenate([indices[:start], indices[end:]])
            folds.append((train_idx, test_idx))

    scores = []

    for fold_idx, (train_idx, test_idx) in enumerate(folds):
        model_clone = model.__class__(**model.get_params())
        model_clone.fit(X[train_idx], labels[train_idx].tolist())

        y_pred = model_clone.predict(X[test_idx])
        score = accuracy_score(labels[test_idx], y_pred)
        scores.append(score)

        if verbose:
            print(f"  Fold {fold_idx + 1}/{cv}: accuracy = {score:.4f}")

    return np.array(scores)
