"""
Evaluation module for label classifiers.

Provides:
- Classification metrics: accuracy, label-aware confusion matrix
- Cross-validation: stratified k-fold indices and cross-validated accuracy
"""

from .metrics import (
    # Classification metrics
    accuracy_score,
    confusion_matrix,

    # Cross-validation
    stratified_k_fold,
    cross_val_score,
)

__all__ = [
    # Classification metrics
    'accuracy_score',
    'confusion_matrix',

    # Cross-validation
    'stratified_k_fold',
    'cross_val_score',
]
