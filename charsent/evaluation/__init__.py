"""
Evaluation metrics for the forward pipeline.
"""

from .metrics import (
    DECISION_THRESHOLD, POSITIVE_LABEL, NEGATIVE_LABEL,
    predict_labels, count_correct, compute_accuracy, evaluate_outputs
)

__all__ = [
    'DECISION_THRESHOLD', 'POSITIVE_LABEL', 'NEGATIVE_LABEL',
    'predict_labels', 'count_correct', 'compute_accuracy', 'evaluate_outputs'
]
