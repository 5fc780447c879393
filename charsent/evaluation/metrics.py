"""
Accuracy evaluation for activated outputs.

Predictions come from a fixed decision threshold: an output strictly above
the threshold is the positive label, anything else the negative label.
"""

from typing import Any, Dict

import torch
from sklearn.metrics import confusion_matrix, f1_score

from ..core.exceptions import DimensionMismatchError, EmptyDatasetError

DECISION_THRESHOLD = 0.6
POSITIVE_LABEL = 4
NEGATIVE_LABEL = 0


def predict_labels(outputs: torch.Tensor, threshold: float = DECISION_THRESHOLD,
                   positive_label: int = POSITIVE_LABEL, negative_label: int = NEGATIVE_LABEL) -> torch.Tensor:
    """
    Threshold activated outputs into class labels.

    Args:
        outputs: Activated outputs, shape (N,)
        threshold: Decision threshold; ``output > threshold`` is positive
        positive_label: Label emitted for positive predictions
        negative_label: Label emitted otherwise

    Returns:
        Long tensor of predicted labels, shape (N,)
    """
    positive = torch.full(outputs.shape, positive_label, dtype=torch.long, device=outputs.device)
    negative = torch.full(outputs.shape, negative_label, dtype=torch.long, device=outputs.device)
    return torch.where(outputs > threshold, positive, negative)


def _check_inputs(outputs: torch.Tensor, labels: torch.Tensor) -> int:
    num_samples = outputs.shape[0] if outputs.dim() > 0 else 0
    if outputs.dim() != 1 or labels.dim() != 1 or labels.shape[0] != num_samples:
        raise DimensionMismatchError(
            f"outputs {tuple(outputs.shape)} and labels {tuple(labels.shape)} must be 1-D of equal length",
            expected=num_samples, actual=labels.shape[0] if labels.dim() == 1 else labels.dim()
        )
    if num_samples == 0:
        raise EmptyDatasetError("Cannot evaluate accuracy on zero samples.")
    return num_samples


def count_correct(outputs: torch.Tensor, labels: torch.Tensor, threshold: float = DECISION_THRESHOLD,
                  positive_label: int = POSITIVE_LABEL, negative_label: int = NEGATIVE_LABEL) -> int:
    """Number of predictions matching ground truth (no emptiness check)."""
    predicted = predict_labels(outputs, threshold, positive_label, negative_label)
    return int((predicted == labels.to(predicted.device)).sum().item())


def compute_accuracy(outputs: torch.Tensor, labels: torch.Tensor, threshold: float = DECISION_THRESHOLD,
                     positive_label: int = POSITIVE_LABEL, negative_label: int = NEGATIVE_LABEL) -> float:
    """
    Fraction of samples whose thresholded prediction equals the label.

    Raises:
        EmptyDatasetError: If there are no samples
        DimensionMismatchError: If outputs and labels differ in length
    """
    num_samples = _check_inputs(outputs, labels)
    correct = count_correct(outputs, labels, threshold, positive_label, negative_label)
    return correct / num_samples


def evaluate_outputs(outputs: torch.Tensor, labels: torch.Tensor, threshold: float = DECISION_THRESHOLD,
                     positive_label: int = POSITIVE_LABEL, negative_label: int = NEGATIVE_LABEL) -> Dict[str, Any]:
    """
    Accuracy plus supplementary binary-classification metrics.

    Returns:
        Dictionary with ``accuracy``, ``num_samples``, ``num_correct``,
        ``positive_rate``, ``f1`` (positive class) and ``confusion_matrix``
        (rows/cols ordered negative, positive; None when some label is
        neither class)
    """
    num_samples = _check_inputs(outputs, labels)
    predicted = predict_labels(outputs, threshold, positive_label, negative_label)
    y_true = labels.cpu().numpy()
    y_pred = predicted.cpu().numpy()
    num_correct = int((y_true == y_pred).sum())

    if set(y_true.tolist()) <= {negative_label, positive_label}:
        cm = confusion_matrix(y_true, y_pred, labels=[negative_label, positive_label]).tolist()
        f1 = f1_score(y_true, y_pred, pos_label=positive_label, average='binary', zero_division=0)
    else:
        # Ground truth outside the two known classes; per-class metrics are undefined
        cm = None
        f1 = float('nan')

    return {
        "accuracy": num_correct / num_samples,
        "num_samples": num_samples,
        "num_correct": num_correct,
        "positive_rate": float((y_pred == positive_label).mean()),
        "f1": float(f1),
        "confusion_matrix": cm,
    }
