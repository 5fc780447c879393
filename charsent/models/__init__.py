"""
Frozen single-unit scorer and activation.
"""

from .linear_scorer import LinearScorer, init_parameters, score, score_rowwise, check_dimensions
from .activation import SigmoidActivation, sigmoid_

__all__ = [
    'LinearScorer', 'init_parameters', 'score', 'score_rowwise', 'check_dimensions',
    'SigmoidActivation', 'sigmoid_'
]
