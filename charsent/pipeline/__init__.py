"""
Forward pipeline orchestration.
"""

from .runner import ForwardPipeline, PipelineResult, SplitReport

__all__ = ['ForwardPipeline', 'PipelineResult', 'SplitReport']
