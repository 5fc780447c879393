"""
核心抽象层模块

提供流水线组件基类、日志管理器与异常体系。

使用示例：
    from charsent.core import PipelineComponent, ComponentStatus
    from charsent.core import SentimentPipelineException
"""

from .base import PipelineComponent, ComponentStatus
from .exceptions import (
    SentimentPipelineException,
    ErrorSeverity,
    ErrorCategory,
    ExceptionHandler,
)

__all__ = [
    'PipelineComponent', 'ComponentStatus',
    'SentimentPipelineException', 'ErrorSeverity', 'ErrorCategory',
    'ExceptionHandler',
]
