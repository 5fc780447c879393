"""
异常模块

导出所有自定义异常类，提供统一的异常处理。
"""

from .exceptions import (
    # 基础异常类
    SentimentPipelineException,
    ErrorSeverity,
    ErrorCategory,

    # 配置异常
    ConfigurationError,
    ConfigValidationError,

    # 数据异常
    DataError,
    DatasetAccessError,
    EmptyDatasetError,
    EmptySplitError,
    TextEncodingError,

    # 模型异常
    ModelError,
    DimensionMismatchError,

    # 资源异常
    ResourceExhaustionError,

    # 工具类
    ExceptionHandler,
)

__all__ = [
    'SentimentPipelineException', 'ErrorSeverity', 'ErrorCategory',
    'ConfigurationError', 'ConfigValidationError',
    'DataError', 'DatasetAccessError', 'EmptyDatasetError', 'EmptySplitError', 'TextEncodingError',
    'ModelError', 'DimensionMismatchError',
    'ResourceExhaustionError',
    'ExceptionHandler',
]
