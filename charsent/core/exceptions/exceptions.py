"""
情感分类流水线自定义异常体系

按类别（配置、数据、模型、资源）组织流水线异常，每个异常携带严重程度、
上下文与原因，便于命令行入口统一记录并写出错误报告。
"""

from typing import Optional, Dict, Any
import traceback
from enum import Enum


class ErrorSeverity(Enum):
    """错误严重程度"""
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """错误类别"""
    CONFIGURATION = "configuration"
    DATA = "data"
    MODEL = "model"
    RESOURCE = "resource"
    SYSTEM = "system"


def _with_context(kwargs: Dict[str, Any], **items: Any) -> Dict[str, Any]:
    """把非 None 的字段并入 kwargs 中的 context"""
    context = dict(kwargs.pop('context', None) or {})
    context.update({k: v for k, v in items.items() if v is not None})
    return context


class SentimentPipelineException(Exception):
    """
    流水线基础异常类

    Args:
        message: 错误消息
        error_code: 错误代码，缺省时由类别和类名生成
        severity: 错误严重程度
        category: 错误类别
        context: 附加上下文（路径、划分名、维度等）
        cause: 引起此异常的原始异常
    """

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 category: ErrorCategory = ErrorCategory.SYSTEM,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.category = category
        self.context = context or {}
        self.cause = cause
        self.error_code = error_code or f"{category.value.upper()}_{type(self).__name__.upper()}"
        self.traceback_info = traceback.format_exc() if cause else None

    def get_full_message(self) -> str:
        """错误代码、消息、上下文与原因拼接成一行"""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in self.context.items()))
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "traceback": self.traceback_info
        }

    def __str__(self) -> str:
        return self.get_full_message()


# =============================================================================
# 配置
# =============================================================================

class ConfigurationError(SentimentPipelineException):
    """配置错误基类"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, severity=ErrorSeverity.HIGH, category=ErrorCategory.CONFIGURATION, **kwargs)


class ConfigValidationError(ConfigurationError):
    """配置值越界或类型错误"""
    pass


# =============================================================================
# 数据
# =============================================================================

class DataError(SentimentPipelineException):
    """数据错误基类"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, category=ErrorCategory.DATA, **kwargs)


class DatasetAccessError(DataError):
    """数据源无法读取（加载阶段致命错误）"""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        context = _with_context(kwargs, path=path)
        super().__init__(message, severity=ErrorSeverity.CRITICAL, context=context, **kwargs)


class EmptyDatasetError(DataError):
    """数据集为空，无法划分或评估"""
    pass


class EmptySplitError(DataError):
    """训练集或测试集划分后为空"""

    def __init__(self, message: str, split_name: Optional[str] = None, **kwargs):
        super().__init__(message, context=_with_context(kwargs, split=split_name), **kwargs)


class TextEncodingError(DataError):
    """文本含有无法用单个字节表示的字符"""

    def __init__(self, message: str, position: Optional[int] = None, character: Optional[str] = None, **kwargs):
        context = _with_context(kwargs, position=position, character=character)
        super().__init__(message, context=context, **kwargs)


# =============================================================================
# 模型
# =============================================================================

class ModelError(SentimentPipelineException):
    """模型错误基类"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, category=ErrorCategory.MODEL, **kwargs)


class DimensionMismatchError(ModelError):
    """嵌入宽度与权重向量长度不一致"""

    def __init__(self, message: str, expected: Optional[int] = None, actual: Optional[int] = None, **kwargs):
        super().__init__(message, context=_with_context(kwargs, expected=expected, actual=actual), **kwargs)


# =============================================================================
# 资源
# =============================================================================

class ResourceExhaustionError(SentimentPipelineException):
    """内存等资源分配失败"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, severity=ErrorSeverity.CRITICAL, category=ErrorCategory.RESOURCE, **kwargs)


# =============================================================================
# 异常处理
# =============================================================================

class ExceptionHandler:
    """统一记录流水线异常并生成错误报告"""

    @staticmethod
    def handle_exception(exception: Exception,
                         logger=None,
                         reraise: bool = True,
                         context: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        记录异常，按需重新抛出

        Args:
            exception: 异常实例；非流水线异常按 SYSTEM 类别包装后记录
            logger: 日志记录器
            reraise: 是否重新抛出异常
            context: 包装普通异常时附加的上下文

        Returns:
            异常信息字典（不重新抛出时）
        """
        if not isinstance(exception, SentimentPipelineException):
            exception_info = SentimentPipelineException(str(exception), cause=exception, context=context).to_dict()
        else:
            exception_info = exception.to_dict()

        if logger:
            logger.error(f"Exception occurred: {exception_info['error_code']} - {exception_info['message']}")

        if reraise:
            raise exception
        return exception_info

    @staticmethod
    def create_error_response(exception: SentimentPipelineException) -> Dict[str, Any]:
        """
        失败运行的报告，与成功运行的指标文件并列写出

        Returns:
            {"success": False, "error": exception.to_dict()}
        """
        return {"success": False, "error": exception.to_dict()}
