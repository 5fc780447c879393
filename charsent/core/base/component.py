"""
流水线组件抽象基类

定义了流水线中有状态组件（流水线运行器、日志管理器等）的通用接口和行为。
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from datetime import datetime
import logging
import uuid
from enum import Enum


class PipelineComponent(ABC):
    """
    流水线组件抽象基类

    提供通用的标识、配置、生命周期管理和日志功能。
    """

    def __init__(self,
                 component_id: Optional[str] = None,
                 config: Optional[Dict[str, Any]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        初始化流水线组件

        Args:
            component_id: 组件唯一标识符，如果为None则自动生成
            config: 组件配置字典
            logger: 日志记录器，如果为None则创建默认日志器
        """
        self._component_id = component_id or str(uuid.uuid4())
        self._config = config or {}
        self._logger = logger or self._create_default_logger()
        self._created_at = datetime.now()
        self._status = ComponentStatus.CREATED

        # 验证配置
        self._validate_config()

        # 初始化组件
        self._initialize()

    @property
    def component_id(self) -> str:
        """获取组件ID"""
        return self._component_id

    @property
    def config(self) -> Dict[str, Any]:
        """获取组件配置"""
        return self._config.copy()

    @property
    def logger(self) -> logging.Logger:
        """获取日志记录器"""
        return self._logger

    @property
    def status(self) -> 'ComponentStatus':
        """获取组件状态"""
        return self._status

    @property
    def created_at(self) -> datetime:
        """获取创建时间"""
        return self._created_at

    def get_config_value(self, key: str, default: Any = None) -> Any:
        """
        获取配置值，支持嵌套键访问

        Args:
            key: 配置键，支持点分隔的嵌套访问，如 'evaluation.threshold'
            default: 默认值

        Returns:
            配置值或默认值
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @abstractmethod
    def _validate_config(self) -> None:
        """
        验证组件配置

        Raises:
            ConfigValidationError: 当配置无效时
        """
        pass

    @abstractmethod
    def _initialize(self) -> None:
        """初始化组件"""
        pass

    def _create_default_logger(self) -> logging.Logger:
        """创建默认日志记录器"""
        logger = logging.getLogger(f"charsent.{self.__class__.__name__}_{self._component_id[:8]}")
        if not logger.handlers and not logging.getLogger().handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '[%(asctime)s] %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.setLevel(logging.INFO)
        return logger

    def _set_status(self, status: 'ComponentStatus') -> None:
        """设置组件状态"""
        old_status = self._status
        self._status = status
        self._on_status_changed(old_status, status)

    def _on_status_changed(self, old_status: 'ComponentStatus', new_status: 'ComponentStatus') -> None:
        self._logger.debug(f"Status changed: {old_status.value} -> {new_status.value}")

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._component_id[:8]}, status={self._status.value})"

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"id='{self._component_id}', "
                f"status={self._status.value}, "
                f"created_at='{self._created_at.isoformat()}')")


class ComponentStatus(Enum):
    """组件状态枚举"""
    CREATED = "created"
    READY = "ready"
    RUNNING = "running"
    ERROR = "error"
