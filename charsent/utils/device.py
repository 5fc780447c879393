"""
设备检测工具模块
"""
import logging

import torch

logger = logging.getLogger(__name__)


def get_device(preference: str = "auto") -> torch.device:
    """
    根据配置返回计算设备

    Args:
        preference: "auto" 自动选择；也可显式指定 "cpu" / "cuda" / "cuda:1"

    Returns:
        torch.device: 选定的设备
    """
    if preference and preference != "auto":
        device = torch.device(preference)
        if device.type == "cuda" and not torch.cuda.is_available():
            logger.warning(f"[Device] {preference} requested but CUDA not available, using CPU device")
            return torch.device("cpu")
        return device

    if torch.cuda.is_available():
        device = torch.device("cuda")
        logger.info(f"[Device] CUDA detected, using GPU device: {torch.cuda.get_device_name()}")
        return device
    logger.info("[Device] CUDA not available, using CPU device")
    return torch.device("cpu")
