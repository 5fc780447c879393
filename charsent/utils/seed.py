"""
随机种子设置工具模块
"""
import random
import time
from typing import Optional, Tuple

import torch


def resolve_seed(seed: Optional[int] = None) -> int:
	"""
	确定本次运行使用的随机种子

	Args:
		seed: 显式种子；为None时取当前时间

	Returns:
		实际使用的种子
	"""
	if seed is not None:
		return int(seed)
	return int(time.time_ns() % (2 ** 32))


def make_generators(seed: int) -> Tuple[random.Random, torch.Generator]:
	"""
	为洗牌和权重初始化分别创建独立的随机源，避免依赖全局随机状态

	Args:
		seed: 随机种子

	Returns:
		(用于洗牌的 random.Random, 用于权重初始化的 torch.Generator)
	"""
	rng = random.Random(seed)
	generator = torch.Generator()
	generator.manual_seed(seed)
	return rng, generator
