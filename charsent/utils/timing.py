"""
阶段计时工具
"""
import logging
import time
from typing import Dict, Optional


class StageTimer:
	"""
	记录各阶段耗时的上下文管理器

	用法：
		timer = StageTimer()
		with timer.stage("vectorize"):
			...
		timer.timings["vectorize"]
	"""

	def __init__(self, logger: Optional[logging.Logger] = None):
		self.logger = logger
		self.timings: Dict[str, float] = {}

	def stage(self, name: str, label: Optional[str] = None) -> "_Stage":
		return _Stage(self, name, label or name)

	def record(self, name: str, seconds: float) -> None:
		# 同名阶段（如分批处理）累加
		self.timings[name] = self.timings.get(name, 0.0) + seconds

	@property
	def total(self) -> float:
		return sum(self.timings.values())


class _Stage:
	def __init__(self, timer: StageTimer, name: str, label: str):
		self._timer = timer
		self._name = name
		self._label = label
		self._start = 0.0

	def __enter__(self) -> "_Stage":
		self._start = time.perf_counter()
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		elapsed = time.perf_counter() - self._start
		self._timer.record(self._name, elapsed)
		if self._timer.logger is not None and exc_type is None:
			self._timer.logger.debug(f"{self._label} Time: {elapsed:.4f} seconds")
