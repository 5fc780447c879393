import logging
from typing import Union


def configure_logging(level: Union[str, int] = "INFO") -> None:
	"""
	为命令行运行设置根日志格式

	Args:
		level: 日志级别名称或数值
	"""
	if isinstance(level, str):
		level = getattr(logging, level.upper(), logging.INFO)
	logging.basicConfig(
		level=level,
		format='[%(asctime)s] %(name)s - %(levelname)s - %(message)s',
	)
	logging.getLogger().setLevel(level)
