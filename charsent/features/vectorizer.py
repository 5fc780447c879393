"""
字符级定长向量化

每个字符按其字节值（0-255）映射为 byte / 255.0，位置与字符下标一一对应，
文本长度之外的位置保持为 0。
"""
import logging
from typing import Sequence, Union

import numpy as np
import torch

from ..core.exceptions import TextEncodingError
from ..datasets.records import Record

logger = logging.getLogger(__name__)


def encode_text(text: str) -> bytes:
	"""
	将文本编码为每字符一个字节

	字符 j 直接映射为字节 ord(text[j])，不同字符得到不同字节。数据文件按
	latin-1 解码读取，因此文件中的每个字节都恰好对应一个字符。

	Raises:
		TextEncodingError: 文本含有码位大于 255 的字符时
	"""
	try:
		return text.encode('latin-1')
	except UnicodeEncodeError as e:
		raise TextEncodingError(
			f"Character {text[e.start]!r} at position {e.start} does not fit in one byte",
			position=e.start, character=text[e.start], cause=e
		) from e


def _as_text(item: Union[Record, str]) -> str:
	return item.text if isinstance(item, Record) else item


def vectorize(items: Sequence[Union[Record, str]], max_length: int = 1024) -> torch.Tensor:
	"""
	将样本序列编码为 N × L 的嵌入矩阵

	Args:
		items: Record 或字符串序列
		max_length: 向量宽度 L；超出部分被截去

	Returns:
		float32 张量，形状 (N, L)；填充位置为精确的 0.0
	"""
	num_samples = len(items)
	# 先在零初始化的字节缓冲区中逐行写入，各行互不依赖
	buffer = np.zeros((num_samples, max_length), dtype=np.uint8)
	for i, item in enumerate(items):
		encoded = encode_text(_as_text(item)[:max_length])
		if encoded:
			buffer[i, : len(encoded)] = np.frombuffer(encoded, dtype=np.uint8)
	return torch.from_numpy(buffer).to(torch.float32).div_(255.0)


class CharVectorizer:
	"""持有向量宽度的可调用向量化器"""

	def __init__(self, max_length: int = 1024):
		if max_length < 1:
			raise ValueError(f"max_length must be positive, got {max_length}")
		self.max_length = int(max_length)

	@property
	def dim(self) -> int:
		return self.max_length

	def __call__(self, items: Sequence[Union[Record, str]]) -> torch.Tensor:
		return vectorize(items, self.max_length)

	def __repr__(self) -> str:
		return f"CharVectorizer(max_length={self.max_length})"
