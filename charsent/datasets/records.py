from dataclasses import dataclass, field
from typing import List, Sequence

import torch


@dataclass(frozen=True)
class Record:
	"""单条带标签文本样本，text 长度不超过 max_text_length - 1"""
	text: str
	label: int


@dataclass
class DatasetSplit:
	"""训练/测试划分结果，持有各自的样本列表副本"""
	train: List[Record] = field(default_factory=list)
	test: List[Record] = field(default_factory=list)
	seed: int = 0

	def __len__(self) -> int:
		return len(self.train) + len(self.test)


def truncate_text(text: str, max_length: int) -> str:
	"""
	截断文本，为终止符保留最后一个位置

	Args:
		text: 原始文本
		max_length: 文本缓冲区容量 L

	Returns:
		最多 L-1 个字符（按 latin-1 读取时即 L-1 个字节）；超长时静默截断
	"""
	return text[: max_length - 1]


def labels_tensor(records: Sequence[Record]) -> torch.Tensor:
	"""从样本序列导出标签向量"""
	return torch.tensor([r.label for r in records], dtype=torch.long)
