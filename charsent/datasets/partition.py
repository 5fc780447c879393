import logging
import math
import random
from typing import List, Optional, Sequence

from ..core.exceptions import EmptyDatasetError
from ..utils.seed import resolve_seed
from .loader import load_dataset
from .records import DatasetSplit, Record

logger = logging.getLogger(__name__)


def shuffle_records(records: List[Record], rng: random.Random) -> None:
	"""
	原地均匀随机打乱样本顺序（Fisher-Yates）

	调用期间 records 不得被其他组件并发读取。
	"""
	rng.shuffle(records)


def train_size_for(num_samples: int, train_ratio: float = 0.7) -> int:
	"""训练集大小 = floor(train_ratio * N)"""
	return int(math.floor(num_samples * train_ratio))


def split_dataset(records: Sequence[Record], train_ratio: float = 0.7,
				  seed: Optional[int] = None, rng: Optional[random.Random] = None) -> DatasetSplit:
	"""
	打乱并按比例划分训练/测试集

	Args:
		records: 全部样本；函数内部复制后再打乱，不修改调用方的序列
		train_ratio: 训练集比例
		seed: 随机种子，None 时使用当前时间
		rng: 显式随机源，给定时优先于 seed

	Returns:
		DatasetSplit，train 与 test 为新列表

	Raises:
		EmptyDatasetError: 样本数为 0 时
	"""
	num_samples = len(records)
	if num_samples == 0:
		raise EmptyDatasetError("No samples found in dataset.")

	seed = resolve_seed(seed)
	if rng is None:
		rng = random.Random(seed)

	dataset = list(records)
	shuffle_records(dataset, rng)

	train_size = train_size_for(num_samples, train_ratio)
	split = DatasetSplit(train=dataset[:train_size], test=dataset[train_size:], seed=seed)
	logger.info(f"[Data] Split {num_samples} samples into {len(split.train)} train / {len(split.test)} test")
	return split


def load_and_split(path: str, train_ratio: float = 0.7, seed: Optional[int] = None,
				   ignored_fields: int = 3, max_length: int = 1024,
				   max_rows: Optional[int] = None, rng: Optional[random.Random] = None) -> DatasetSplit:
	"""加载数据文件并划分训练/测试集，不保留划分前的数据集"""
	records = load_dataset(path, ignored_fields=ignored_fields, max_length=max_length, max_rows=max_rows)
	return split_dataset(records, train_ratio=train_ratio, seed=seed, rng=rng)
