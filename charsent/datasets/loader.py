"""
逗号分隔文本数据源的解析与加载

数据文件按字节读取并以 latin-1 解码：文件中的每个字节恰好成为文本中的
一个字符，截断长度与向量位置都按字节计。
"""
import logging
import os
import re
from typing import Iterable, List, Optional

from ..core.exceptions import DatasetAccessError
from .records import Record, truncate_text

logger = logging.getLogger(__name__)

# 可选空白与符号后的最长数字前缀
_LABEL_PREFIX = re.compile(r'[ \t\n\v\f\r]*([+-]?[0-9]+)')


def parse_label(token: str) -> int:
	"""
	解析标签列

	取去掉引号后的最长整数前缀；没有数字时标签为 0，该行仍然保留。
	"""
	match = _LABEL_PREFIX.match(token.strip().strip('"'))
	return int(match.group(1)) if match else 0


def parse_record(line: str, ignored_fields: int = 3, max_length: int = 1024) -> Optional[Record]:
	"""
	解析一行记录

	第 1 列为整数标签，随后 ignored_fields 列被跳过，剩余部分（可包含逗号）
	原样作为文本直到行尾。

	Args:
		line: 一行原始文本
		ignored_fields: 标签与文本之间被忽略的列数
		max_length: 文本缓冲区容量 L

	Returns:
		Record；文本列缺失或为空时返回 None
	"""
	line = line.rstrip('\r\n')
	parts = line.split(',', ignored_fields + 1)
	if len(parts) < ignored_fields + 2:
		return None

	text = parts[-1]
	if not text:
		return None
	return Record(text=truncate_text(text, max_length), label=parse_label(parts[0]))


def iter_records(lines: Iterable[str], ignored_fields: int = 3, max_length: int = 1024,
				 max_rows: Optional[int] = None, stats: Optional[dict] = None):
	"""
	逐行解析记录，静默丢弃格式错误的行

	Args:
		lines: 行迭代器
		ignored_fields: 被忽略的列数
		max_length: 文本缓冲区容量 L
		max_rows: 最多产出的有效样本数
		stats: 可选字典，写入 {'parsed': n, 'dropped': m}
	"""
	parsed = 0
	dropped = 0
	for line in lines:
		if max_rows is not None and parsed >= max_rows:
			break
		record = parse_record(line, ignored_fields=ignored_fields, max_length=max_length)
		if record is None:
			dropped += 1
			continue
		parsed += 1
		yield record
	if stats is not None:
		stats['parsed'] = parsed
		stats['dropped'] = dropped


def load_dataset(path: str, ignored_fields: int = 3, max_length: int = 1024,
				 max_rows: Optional[int] = None) -> List[Record]:
	"""
	从文件加载全部有效样本

	Args:
		path: 数据文件路径
		ignored_fields: 被忽略的列数
		max_length: 文本缓冲区容量 L
		max_rows: 可选的样本数上限（快速试跑用）

	Returns:
		Record 列表

	Raises:
		DatasetAccessError: 文件无法打开或读取时
	"""
	stats: dict = {}
	try:
		with open(path, 'rb') as f:
			lines = (raw.decode('latin-1') for raw in f)
			records = list(iter_records(lines, ignored_fields, max_length, max_rows, stats))
	except OSError as e:
		raise DatasetAccessError(f"Could not open file {path}", path=os.fspath(path), cause=e) from e

	logger.info(f"[Data] Loaded {stats.get('parsed', 0)} records from {path} "
				f"(dropped {stats.get('dropped', 0)} malformed rows)")
	return records
