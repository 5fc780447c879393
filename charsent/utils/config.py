"""
配置文件加载和管理模块
"""
import argparse
import copy
from typing import Any, Dict, List, Optional

import yaml

from ..core.exceptions import ConfigValidationError


# 流水线固定常量的默认值
DEFAULT_CONFIG: Dict[str, Any] = {
	'seed': None,
	'data': {
		'path': 'last_500000_rows.csv',
		'max_text_length': 1024,
		'ignored_fields': 3,
		'max_rows': None,
	},
	'model': {
		'embedding_dim': 1024,
	},
	'split': {
		'train_ratio': 0.7,
	},
	'evaluation': {
		'threshold': 0.6,
		'positive_label': 4,
		'negative_label': 0,
	},
	'pipeline': {
		'batch_size': 4096,
		'parallel_splits': False,
		'device': 'cpu',
	},
	'logging': {
		'level': 'INFO',
		'output_dir': None,
	},
}


def load_yaml(path: str) -> Dict[str, Any]:
	"""
	加载YAML配置文件

	Args:
		path: 配置文件路径

	Returns:
		解析后的配置字典，如果文件不存在或为空则返回空字典
	"""
	try:
		with open(path, 'r', encoding='utf-8') as f:
			return yaml.safe_load(f) or {}
	except FileNotFoundError:
		return {}


def deep_update(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
	"""
	深度合并两个字典，将b的键值对合并到a中

	Args:
		a: 目标字典（将被修改）
		b: 源字典（提供新值）

	Returns:
		合并后的字典a
	"""
	for k, v in b.items():
		if isinstance(v, dict) and isinstance(a.get(k), dict):
			a[k] = deep_update(a[k], v)
		else:
			a[k] = v
	return a


def parse_cli_overrides(overrides: List[str]) -> Dict[str, Any]:
	"""
	解析命令行覆盖参数，将key=value格式转换为嵌套字典

	使用点号表示嵌套路径，例如：
	["evaluation.threshold=0.5", "split.train_ratio=0.8", "seed=null"]

	Args:
		overrides: 命令行覆盖参数列表

	Returns:
		解析后的嵌套字典结构
	"""
	result: Dict[str, Any] = {}
	for item in overrides or []:
		if '=' not in item:
			continue
		key, val = item.split('=', 1)
		# 尝试转换数字、布尔值和空值类型
		if val.lower() in {"true", "false"}:
			cast_val: Any = val.lower() == "true"
		elif val.lower() in {"null", "none"}:
			cast_val = None
		else:
			try:
				if '.' in val or 'e' in val.lower():
					cast_val = float(val)
				else:
					cast_val = int(val)
			except ValueError:
				# 如果无法转换为数字，保持原字符串格式
				cast_val = val
		nodes = key.split('.')
		cur = result
		for n in nodes[:-1]:
			if n not in cur or not isinstance(cur[n], dict):
				cur[n] = {}
			cur = cur[n]
		cur[nodes[-1]] = cast_val
	return result


def load_config(config_path: Optional[str] = None, cli_overrides: Optional[List[str]] = None) -> Dict[str, Any]:
	"""
	合并默认配置、配置文件和命令行覆盖参数

	Args:
		config_path: YAML配置文件路径（可选）
		cli_overrides: 命令行覆盖参数列表

	Returns:
		合并并验证后的完整配置字典
	"""
	cfg = copy.deepcopy(DEFAULT_CONFIG)
	if config_path:
		cfg = deep_update(cfg, load_yaml(config_path))
	if cli_overrides:
		cfg = deep_update(cfg, parse_cli_overrides(cli_overrides))
	validate_config(cfg)
	return cfg


def _require_int(cfg: Dict[str, Any], section: str, key: str, minimum: int) -> None:
	value = cfg.get(section, {}).get(key)
	if isinstance(value, bool) or not isinstance(value, int):
		raise ConfigValidationError(
			f"{section}.{key} must be an integer",
			context={'value': value}
		)
	if value < minimum:
		raise ConfigValidationError(
			f"{section}.{key} must be >= {minimum}",
			context={'value': value}
		)


def validate_config(cfg: Dict[str, Any]) -> None:
	"""
	验证配置的合法性

	Args:
		cfg: 配置字典

	Raises:
		ConfigValidationError: 当配置不符合规则时抛出异常
	"""
	_require_int(cfg, 'data', 'max_text_length', 2)
	_require_int(cfg, 'data', 'ignored_fields', 0)
	_require_int(cfg, 'model', 'embedding_dim', 1)
	_require_int(cfg, 'pipeline', 'batch_size', 1)
	_require_int(cfg, 'evaluation', 'positive_label', -2**31)
	_require_int(cfg, 'evaluation', 'negative_label', -2**31)

	max_rows = cfg['data'].get('max_rows')
	if max_rows is not None and (isinstance(max_rows, bool) or not isinstance(max_rows, int) or max_rows < 0):
		raise ConfigValidationError("data.max_rows must be null or a non-negative integer", context={'value': max_rows})

	ratio = cfg['split'].get('train_ratio')
	if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not (0.0 < float(ratio) < 1.0):
		raise ConfigValidationError("split.train_ratio must be between 0 and 1", context={'value': ratio})

	threshold = cfg['evaluation'].get('threshold')
	if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
		raise ConfigValidationError("evaluation.threshold must be a number", context={'value': threshold})

	if cfg['evaluation']['positive_label'] == cfg['evaluation']['negative_label']:
		raise ConfigValidationError(
			"evaluation.positive_label and evaluation.negative_label must differ",
			context={'value': cfg['evaluation']['positive_label']}
		)

	seed = cfg.get('seed')
	if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
		raise ConfigValidationError("seed must be null or an integer", context={'value': seed})


def build_argparser() -> argparse.ArgumentParser:
	"""
	构建命令行参数解析器

	Returns:
		配置好的参数解析器对象
	"""
	parser = argparse.ArgumentParser(
		description='Run the frozen-random character-level sentiment forward pipeline.'
	)
	parser.add_argument('--config', type=str, default=None, help='pipeline config yaml')
	parser.add_argument('--data', type=str, default=None, help='labeled CSV source (overrides data.path)')
	parser.add_argument('--seed', type=int, default=None, help='seed for shuffle and weight initialisation')
	parser.add_argument('--output-dir', type=str, default=None, help='directory for metrics json and event log')
	parser.add_argument('--override', type=str, nargs='*', default=None, help='dot.notation overrides')
	return parser
