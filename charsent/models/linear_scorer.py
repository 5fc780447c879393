import math
from typing import Any, Dict, Optional, Tuple

import torch
import torch.nn as nn

from ..core.exceptions import DimensionMismatchError


def init_parameters(dim: int, generator: Optional[torch.Generator] = None) -> Tuple[torch.Tensor, torch.Tensor]:
	"""
	随机初始化权重与偏置（Xavier 风格缩放）

	Args:
		dim: 嵌入维度 D
		generator: 随机源；为 None 时使用全局随机状态

	Returns:
		(weights, bias)：weights 形状 (D,)，元素服从 U[0,1) * sqrt(2/D)；bias 为标量 0
	"""
	if dim < 1:
		raise DimensionMismatchError(f"embedding dimension must be positive, got {dim}", actual=dim)
	weights = torch.rand(dim, generator=generator, dtype=torch.float32) * math.sqrt(2.0 / dim)
	bias = torch.zeros((), dtype=torch.float32)
	return weights, bias


def check_dimensions(matrix: torch.Tensor, weights: torch.Tensor) -> None:
	"""
	校验嵌入矩阵宽度与权重向量长度一致

	Raises:
		DimensionMismatchError: 形状不符合 (N, D) 与 (D,) 时
	"""
	if matrix.dim() != 2:
		raise DimensionMismatchError(
			f"embedding matrix must be 2-D, got shape {tuple(matrix.shape)}",
			expected=2, actual=matrix.dim()
		)
	if weights.dim() != 1:
		raise DimensionMismatchError(
			f"weights must be 1-D, got shape {tuple(weights.shape)}",
			expected=1, actual=weights.dim()
		)
	if matrix.shape[1] != weights.shape[0]:
		raise DimensionMismatchError(
			f"embedding width {matrix.shape[1]} != weight length {weights.shape[0]}",
			expected=weights.shape[0], actual=matrix.shape[1]
		)


def score(matrix: torch.Tensor, weights: torch.Tensor, bias: torch.Tensor) -> torch.Tensor:
	"""
	线性打分：outputs[i] = bias + sum_k matrix[i, k] * weights[k]

	Args:
		matrix: 嵌入矩阵 (N, D)
		weights: 权重向量 (D,)
		bias: 标量偏置

	Returns:
		新分配的输出向量 (N,)
	"""
	check_dimensions(matrix, weights)
	return torch.mv(matrix, weights).add_(bias)


def score_rowwise(matrix: torch.Tensor, weights: torch.Tensor, bias: torch.Tensor) -> torch.Tensor:
	"""逐行点积的参考实现，用于校验批量实现的结果"""
	check_dimensions(matrix, weights)
	outputs = torch.empty(matrix.shape[0], dtype=matrix.dtype, device=matrix.device)
	for i in range(matrix.shape[0]):
		acc = bias.clone()
		for k in range(matrix.shape[1]):
			acc += matrix[i, k] * weights[k]
		outputs[i] = acc
	return outputs


class LinearScorer(nn.Module):
	"""单输出线性单元，参数创建后冻结，不参与任何更新"""

	def __init__(self, embedding_dim: int = 1024, generator: Optional[torch.Generator] = None,
				 weights: Optional[torch.Tensor] = None, bias: Optional[float] = None):
		"""
		Args:
			embedding_dim: 嵌入维度 D
			generator: 初始化随机源
			weights: 显式权重 (D,)，给定时跳过随机初始化
			bias: 显式偏置
		"""
		super().__init__()
		init_w, init_b = init_parameters(embedding_dim, generator)
		if weights is not None:
			weights = torch.as_tensor(weights, dtype=torch.float32)
			if weights.dim() != 1 or weights.shape[0] != embedding_dim:
				raise DimensionMismatchError(
					f"weights must have shape ({embedding_dim},), got {tuple(weights.shape)}",
					expected=embedding_dim, actual=weights.shape[0] if weights.dim() == 1 else weights.dim()
				)
			init_w = weights.clone()
		if bias is not None:
			init_b = torch.tensor(float(bias), dtype=torch.float32)
		self.weight = nn.Parameter(init_w, requires_grad=False)
		self.bias = nn.Parameter(init_b, requires_grad=False)

	@property
	def embedding_dim(self) -> int:
		return self.weight.shape[0]

	@classmethod
	def from_config(cls, cfg: Dict[str, Any], generator: Optional[torch.Generator] = None) -> 'LinearScorer':
		"""根据配置字典中的 model.embedding_dim 创建打分器"""
		dim = cfg.get('model', {}).get('embedding_dim', 1024)
		return cls(embedding_dim=dim, generator=generator)

	@torch.no_grad()
	def forward(self, matrix: torch.Tensor) -> torch.Tensor:
		return score(matrix, self.weight, self.bias)

	def extra_repr(self) -> str:
		return f"embedding_dim={self.embedding_dim}, frozen=True"
