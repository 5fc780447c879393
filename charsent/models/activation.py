import torch
import torch.nn as nn


def sigmoid_(outputs: torch.Tensor) -> torch.Tensor:
	"""
	原地 sigmoid：outputs[i] := 1 / (1 + exp(-outputs[i]))

	torch 的实现对极端输入不会溢出，有限输入的结果总在闭区间 [0, 1] 内。
	float32 下分数约超过 17 时结果饱和为 1.0（约低于 -88 时为 0.0），
	只有未饱和的分数才落在开区间 (0, 1)。
	"""
	return outputs.sigmoid_()


class SigmoidActivation(nn.Module):
	"""逐元素原地 sigmoid 激活"""

	@torch.no_grad()
	def forward(self, outputs: torch.Tensor) -> torch.Tensor:
		return sigmoid_(outputs)
