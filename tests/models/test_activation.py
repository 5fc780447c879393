"""
Sigmoid 激活测试
"""

import torch

from charsent.models import SigmoidActivation, sigmoid_


def test_in_place():
    outputs = torch.tensor([0.0, 1.0, -1.0])
    result = sigmoid_(outputs)

    assert result is outputs
    assert outputs[0].item() == 0.5
    assert torch.allclose(outputs, 1.0 / (1.0 + torch.exp(-torch.tensor([0.0, 1.0, -1.0]))))


def test_open_interval_below_saturation():
    inputs = torch.linspace(-15.0, 15.0, steps=301)
    outputs = sigmoid_(inputs.clone())

    assert torch.all(outputs > 0.0)
    assert torch.all(outputs < 1.0)
    assert torch.all(outputs[1:] >= outputs[:-1])


def test_saturates_to_closed_interval():
    """float32 下较大的分数饱和为 1.0，结果仍不越出 [0, 1]"""
    inputs = torch.linspace(-120.0, 120.0, steps=481)
    outputs = sigmoid_(inputs.clone())

    assert torch.all(outputs >= 0.0)
    assert torch.all(outputs <= 1.0)
    assert sigmoid_(torch.tensor([20.0]))[0].item() == 1.0
    assert sigmoid_(torch.tensor([-20.0]))[0].item() > 0.0


def test_extreme_inputs_do_not_overflow():
    outputs = sigmoid_(torch.tensor([-1e4, 1e4, float("-1e30")]))

    assert torch.all(torch.isfinite(outputs))
    assert outputs[0].item() == 0.0
    assert outputs[1].item() == 1.0


def test_module_wrapper():
    module = SigmoidActivation()
    assert torch.allclose(module(torch.zeros(4)), torch.full((4,), 0.5))
