"""
随机种子与计时工具测试
"""

import logging

import torch

from charsent.utils.seed import make_generators, resolve_seed
from charsent.utils.timing import StageTimer
from charsent.utils.device import get_device


def test_resolve_seed_explicit():
    assert resolve_seed(42) == 42


def test_resolve_seed_from_clock():
    seed = resolve_seed(None)
    assert isinstance(seed, int)
    assert 0 <= seed < 2 ** 32


def test_make_generators_reproducible():
    rng_a, gen_a = make_generators(11)
    rng_b, gen_b = make_generators(11)

    assert rng_a.random() == rng_b.random()
    assert torch.equal(torch.rand(4, generator=gen_a), torch.rand(4, generator=gen_b))


def test_make_generators_ignore_global_state():
    """权重与洗牌只依赖显式种子，全局随机状态不影响结果"""
    torch.manual_seed(0)
    _, gen_a = make_generators(11)
    first = torch.rand(4, generator=gen_a)
    torch.manual_seed(123)
    torch.rand(10)
    _, gen_b = make_generators(11)

    assert torch.equal(first, torch.rand(4, generator=gen_b))


def test_stage_timer_accumulates(caplog):
    timer = StageTimer(logging.getLogger("charsent.test"))
    with caplog.at_level(logging.DEBUG, logger="charsent.test"):
        with timer.stage("score", "Dense Layer"):
            pass
        with timer.stage("score"):
            pass
        with timer.stage("evaluate"):
            pass

    assert set(timer.timings) == {"score", "evaluate"}
    assert timer.total >= timer.timings["score"] >= 0.0
    assert "Dense Layer Time" in caplog.text


def test_get_device_cpu():
    assert get_device("cpu").type == "cpu"
