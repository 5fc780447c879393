"""
端到端前向流水线测试
"""

import json

import pytest
import torch

from charsent.core.base.component import ComponentStatus
from charsent.core.exceptions import (
    ConfigValidationError, DatasetAccessError, DimensionMismatchError, EmptyDatasetError, EmptySplitError,
    ResourceExhaustionError
)
from charsent.core.managers.log_manager import LogManager
from charsent.datasets import DatasetSplit, Record
from charsent.models import LinearScorer
from charsent.pipeline import ForwardPipeline

SMALL = {
    "data": {"max_text_length": 32},
    "model": {"embedding_dim": 32},
    "pipeline": {"batch_size": 3},
}


def _records(n):
    texts = ["great day", "terrible day", "love it", "hate it", "fine", "awful", "nice one"]
    return [Record(texts[i % len(texts)] + f" {i}", 4 if i % 3 == 0 else 0) for i in range(n)]


def _write_csv(path, records):
    path.write_text("".join(f"{r.label},id,date,query,{r.text}\n" for r in records), encoding="utf-8")


class TestForwardPipeline:

    def test_zero_weights_scenario(self):
        """权重全零、偏置为零：输出全为 0.5，全部预测为负类，准确率等于负样本比例"""
        scorer = LinearScorer(embedding_dim=32, weights=torch.zeros(32), bias=0.0)
        pipeline = ForwardPipeline(SMALL, seed=0, scorer=scorer)
        records = _records(10)

        outputs = pipeline.forward(records)
        report = pipeline.run_split("train", records)

        assert torch.allclose(outputs, torch.full((10,), 0.5))
        negatives = sum(1 for r in records if r.label == 0)
        assert report.accuracy == pytest.approx(negatives / 10)

    def test_batched_forward_matches_single_batch(self):
        records = _records(11)
        batched = ForwardPipeline(SMALL, seed=9)
        single = ForwardPipeline({**SMALL, "pipeline": {"batch_size": 1000}}, seed=9)

        assert torch.allclose(batched.forward(records), single.forward(records), atol=1e-6)

    def test_outputs_in_unit_interval(self):
        outputs = ForwardPipeline(SMALL, seed=1).forward(_records(7))
        assert torch.all((outputs > 0.0) & (outputs < 1.0))

    def test_run_reports_both_splits(self):
        pipeline = ForwardPipeline(SMALL, seed=3)
        result = pipeline.run_records(_records(20))

        assert result.train.num_samples == 14
        assert result.test.num_samples == 6
        assert 0.0 <= result.train.accuracy <= 1.0
        assert 0.0 <= result.test.accuracy <= 1.0
        assert set(result.train.timings) == {"vectorize", "score", "activate", "evaluate"}
        assert result.seed == 3
        assert pipeline.status == ComponentStatus.READY

    def test_same_seed_same_result(self):
        first = ForwardPipeline(SMALL, seed=21).run_records(_records(30))
        second = ForwardPipeline(SMALL, seed=21).run_records(_records(30))

        assert first.train.accuracy == second.train.accuracy
        assert first.test.accuracy == second.test.accuracy

    def test_parameters_unchanged_by_run(self):
        pipeline = ForwardPipeline(SMALL, seed=4)
        before = pipeline.scorer.weight.detach().clone()
        pipeline.run_records(_records(10))
        assert torch.equal(pipeline.scorer.weight, before)

    def test_parallel_splits_match_sequential(self):
        config = {**SMALL, "pipeline": {"batch_size": 3, "parallel_splits": True}}
        parallel = ForwardPipeline(config, seed=8).run_records(_records(25))
        sequential = ForwardPipeline(SMALL, seed=8).run_records(_records(25))

        assert parallel.train.accuracy == sequential.train.accuracy
        assert parallel.test.accuracy == sequential.test.accuracy

    def test_empty_dataset_raises(self):
        with pytest.raises(EmptyDatasetError):
            ForwardPipeline(SMALL, seed=0).run_records([])

    def test_single_sample_leaves_empty_train_split(self):
        pipeline = ForwardPipeline(SMALL, seed=0)
        with pytest.raises(EmptySplitError) as excinfo:
            pipeline.run_records(_records(1))
        assert excinfo.value.context["split"] == "train"

    def test_empty_split_raises(self):
        pipeline = ForwardPipeline(SMALL, seed=0)
        with pytest.raises(EmptySplitError):
            pipeline.run(DatasetSplit(train=_records(2), test=[]))
        with pytest.raises(EmptySplitError):
            pipeline.run_split("test", [])

    def test_dimension_mismatch_rejected(self):
        with pytest.raises(DimensionMismatchError):
            ForwardPipeline({"data": {"max_text_length": 16}, "model": {"embedding_dim": 32}}, seed=0)
        with pytest.raises(DimensionMismatchError):
            ForwardPipeline(SMALL, seed=0, scorer=LinearScorer(embedding_dim=16))

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigValidationError):
            ForwardPipeline({**SMALL, "split": {"train_ratio": 2.0}}, seed=0)


class TestRunFromFile:

    def test_two_sample_scenario(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("4,a,b,c,great day\n0,a,b,c,terrible day\n", encoding="utf-8")

        result = ForwardPipeline(SMALL, seed=0).run_from_file(str(path))

        assert result.train.num_samples == 1
        assert result.test.num_samples == 1
        assert "load_and_split" in result.timings

    def test_file_results_reproducible(self, tmp_path):
        path = tmp_path / "data.csv"
        _write_csv(path, _records(40))

        first = ForwardPipeline(SMALL, seed=12).run_from_file(str(path))
        second = ForwardPipeline(SMALL, seed=12).run_from_file(str(path))

        assert first.to_dict()["train"]["metrics"] == second.to_dict()["train"]["metrics"]

    def test_uses_configured_path(self, tmp_path):
        path = tmp_path / "data.csv"
        _write_csv(path, _records(10))
        config = {**SMALL, "data": {"max_text_length": 32, "path": str(path)}}

        result = ForwardPipeline(config, seed=2).run_from_file()

        assert result.train.num_samples + result.test.num_samples == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetAccessError):
            ForwardPipeline(SMALL, seed=0).run_from_file(str(tmp_path / "nope.csv"))

    def test_log_manager_writes_metrics(self, tmp_path):
        path = tmp_path / "data.csv"
        _write_csv(path, _records(10))
        log_manager = LogManager(output_dir=tmp_path / "out")

        ForwardPipeline(SMALL, seed=2, log_manager=log_manager).run_from_file(str(path))

        metrics = json.loads((tmp_path / "out" / "metrics" / "latest.json").read_text(encoding="utf-8"))
        assert metrics["seed"] == 2
        assert metrics["train"]["num_samples"] == 7
        assert "load_and_split" in metrics["timings"]
        events = (tmp_path / "out" / "logs" / "events.log").read_text(encoding="utf-8")
        assert "[train]" in events and "[test]" in events


def test_allocation_failure_is_fatal(monkeypatch):
    pipeline = ForwardPipeline(SMALL, seed=0)

    def fail(_batch):
        raise MemoryError("cannot allocate")

    monkeypatch.setattr(pipeline, "vectorizer", fail)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        pipeline.run_records(_records(10))
    assert isinstance(excinfo.value.cause, MemoryError)
    assert pipeline.status == ComponentStatus.ERROR
    assert excinfo.value.context["stage"] == "forward pass"


def test_allocation_failure_during_evaluation_is_fatal(monkeypatch):
    """评估阶段的内存分配失败同样转换为资源耗尽错误"""
    pipeline = ForwardPipeline(SMALL, seed=0)

    def fail(*_args, **_kwargs):
        raise MemoryError("cannot allocate")

    monkeypatch.setattr("charsent.pipeline.runner.evaluate_outputs", fail)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        pipeline.run_records(_records(10))
    assert excinfo.value.context["stage"] == "train split"
    assert pipeline.status == ComponentStatus.ERROR


def test_allocation_failure_while_loading_is_fatal(tmp_path, monkeypatch):
    path = tmp_path / "data.csv"
    _write_csv(path, _records(10))
    pipeline = ForwardPipeline(SMALL, seed=0)

    def fail(*_args, **_kwargs):
        raise MemoryError("cannot allocate")

    monkeypatch.setattr("charsent.pipeline.runner.load_and_split", fail)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        pipeline.run_from_file(str(path))
    assert excinfo.value.context == {"stage": "loading", "path": str(path)}
