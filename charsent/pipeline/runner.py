"""
End-to-end forward pipeline.

Runs vectorize -> score -> activate -> evaluate once per split, with both
splits sharing one frozen scorer.
"""

import copy
from contextlib import contextmanager
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import torch

from ..core.base.component import PipelineComponent, ComponentStatus
from ..core.exceptions import (
    DimensionMismatchError,
    EmptySplitError,
    ResourceExhaustionError,
)
from ..core.managers.log_manager import LogManager
from ..datasets.partition import load_and_split, split_dataset
from ..datasets.records import DatasetSplit, Record, labels_tensor
from ..evaluation.metrics import evaluate_outputs
from ..features.vectorizer import CharVectorizer
from ..models.activation import sigmoid_
from ..models.linear_scorer import LinearScorer
from ..utils.config import DEFAULT_CONFIG, deep_update, validate_config
from ..utils.device import get_device
from ..utils.seed import make_generators, resolve_seed
from ..utils.timing import StageTimer

_OOM_ERRORS = (MemoryError, getattr(torch, "OutOfMemoryError", torch.cuda.OutOfMemoryError))


@contextmanager
def memory_guard(stage: str, **context: Any):
    """Turn allocation failures inside the block into ResourceExhaustionError."""
    try:
        yield
    except _OOM_ERRORS as e:
        raise ResourceExhaustionError(
            f"Memory allocation failed during {stage}",
            context={'stage': stage, **context},
            cause=e
        ) from e


@dataclass
class SplitReport:
    """Forward-pass outcome for one split."""
    name: str
    accuracy: float
    num_samples: int
    metrics: Dict[str, Any] = field(default_factory=dict)
    timings: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "accuracy": self.accuracy,
            "num_samples": self.num_samples,
            "metrics": self.metrics,
            "timings": self.timings,
        }

    @property
    def total_time(self) -> float:
        return sum(self.timings.values())


@dataclass
class PipelineResult:
    """Reports for the train and test splits of one run."""
    train: SplitReport
    test: SplitReport
    seed: int
    timings: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "train": self.train.to_dict(),
            "test": self.test.to_dict(),
            "timings": self.timings,
        }


class ForwardPipeline(PipelineComponent):
    """
    Frozen-random forward evaluation pipeline.

    The scorer is created once from the seed and never updated; "training"
    accuracy is simply the forward pass over the training split.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, seed: Optional[int] = None,
                 scorer: Optional[LinearScorer] = None, log_manager: Optional[LogManager] = None, **kwargs):
        """
        Initialize the pipeline.

        Args:
            config: Partial or full config; missing keys fall back to defaults
            seed: Seed for shuffling and initialisation (overrides ``config['seed']``)
            scorer: Pre-built scorer, mainly for tests
            log_manager: Optional file logger for metrics and events
        """
        merged = deep_update(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(config or {}))
        if seed is not None:
            merged['seed'] = seed
        self._scorer_override = scorer
        self._log_manager = log_manager
        super().__init__(config=merged, **kwargs)

    def _validate_config(self) -> None:
        validate_config(self._config)
        width = self._config['data']['max_text_length']
        dim = self._config['model']['embedding_dim']
        if width != dim:
            raise DimensionMismatchError(
                f"data.max_text_length ({width}) must equal model.embedding_dim ({dim})",
                expected=dim, actual=width
            )

    def _initialize(self) -> None:
        self.seed = resolve_seed(self._config.get('seed'))
        self.rng, generator = make_generators(self.seed)
        self.device = get_device(self.get_config_value('pipeline.device', 'cpu'))
        self.vectorizer = CharVectorizer(self._config['data']['max_text_length'])

        if self._scorer_override is not None:
            scorer = self._scorer_override
            if scorer.embedding_dim != self.vectorizer.dim:
                raise DimensionMismatchError(
                    f"scorer dimension {scorer.embedding_dim} != embedding width {self.vectorizer.dim}",
                    expected=self.vectorizer.dim, actual=scorer.embedding_dim
                )
        else:
            scorer = LinearScorer.from_config(self._config, generator=generator)
        self.scorer = scorer.to(self.device).eval()
        self._set_status(ComponentStatus.READY)

    @property
    def log_manager(self) -> Optional[LogManager]:
        return self._log_manager

    def forward(self, records: Sequence[Record], timer: Optional[StageTimer] = None) -> torch.Tensor:
        """
        Vectorize, score and activate records in batches.

        Args:
            records: Samples to process
            timer: Optional timer collecting per-stage durations

        Returns:
            Activated outputs, shape (N,), on the pipeline device
        """
        timer = timer or StageTimer()
        batch_size = self._config['pipeline']['batch_size']
        chunks: List[torch.Tensor] = []
        with memory_guard("forward pass", num_samples=len(records), batch_size=batch_size):
            for start in range(0, len(records), batch_size):
                batch = records[start:start + batch_size]
                with timer.stage("vectorize", "Tokenization"):
                    matrix = self.vectorizer(batch).to(self.device)
                with timer.stage("score", "Dense Layer"):
                    outputs = self.scorer(matrix)
                del matrix
                with timer.stage("activate", "Sigmoid Activation"):
                    sigmoid_(outputs)
                chunks.append(outputs)
        if not chunks:
            return torch.empty(0, dtype=torch.float32, device=self.device)
        return torch.cat(chunks)

    def run_split(self, name: str, records: Sequence[Record]) -> SplitReport:
        """
        Run the forward pass and accuracy evaluation for one split.

        Raises:
            EmptySplitError: If the split holds no samples
            ResourceExhaustionError: If memory runs out anywhere in the split
        """
        if len(records) == 0:
            raise EmptySplitError(f"No samples found in {name} split.", split_name=name)

        timer = StageTimer(self.logger)
        self.logger.info(f"[Pipeline] Tokenizing, embedding and scoring {name} dataset ({len(records)} samples)...")
        eval_cfg = self._config['evaluation']
        with memory_guard(f"{name} split", num_samples=len(records)):
            labels = labels_tensor(records).to(self.device)
            outputs = self.forward(records, timer)
            with timer.stage("evaluate", "Evaluation"):
                metrics = evaluate_outputs(
                    outputs, labels,
                    threshold=eval_cfg['threshold'],
                    positive_label=eval_cfg['positive_label'],
                    negative_label=eval_cfg['negative_label'],
                )
        accuracy = metrics['accuracy']
        for stage_name, seconds in timer.timings.items():
            self.logger.info(f"[Pipeline] {name} {stage_name} time: {seconds:.4f} seconds")
        self.logger.info(f"[Pipeline] {name.capitalize()} set Accuracy: {accuracy * 100:.2f}%")

        if self._log_manager is not None:
            self._log_manager.log_event(f"accuracy={accuracy:.6f} samples={len(records)}", split_name=name)
        return SplitReport(name=name, accuracy=accuracy, num_samples=len(records),
                           metrics=metrics, timings=dict(timer.timings))

    def run(self, split: DatasetSplit, timings: Optional[Dict[str, float]] = None) -> PipelineResult:
        """
        Evaluate both splits against the shared frozen scorer.

        Both splits are checked for emptiness before any computation starts.
        """
        for name, records in (("train", split.train), ("test", split.test)):
            if len(records) == 0:
                raise EmptySplitError(f"No samples found in {name} split.", split_name=name)

        self._set_status(ComponentStatus.RUNNING)
        try:
            if self.get_config_value('pipeline.parallel_splits', False):
                with ThreadPoolExecutor(max_workers=2) as pool:
                    train_future = pool.submit(self.run_split, "train", split.train)
                    test_future = pool.submit(self.run_split, "test", split.test)
                    train_report = train_future.result()
                    test_report = test_future.result()
            else:
                train_report = self.run_split("train", split.train)
                test_report = self.run_split("test", split.test)
        except Exception:
            self._set_status(ComponentStatus.ERROR)
            raise
        self._set_status(ComponentStatus.READY)

        result = PipelineResult(train=train_report, test=test_report, seed=self.seed,
                                timings=dict(timings or {}))
        if self._log_manager is not None:
            self._log_manager.log_run_metrics(result.to_dict())
        return result

    def split_records(self, records: Sequence[Record]) -> DatasetSplit:
        """Shuffle and split in-memory records with the pipeline's seed."""
        return split_dataset(records, train_ratio=self._config['split']['train_ratio'],
                             seed=self.seed, rng=self.rng)

    def run_records(self, records: Sequence[Record]) -> PipelineResult:
        """Split already-parsed records and run both splits."""
        return self.run(self.split_records(records))

    def run_from_file(self, path: Optional[str] = None) -> PipelineResult:
        """
        Load, split and evaluate a delimited data file.

        Args:
            path: Data file; defaults to ``data.path`` from the config
        """
        data_cfg = self._config['data']
        path = path or data_cfg['path']
        timer = StageTimer(self.logger)
        with memory_guard("loading", path=str(path)), timer.stage("load_and_split", "Loading and Splitting"):
            split = load_and_split(
                path,
                train_ratio=self._config['split']['train_ratio'],
                seed=self.seed,
                ignored_fields=data_cfg['ignored_fields'],
                max_length=data_cfg['max_text_length'],
                max_rows=data_cfg.get('max_rows'),
                rng=self.rng,
            )
        self.logger.info(f"[Pipeline] Loaded {len(split.train)} training samples and {len(split.test)} test samples.")
        return self.run(split, timings=timer.timings)
