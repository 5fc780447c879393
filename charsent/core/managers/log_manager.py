"""
Run logging for the forward pipeline.

This module writes the per-run metrics JSON, the error report of a failed run
and an append-only event log under an optional output directory.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from ..base.component import PipelineComponent


class LogManager(PipelineComponent):
    """
    Manages file logging for pipeline runs.

    When no output directory is configured every write is a no-op, so the
    pipeline can always hold a LogManager.
    """

    def __init__(self, output_dir: Optional[Path] = None, **kwargs):
        """
        Initialize the log manager.

        Args:
            output_dir: Base output directory for logs
        """
        self.output_dir = Path(output_dir) if output_dir else None
        super().__init__(**kwargs)

    def _validate_config(self) -> None:
        pass

    def _initialize(self) -> None:
        if self.output_dir:
            os.makedirs(self.output_dir, exist_ok=True)

    def write_metrics_json(self, path: str, metrics: Dict[str, Any]) -> None:
        """
        Write metrics data to a JSON file.

        Args:
            path: File save path
            metrics: Metrics dictionary to save
        """
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(metrics, f, ensure_ascii=False, indent=2)
        self.logger.debug(f"Metrics written to {path}")

    def write_text_log(self, path: str, text: str) -> None:
        """
        Write text log to a file (append mode).

        Args:
            path: File save path
            text: Text content to write
        """
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'a', encoding='utf-8') as f:
            f.write(text + "\n")

    def log_run_metrics(self, metrics: Dict[str, Any], run_name: str = "latest") -> Optional[Path]:
        """
        Log the metrics of one pipeline run.

        Args:
            metrics: Metrics to log
            run_name: File stem under ``metrics/``

        Returns:
            Path of the written file, or None when no output directory is set
        """
        if not self.output_dir:
            return None
        path = self.output_dir / "metrics" / f"{run_name}.json"
        self.write_metrics_json(str(path), metrics)
        return path

    def log_event(self, event: str, split_name: Optional[str] = None) -> None:
        """
        Append an event line to ``logs/events.log``.

        Args:
            event: Event text to log
            split_name: Split the event belongs to, if any
        """
        if not self.output_dir:
            return
        if split_name is not None:
            event = f"[{split_name}] {event}"
        self.write_text_log(str(self.output_dir / "logs" / "events.log"), event)

    def log_error_report(self, report: Dict[str, Any], run_name: str = "latest") -> Optional[Path]:
        """
        Write the error report of a failed run to ``errors/<run_name>.json``.

        Returns:
            Path of the written file, or None when no output directory is set
        """
        if not self.output_dir:
            return None
        path = self.output_dir / "errors" / f"{run_name}.json"
        self.write_metrics_json(str(path), report)
        return path
