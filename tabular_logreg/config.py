"""Run configuration for training and evaluation."""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_ITERATIONS,
    DEFAULT_REPORT_EVERY,
    DEFAULT_STEP_SIZE,
    DEFAULT_TRAIN_FRACTION,
)


SPLIT_MODES = ("ordered", "random")


@dataclass
class TrainingConfig:
    """Parameters for one train/evaluate run."""
    train_fraction: float = DEFAULT_TRAIN_FRACTION
    step_size: float = DEFAULT_STEP_SIZE
    iterations: int = DEFAULT_ITERATIONS
    report_every: int = DEFAULT_REPORT_EVERY
    label_column: Optional[str] = None
    split_mode: str = "ordered"
    random_state: int = 42

    def validate(self) -> "TrainingConfig":
        if not 0.0 < self.train_fraction < 1.0:
            raise ValueError(f"train_fraction must be in (0, 1), got {self.train_fraction}")
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {self.iterations}")
        if self.report_every < 1:
            raise ValueError(f"report_every must be at least 1, got {self.report_every}")
        if self.split_mode not in SPLIT_MODES:
            raise ValueError(f"Unknown split mode: {self.split_mode}")
        return self
