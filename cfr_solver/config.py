"""Solver configuration.

Every field has a default, so ``SolverConfig()`` reproduces the stock
behaviour of the trainers. ``load_config`` reads the same fields from a YAML
mapping::

    exploration_epsilon: 0.1
    sample_rate: 0.5
    max_depth: 20
    log_every: 100
    seed: 7
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml


@dataclass
class SolverConfig:
    """Trainer settings, validated on construction.

    Attributes:
        exploration_epsilon: Prior mixing weight in Node.strategy().
        sample_rate:         Fraction of actions MCCFR explores per node
                             (clamped into [0.1, 1.0] by the trainer).
        max_depth:           Recursion cutoff; None keeps the trainer's own
                             default (15 exhaustive, 50 Monte Carlo).
        log_every:           Emit a DEBUG progress line every N iterations.
        seed:                Seed of the trainer's chance-node generator.

    Raises:
        ValueError: If a field has the wrong type or is out of range.
    """

    exploration_epsilon: float = 0.1
    sample_rate: float = 0.3
    max_depth: int | None = None
    log_every: int = 10
    seed: int | None = None

    def __post_init__(self) -> None:
        if not _is_number(self.exploration_epsilon) or not 0.0 <= self.exploration_epsilon <= 1.0:
            raise ValueError(
                f"exploration_epsilon must be a number in [0, 1], got {self.exploration_epsilon!r}."
            )
        if not _is_number(self.sample_rate):
            raise ValueError(f"sample_rate must be a number, got {self.sample_rate!r}.")
        if self.max_depth is not None and (not _is_int(self.max_depth) or self.max_depth < 0):
            raise ValueError(f"max_depth must be a non-negative integer or None, got {self.max_depth!r}.")
        if not _is_int(self.log_every) or self.log_every < 1:
            raise ValueError(f"log_every must be a positive integer, got {self.log_every!r}.")
        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer or None, got {self.seed!r}.")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_config(path: str | Path) -> SolverConfig:
    """Load a SolverConfig from a YAML file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError:        If the file is not a mapping, names unknown keys or
                           holds an out-of-range value.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")

    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    return SolverConfig(**data)
