"""Tests for SolverConfig and the YAML loader (cfr_solver/config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from cfr_solver.config import SolverConfig, load_config


class TestDefaults:
    def test_stock_values(self) -> None:
        config = SolverConfig()
        assert config.exploration_epsilon == 0.1
        assert config.sample_rate == 0.3
        assert config.max_depth is None
        assert config.log_every == 10
        assert config.seed is None


class TestLoadConfig:
    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text(
            "exploration_epsilon: 0.2\n"
            "sample_rate: 0.5\n"
            "max_depth: 20\n"
            "log_every: 100\n"
            "seed: 7\n"
        )
        assert load_config(path) == SolverConfig(
            exploration_epsilon=0.2, sample_rate=0.5, max_depth=20, log_every=100, seed=7
        )

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text("seed: 3\n")
        config = load_config(str(path))
        assert config.seed == 3
        assert config.sample_rate == 0.3

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SolverConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text("seed: 1\nlearning_rate: 0.5\n")
        with pytest.raises(ValueError, match="learning_rate"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(path)


class TestValidation:
    @pytest.mark.parametrize("epsilon", [-0.01, 1.01, 3.0, float("nan"), "0.1", True])
    def test_epsilon_outside_unit_interval(self, epsilon: object) -> None:
        with pytest.raises(ValueError, match="exploration_epsilon"):
            SolverConfig(exploration_epsilon=epsilon)  # type: ignore[arg-type]

    @pytest.mark.parametrize("epsilon", [0.0, 0.5, 1.0, 1])
    def test_epsilon_bounds_accepted(self, epsilon: float) -> None:
        assert SolverConfig(exploration_epsilon=epsilon).exploration_epsilon == epsilon

    @pytest.mark.parametrize(
        "field, value",
        [
            ("sample_rate", "0.3"),
            ("sample_rate", None),
            ("max_depth", -1),
            ("max_depth", 2.5),
            ("log_every", 0),
            ("log_every", "10"),
            ("seed", "7"),
            ("seed", 1.5),
        ],
    )
    def test_bad_field_rejected(self, field: str, value: object) -> None:
        with pytest.raises(ValueError, match=field):
            SolverConfig(**{field: value})

    def test_bad_value_in_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text("exploration_epsilon: 3.0\n")
        with pytest.raises(ValueError, match="exploration_epsilon"):
            load_config(path)

    def test_quoted_number_in_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text('log_every: "10"\n')
        with pytest.raises(ValueError, match="log_every"):
            load_config(path)
