"""Typed configuration loader for trapviz."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError, IOErrorEnvelope

CONFIG_ENV_VAR = "TRAPVIZ_CONFIG"


@dataclass
class ChartingPolicy:
    """Cadence and display knobs for the charting loop (all periods in ms)."""

    charting_period_ms: float = 100.0
    update_period_min_ms: float = 50.0
    update_period_max_ms: float = 1000.0
    initial_update_period_ms: float = 100.0
    tune_window_size: int = 5
    display_budget: int = 300

    def validate(self) -> None:
        for name in (
            "charting_period_ms",
            "update_period_min_ms",
            "update_period_max_ms",
            "initial_update_period_ms",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise BadInputError(f"charting.{name} must be a number")
            if value <= 0:
                raise BadInputError(f"charting.{name} must be > 0")
        if self.update_period_min_ms > self.update_period_max_ms:
            raise BadInputError(
                "charting.update_period_min_ms must be <= charting.update_period_max_ms",
                hint=f"got min={self.update_period_min_ms} max={self.update_period_max_ms}",
            )
        if self.tune_window_size <= 0:
            raise BadInputError("charting.tune_window_size must be > 0")
        if self.display_budget <= 0:
            raise BadInputError("charting.display_budget must be > 0")


@dataclass
class HistogramPolicy:
    bins: int = 20
    min_bin_width: float = 1.0

    def validate(self) -> None:
        if self.bins <= 0:
            raise BadInputError("histogram.bins must be > 0")
        if not self.min_bin_width > 0.0:
            raise BadInputError("histogram.min_bin_width must be > 0")


@dataclass
class AppConfig:
    charting: ChartingPolicy = field(default_factory=ChartingPolicy)
    histogram: HistogramPolicy = field(default_factory=HistogramPolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except UnicodeDecodeError as exc:
                raise BadInputError(f"Config file is not valid UTF-8: {path}") from exc
            except OSError as exc:
                detail = exc.strerror or exc
                raise IOErrorEnvelope(f"Cannot read config file {path}: {detail}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        charting_data = data.get("charting", {})
        if not isinstance(charting_data, dict):
            raise BadInputError("[charting] section must be a table")
        histogram_data = data.get("histogram", {})
        if not isinstance(histogram_data, dict):
            raise BadInputError("[histogram] section must be a table")
        try:
            charting = ChartingPolicy(**charting_data)
            histogram = HistogramPolicy(**histogram_data)
        except TypeError as exc:
            raise BadInputError(f"Unknown config key: {exc}") from exc
        return cls(charting=charting, histogram=histogram)

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        charting_mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "TRAPVIZ_CHARTING_PERIOD_MS": ("charting_period_ms", float),
            "TRAPVIZ_UPDATE_PERIOD_MIN_MS": ("update_period_min_ms", float),
            "TRAPVIZ_UPDATE_PERIOD_MAX_MS": ("update_period_max_ms", float),
            "TRAPVIZ_INITIAL_UPDATE_PERIOD_MS": ("initial_update_period_ms", float),
            "TRAPVIZ_TUNE_WINDOW_SIZE": ("tune_window_size", int),
            "TRAPVIZ_DISPLAY_BUDGET": ("display_budget", int),
        }
        histogram_mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "TRAPVIZ_HISTOGRAM_BINS": ("bins", int),
            "TRAPVIZ_MIN_BIN_WIDTH": ("min_bin_width", float),
        }
        for target, mapping in (
            (self.charting, charting_mapping),
            (self.histogram, histogram_mapping),
        ):
            for key, (attr, caster) in mapping.items():
                raw_value = env.get(key)
                if raw_value is None:
                    continue
                try:
                    value = caster(raw_value)
                except ValueError as exc:
                    raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
                setattr(target, attr, value)

    def validate(self) -> None:
        self.charting.validate()
        self.histogram.validate()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = AppConfig()


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)
