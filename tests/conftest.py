import os
import sys
from pathlib import Path

import pytest

# Ensure PyQt widgets render without an attached display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if SRC.exists():
    sys.path.insert(0, str(SRC))

# Register shared Hypothesis profiles for deterministic CI runs and fast local loops.
from tests.util import hypothesis_profiles  # noqa: E402,F401  pylint: disable=unused-import

from tests.util.clock import StepClock  # noqa: E402
from trapviz.config import AppConfig  # noqa: E402

ENV_PREFIX = "TRAPVIZ_"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer TRAPVIZ_* settings from leaking into config tests."""

    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    cfg = AppConfig()
    cfg.charting.charting_period_ms = 100.0
    cfg.charting.update_period_min_ms = 50.0
    cfg.charting.update_period_max_ms = 1000.0
    cfg.charting.initial_update_period_ms = 100.0
    cfg.charting.tune_window_size = 5
    cfg.charting.display_budget = 300
    return cfg


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


def pytest_configure(config: pytest.Config) -> None:
    """Ensure custom marks remain registered even when pyproject isn't picked up."""
    config.addinivalue_line("markers", "qt: Qt / pyqtgraph dependent tests")
