# Copyright 2025 Edward Clewer
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Shared pytest fixtures for the forecast test suite."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from pathlib import Path

import numpy as np
import pytest

from carbon_forecast.forecast.estimates import PointEstimate

BASE_TIME = datetime(2023, 1, 1, tzinfo=timezone.utc)

SINE_SAMPLES = 200
SINE_STEP = math.pi / SINE_SAMPLES


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def point_series_factory() -> Callable[..., list[PointEstimate]]:
    """Return a factory that builds evenly spaced point estimates from values."""

    def _series(
        values: Sequence[float],
        *,
        start: datetime = BASE_TIME,
        step_seconds: int = 60,
    ) -> list[PointEstimate]:
        return [
            PointEstimate(float(value), start + timedelta(seconds=idx * step_seconds))
            for idx, value in enumerate(values)
        ]

    return _series


@pytest.fixture
def sine_series(point_series_factory) -> list[PointEstimate]:
    """Half a period of -sin sampled once a minute over 200 minutes."""

    values = [-math.sin(i * SINE_STEP) for i in range(SINE_SAMPLES)]
    return point_series_factory(values)


@pytest.fixture
def sine_window_average() -> Callable[[int, int], float]:
    """Exact average of -sin(t * step) over [index, index + window] minutes."""

    def _average(index: int, window: int) -> float:
        lo = index * SINE_STEP
        hi = (index + window) * SINE_STEP
        return float((np.cos(hi) - np.cos(lo)) / (window * SINE_STEP))

    return _average


@pytest.fixture
def restore_root_logging():
    """Detach root handlers for the test and reinstate them afterwards."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    # detached first so configure_logging does not close pytest's handlers
    for handler in handlers:
        root.removeHandler(handler)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Return a temporary path to hold generated YAML configs in tests."""

    config_file = tmp_path / "config.yaml"
    config_file.write_text("# populated during tests\n")
    return config_file
