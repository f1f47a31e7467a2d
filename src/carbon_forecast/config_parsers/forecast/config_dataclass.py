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

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import math

from carbon_forecast.forecast.estimates import utc_instant


def _parse_start(value: Any) -> datetime:
    if isinstance(value, datetime):
        return utc_instant(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return utc_instant(datetime.fromisoformat(text))
    raise TypeError(f"'start' must be an ISO-8601 string or datetime, got {type(value).__name__}")


@dataclass(kw_only=True)
class ForecastConfig:
    """Window parameters for a forecast run."""

    duration_minutes: int
    start: Optional[datetime] = None
    validate_sampling: bool = True
    sampling_tolerance_seconds: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.duration_minutes, bool) or not isinstance(self.duration_minutes, int):
            raise TypeError(
                f"'duration_minutes' must be an integer, got {type(self.duration_minutes).__name__}"
            )
        if self.duration_minutes <= 0:
            raise ValueError(f"'duration_minutes' must be positive, got {self.duration_minutes}")

        if self.start is not None:
            self.start = _parse_start(self.start)

        if not isinstance(self.validate_sampling, bool):
            raise TypeError(f"'validate_sampling' must be a bool, got {type(self.validate_sampling).__name__}")

        tolerance = self.sampling_tolerance_seconds
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)):
            raise TypeError(f"'sampling_tolerance_seconds' must be numeric, got {type(tolerance).__name__}")
        if not math.isfinite(tolerance) or tolerance < 0:
            raise ValueError(f"'sampling_tolerance_seconds' must be finite and non-negative, got {tolerance}")
        self.sampling_tolerance_seconds = float(tolerance)

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by WindowedForecast beyond data, duration and start."""
        return {
            "validate_sampling": self.validate_sampling,
            "sampling_tolerance": self.sampling_tolerance_seconds,
        }


@dataclass(kw_only=True)
class LoggingConfig:
    level: str = "INFO"
    log_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if not isinstance(self.level, str):
            raise TypeError(f"'level' must be a string, got {type(self.level).__name__}")
        self.level = self.level.strip().upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"unknown logging level '{self.level}'")
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir).expanduser()


@dataclass(kw_only=True)
class ForecastRunConfig:
    """
    Container for a validated forecast run configuration.
    Created by ForecastConfigParser and consumed by run_forecast.
    """
    schema_version: str
    forecast: ForecastConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)
