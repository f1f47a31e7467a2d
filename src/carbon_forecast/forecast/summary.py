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

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from carbon_forecast.forecast.estimates import AverageEstimate, PointEstimate, by_value, utc_instant
from carbon_forecast.forecast.windowed_forecast import WindowedForecast

__all__ = ["ForecastSummary", "get_average_estimate"]


@dataclass(frozen=True)
class ForecastSummary:
    """Average over the window starting now and the lowest average of any window."""

    now: AverageEstimate
    minimum: AverageEstimate
    windows: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "now": self.now.as_dict(),
            "minimum": self.minimum.as_dict(),
            "windows": self.windows,
        }


def get_average_estimate(
    data: Iterable[PointEstimate],
    duration: int,
    start: Optional[datetime] = None,
    **forecast_options: Any,
) -> ForecastSummary:
    """Summarise a forecast series for a job of ``duration`` minutes.

    ``start`` defaults to the current UTC time. Extra keyword arguments are
    passed through to :class:`WindowedForecast`.
    """
    if start is None:
        start = datetime.now(timezone.utc)
    forecast = WindowedForecast(data, duration, utc_instant(start), **forecast_options)
    return ForecastSummary(
        now=forecast.window_at(0),
        minimum=min(forecast, key=by_value),
        windows=len(forecast),
    )
