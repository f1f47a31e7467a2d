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

"""Top-level exports for the carbon_forecast package."""

from carbon_forecast.forecast import (
    AverageEstimate,
    ForecastSummary,
    PointEstimate,
    WindowedForecast,
    by_value,
    get_average_estimate,
)

__all__ = [
    "AverageEstimate",
    "ForecastSummary",
    "PointEstimate",
    "WindowedForecast",
    "by_value",
    "estimates_to_frame",
    "get_average_estimate",
    "point_estimates_from_frame",
    "run_forecast",
]


def __getattr__(name):
    """Lazily import pandas-backed and workflow helpers when first accessed."""
    if name in ("estimates_to_frame", "point_estimates_from_frame"):
        from carbon_forecast.forecast.frames import estimates_to_frame, point_estimates_from_frame

        globals().update(
            estimates_to_frame=estimates_to_frame,
            point_estimates_from_frame=point_estimates_from_frame,
        )
        return globals()[name]

    if name == "run_forecast":
        from carbon_forecast.forecast.workflow import run_forecast
        globals()["run_forecast"] = run_forecast
        return run_forecast

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
