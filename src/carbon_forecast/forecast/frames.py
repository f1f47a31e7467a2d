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

"""Conversions between pandas objects and estimate lists."""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

import pandas as pd

from carbon_forecast.forecast.estimates import AverageEstimate, PointEstimate

__all__ = ["estimates_to_frame", "point_estimates_from_frame"]


def point_estimates_from_frame(
    frame: Union[pd.DataFrame, pd.Series],
    value_column: str = "value",
    time_column: Optional[str] = None,
) -> List[PointEstimate]:
    """Build time-sorted point estimates from a DataFrame or Series.

    Times come from ``time_column`` when given, otherwise from the index.
    Naive times are read as UTC.
    """
    if isinstance(frame, pd.Series):
        values = frame
        times = frame.index
    else:
        if value_column not in frame.columns:
            raise KeyError(f"value column '{value_column}' not found in frame")
        values = frame[value_column]
        if time_column is None:
            times = frame.index
        elif time_column not in frame.columns:
            raise KeyError(f"time column '{time_column}' not found in frame")
        else:
            times = frame[time_column]

    instants = pd.to_datetime(pd.Series(times).reset_index(drop=True), utc=True)
    ordered = pd.DataFrame(
        {"instant": instants, "value": values.to_numpy(dtype=float)}
    ).sort_values("instant", kind="stable")

    return [
        PointEstimate(float(value), instant.to_pydatetime())
        for instant, value in zip(ordered["instant"], ordered["value"])
    ]


def estimates_to_frame(estimates: Iterable[AverageEstimate]) -> pd.DataFrame:
    """Tabulate window estimates with ``start``, ``end`` and ``value`` columns."""
    rows = [
        {"start": estimate.start, "end": estimate.end, "value": estimate.value}
        for estimate in estimates
    ]
    frame = pd.DataFrame(rows, columns=["start", "end", "value"])
    frame["start"] = pd.to_datetime(frame["start"], utc=True)
    frame["end"] = pd.to_datetime(frame["end"], utc=True)
    return frame
