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

"""Point and window-average estimate value types.

Both types compare by ``value`` only. Two estimates taken at different instants
but carrying the same value are interchangeable when searching for a minimum or
maximum. Call sites inside the package pass :func:`by_value` as the key so that
the choice to ignore time stays visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import total_ordering
from typing import Any, Dict, Union

from carbon_forecast.exceptions import TimestampConversionError

__all__ = [
    "AverageEstimate",
    "PointEstimate",
    "by_value",
    "epoch_seconds",
    "from_epoch_seconds",
    "utc_instant",
]


def utc_instant(instant: datetime) -> datetime:
    """Normalise ``instant`` to an aware UTC datetime with whole-second precision."""
    if not isinstance(instant, datetime):
        raise TypeError(f"instant must be a datetime, got {type(instant).__name__}")
    # naive values are read as UTC; rebuilding from fields also drops
    # sub-microsecond precision carried by datetime subclasses such as pandas.Timestamp
    year, month, day, hour, minute, second = instant.utctimetuple()[:6]
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def epoch_seconds(instant: datetime) -> int:
    return int(instant.timestamp())


def from_epoch_seconds(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise TimestampConversionError(
            f"cannot convert {seconds} epoch seconds to a UTC instant"
        ) from exc


def by_value(estimate: Union["PointEstimate", "AverageEstimate"]) -> float:
    """Key function for min/max/sort that deliberately ignores time."""
    return estimate.value


@total_ordering
class _OrderedByValue:
    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return by_value(self) == by_value(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return by_value(self) < by_value(other)

    def __hash__(self) -> int:
        return hash(by_value(self))


@dataclass(frozen=True, eq=False)
class PointEstimate(_OrderedByValue):
    """A single sampled value at a UTC instant."""

    value: float
    instant: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "instant", utc_instant(self.instant))

    def __str__(self) -> str:
        return f"{self.instant}\t{self.value}"


@dataclass(frozen=True, eq=False)
class AverageEstimate(_OrderedByValue):
    """Time-weighted average over the exact span ``[start, end]``."""

    value: float
    start: datetime
    end: datetime

    def as_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }
