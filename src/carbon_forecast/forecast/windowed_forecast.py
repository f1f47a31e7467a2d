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

"""Sliding-window time-weighted averages over a uniformly sampled series."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Iterator, Tuple

import numpy as np

from carbon_forecast.exceptions import (
    DegenerateWindowError,
    InsufficientDataError,
    IrregularSamplingError,
    WindowExceedsDataError,
    WindowIndexError,
)
from carbon_forecast.forecast.estimates import (
    AverageEstimate,
    PointEstimate,
    epoch_seconds,
    from_epoch_seconds,
    utc_instant,
)
from carbon_forecast.forecast.sampling import SamplingValidator

logger = logging.getLogger(__name__)

__all__ = ["WindowedForecast"]


class WindowedForecast:
    """Family of overlapping fixed-duration windows over a sample series.

    The sampling step is taken from the first two samples and trusted for the
    whole series. Samples before ``start`` are dropped. ``sample_count`` is the
    number of retained samples inside the reference window ``[start, end)`` and
    is reused for every later window, each shifted by one step.

    Averages are trapezoidal integrals of the piecewise-linear signal divided by
    the integrated span. Window boundaries falling between samples are linearly
    interpolated.
    """

    def __init__(
        self,
        data: Iterable[PointEstimate],
        duration: int,
        start: datetime,
        *,
        validate_sampling: bool = True,
        sampling_tolerance: float = 0.0,
    ) -> None:
        data = list(data)
        if len(data) < 2:
            raise InsufficientDataError(f"need at least 2 samples, got {len(data)}")

        if isinstance(duration, bool) or not isinstance(duration, int):
            raise TypeError(f"duration must be an integer number of minutes, got {type(duration).__name__}")
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")

        self.start = utc_instant(start)
        self.duration = duration

        self.step = epoch_seconds(data[1].instant) - epoch_seconds(data[0].instant)
        if self.step <= 0:
            raise IrregularSamplingError(
                f"first two samples must be increasing in time, got step of {self.step}s"
            )

        start_ts = epoch_seconds(self.start)
        end_ts = start_ts + duration * 60
        self.end = from_epoch_seconds(end_ts)

        samples = [d for d in data if epoch_seconds(d.instant) >= start_ts]
        if len(samples) < 2:
            raise InsufficientDataError(
                f"need at least 2 samples at or after {self.start}, got {len(samples)}"
            )

        if validate_sampling:
            SamplingValidator(step=self.step, tolerance=sampling_tolerance).check(samples)

        self._samples: Tuple[PointEstimate, ...] = tuple(samples)
        self._times = np.array([epoch_seconds(s.instant) for s in samples], dtype=np.int64)
        self._values = np.array([s.value for s in samples], dtype=np.float64)
        self._start_ts = start_ts
        self._end_ts = end_ts

        self.sample_count = int(np.searchsorted(self._times, end_ts, side="left"))
        if self.sample_count == len(samples):
            raise WindowExceedsDataError(
                f"a {duration} minute window from {self.start} ends after the last sample "
                f"at {samples[-1].instant}"
            )
        if self.sample_count == 0:
            raise WindowExceedsDataError(
                f"a {duration} minute window from {self.start} ends before the first sample "
                f"at {samples[0].instant}"
            )

        logger.debug(
            "windowed forecast constructed",
            extra={
                "step_seconds": self.step,
                "duration_minutes": duration,
                "samples": len(samples),
                "sample_count": self.sample_count,
                "windows": len(self),
            },
        )

    @property
    def samples(self) -> Tuple[PointEstimate, ...]:
        return self._samples

    @staticmethod
    def interpolate(p1: PointEstimate, p2: PointEstimate, at: datetime) -> PointEstimate:
        """Linearly interpolate between ``p1`` and ``p2`` at instant ``at``."""
        t1 = epoch_seconds(p1.instant)
        timestep = epoch_seconds(p2.instant) - t1
        if timestep == 0:
            raise DegenerateWindowError(f"cannot interpolate between two samples at {p1.instant}")

        slope = (p2.value - p1.value) / timestep
        offset = epoch_seconds(at) - t1
        return PointEstimate(p1.value + slope * offset, at)

    def _sample(self, index: int) -> PointEstimate:
        if index < 0 or index >= len(self._samples):
            raise WindowIndexError(
                f"sample index {index} out of range for {len(self._samples)} stored samples"
            )
        return self._samples[index]

    def _right_boundary(self, index: int, window_end: datetime) -> PointEstimate:
        last = index + self.sample_count
        if last == len(self._samples):
            # series exhausted: nothing beyond the last sample to interpolate against
            return self._samples[-1]
        return self.interpolate(self._sample(last - 1), self._sample(last), window_end)

    def window_at(self, index: int) -> AverageEstimate:
        """Return the average for window ``index``.

        Window ``index`` nominally spans ``start + index * step`` to
        ``end + index * step``. Each call integrates ``sample_count + 2`` points,
        so lookups are O(sample_count) and nothing is cached.
        """
        if index < 0:
            raise WindowIndexError(f"window index must be non-negative, got {index}")

        first, second = self._sample(index), self._sample(index + 1)
        window_start = from_epoch_seconds(self._start_ts + index * self.step)
        window_end = from_epoch_seconds(self._end_ts + index * self.step)

        left = self.interpolate(first, second, window_start)
        right = self._right_boundary(index, window_end)

        stop = index + self.sample_count
        times = np.concatenate(
            ([epoch_seconds(left.instant)], self._times[index:stop], [epoch_seconds(right.instant)])
        )
        values = np.concatenate(([left.value], self._values[index:stop], [right.value]))

        span = int(times[-1] - times[0])
        if span <= 0:
            raise DegenerateWindowError(f"window {index} spans {span}s")

        area = float(np.sum(0.5 * (values[1:] + values[:-1]) * np.diff(times)))
        return AverageEstimate(value=area / span, start=left.instant, end=right.instant)

    def __len__(self) -> int:
        count = len(self._samples) - self.sample_count + 1
        # every left boundary needs the sample after the window start
        return min(count, len(self._samples) - 1)

    def __iter__(self) -> Iterator[AverageEstimate]:
        for index in range(len(self)):
            yield self.window_at(index)
