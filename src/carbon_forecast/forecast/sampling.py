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

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from carbon_forecast.exceptions import InvalidSampleError, IrregularSamplingError
from carbon_forecast.forecast.estimates import PointEstimate, epoch_seconds


@dataclass
class SamplingStats:
    """Accumulates counts for sample validation outcomes."""

    total_samples: int = 0
    accepted_samples: int = 0
    rejected_samples: int = 0
    issues: Counter = field(default_factory=Counter)
    first_issue: Optional[Tuple[int, str]] = None

    def record_issue(self, index: int, issue: str) -> None:
        self.rejected_samples += 1
        self.issues[issue] += 1
        if self.first_issue is None:
            self.first_issue = (index, issue)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_samples": self.total_samples,
            "accepted_samples": self.accepted_samples,
            "rejected_samples": self.rejected_samples,
            "issues": dict(self.issues),
        }


class SamplingValidator:
    """Checks that a series is finite and uniformly spaced by ``step`` seconds."""

    def __init__(self, *, step: int, tolerance: float = 0.0) -> None:
        if step <= 0:
            raise IrregularSamplingError(f"sampling step must be positive, got {step}s")
        if not math.isfinite(tolerance) or tolerance < 0:
            raise ValueError(f"tolerance must be finite and non-negative, got {tolerance}")
        self.step = int(step)
        self.tolerance = float(tolerance)
        self.stats = SamplingStats()

    def inspect(self, samples: Sequence[PointEstimate]) -> SamplingStats:
        """Record every issue found in ``samples`` without raising."""
        self.stats = SamplingStats()
        previous: Optional[int] = None

        for index, sample in enumerate(samples):
            self.stats.total_samples += 1
            current = epoch_seconds(sample.instant)

            if not math.isfinite(sample.value):
                self.stats.record_issue(index, "non_finite_value")
            elif previous is not None and current <= previous:
                self.stats.record_issue(index, "timestamp_regression")
            elif previous is not None and abs((current - previous) - self.step) > self.tolerance:
                self.stats.record_issue(index, "irregular_step")
            else:
                self.stats.accepted_samples += 1

            previous = current

        return self.stats

    def check(self, samples: Sequence[PointEstimate]) -> None:
        """Raise on the first issue found in ``samples``."""
        stats = self.inspect(samples)
        if stats.first_issue is None:
            return

        index, issue = stats.first_issue
        sample = samples[index]
        if issue == "non_finite_value":
            raise InvalidSampleError(f"sample #{index} at {sample.instant} has non-finite value {sample.value}")
        raise IrregularSamplingError(
            f"sample #{index} at {sample.instant} breaks uniform {self.step}s spacing ({issue})"
        )

    def issues(self) -> List[str]:
        return sorted(self.stats.issues)
