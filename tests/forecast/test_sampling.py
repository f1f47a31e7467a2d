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

from datetime import timedelta

import pytest

from carbon_forecast.exceptions import InvalidSampleError, IrregularSamplingError
from carbon_forecast.forecast.estimates import PointEstimate
from carbon_forecast.forecast.sampling import SamplingValidator


def test_validator_accepts_uniform_series(point_series_factory):
    validator = SamplingValidator(step=60)
    stats = validator.inspect(point_series_factory([1.0, 2.0, 3.0, 4.0]))

    assert stats.as_dict() == {
        "total_samples": 4,
        "accepted_samples": 4,
        "rejected_samples": 0,
        "issues": {},
    }
    assert stats.first_issue is None


def test_validator_tallies_every_issue(point_series_factory, base_time):
    series = point_series_factory([1.0, 2.0, 3.0, 4.0, 5.0])
    series[1] = PointEstimate(float("inf"), series[1].instant)
    series[3] = PointEstimate(4.0, base_time + timedelta(seconds=200))
    series.append(PointEstimate(6.0, base_time))

    validator = SamplingValidator(step=60)
    stats = validator.inspect(series)

    assert stats.total_samples == 6
    assert stats.accepted_samples == 2
    assert stats.rejected_samples == 4
    assert stats.issues["non_finite_value"] == 1
    assert stats.issues["irregular_step"] == 2
    assert stats.issues["timestamp_regression"] == 1
    assert stats.first_issue == (1, "non_finite_value")
    assert validator.issues() == ["irregular_step", "non_finite_value", "timestamp_regression"]


def test_check_raises_for_non_finite_value(point_series_factory):
    series = point_series_factory([1.0, float("nan"), 3.0])

    with pytest.raises(InvalidSampleError, match="sample #1"):
        SamplingValidator(step=60).check(series)


def test_check_raises_for_duplicate_instant(base_time):
    series = [PointEstimate(1.0, base_time), PointEstimate(2.0, base_time)]

    with pytest.raises(IrregularSamplingError, match="timestamp_regression"):
        SamplingValidator(step=60).check(series)


def test_check_respects_tolerance(point_series_factory):
    series = point_series_factory([1.0, 2.0, 3.0], step_seconds=1800)
    series[2] = PointEstimate(3.0, series[2].instant + timedelta(seconds=30))

    SamplingValidator(step=1800, tolerance=30).check(series)
    with pytest.raises(IrregularSamplingError):
        SamplingValidator(step=1800, tolerance=29).check(series)


@pytest.mark.parametrize("step", [0, -60])
def test_non_positive_step_is_rejected(step):
    with pytest.raises(IrregularSamplingError):
        SamplingValidator(step=step)


@pytest.mark.parametrize("tolerance", [-1.0, float("nan")])
def test_invalid_tolerance_is_rejected(tolerance):
    with pytest.raises(ValueError):
        SamplingValidator(step=60, tolerance=tolerance)
