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

from datetime import datetime, timedelta, timezone

import pytest

from carbon_forecast.exceptions import IrregularSamplingError, WindowExceedsDataError
from carbon_forecast.forecast.estimates import PointEstimate
from carbon_forecast.forecast.summary import get_average_estimate
from carbon_forecast.forecast.windowed_forecast import WindowedForecast


def test_summary_reports_current_and_minimum_window(sine_series, base_time):
    summary = get_average_estimate(sine_series, 160, base_time)
    forecast = WindowedForecast(sine_series, 160, base_time)

    assert summary.windows == 41
    assert summary.now.value == forecast.window_at(0).value
    assert summary.now.start == base_time
    assert summary.minimum.value == min(w.value for w in forecast)


def test_minimum_window_is_centred_on_signal_trough(sine_series, base_time):
    """-sin over half a period bottoms out mid-series, so the centred window wins."""

    summary = get_average_estimate(sine_series, 160, base_time)

    assert summary.minimum.start == base_time + timedelta(minutes=20)
    assert summary.minimum.end == base_time + timedelta(minutes=180)
    assert summary.minimum < summary.now


def test_summary_passes_forecast_options(point_series_factory, base_time):
    data = point_series_factory([float(i) for i in range(10)])
    data[5] = PointEstimate(data[5].value, data[5].instant + timedelta(seconds=20))

    with pytest.raises(IrregularSamplingError):
        get_average_estimate(data, 3, base_time)

    summary = get_average_estimate(data, 3, base_time, validate_sampling=False)
    assert summary.windows == 8


def test_summary_defaults_start_to_now(point_series_factory):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    data = point_series_factory([10.0] * 120, start=now - timedelta(minutes=1))

    summary = get_average_estimate(data, 30)

    assert summary.now.value == pytest.approx(10.0)
    assert summary.now.start >= now
    assert summary.now.end - summary.now.start == timedelta(minutes=30)


def test_summary_propagates_construction_errors(point_series_factory, base_time):
    with pytest.raises(WindowExceedsDataError):
        get_average_estimate(point_series_factory([1.0, 2.0, 3.0]), 60, base_time)


def test_summary_as_dict(point_series_factory, base_time):
    summary = get_average_estimate(point_series_factory([4.0, 2.0, 0.0, 2.0, 4.0]), 2, base_time)

    payload = summary.as_dict()
    assert payload["windows"] == 4
    assert payload["now"]["value"] == pytest.approx(2.0)
    assert payload["minimum"]["value"] == pytest.approx(1.0)
    assert payload["minimum"]["start"] == "2023-01-01T00:01:00+00:00"
