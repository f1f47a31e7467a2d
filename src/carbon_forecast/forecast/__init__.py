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

from .estimates import AverageEstimate, PointEstimate, by_value
from .sampling import SamplingStats, SamplingValidator
from .summary import ForecastSummary, get_average_estimate
from .windowed_forecast import WindowedForecast

__all__ = [
    "AverageEstimate",
    "ForecastSummary",
    "PointEstimate",
    "SamplingStats",
    "SamplingValidator",
    "WindowedForecast",
    "by_value",
    "get_average_estimate",
]
