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

"""Project-wide exception hierarchy."""

from __future__ import annotations


class CarbonForecastError(Exception):
    """Base exception for the carbon forecast stack."""


class ConfigError(CarbonForecastError):
    """Raised when user-supplied configuration is invalid."""


class ForecastError(CarbonForecastError):
    """Raised when a windowed forecast cannot be built or evaluated."""


class InsufficientDataError(ForecastError):
    """Raised when fewer than two samples are available."""


class WindowExceedsDataError(ForecastError):
    """Raised when the sample series does not cover one full window."""


class WindowIndexError(ForecastError, IndexError):
    """Raised when a window needs a sample beyond the stored series."""


class DegenerateWindowError(ForecastError):
    """Raised when a window or interpolation interval spans zero seconds."""


class TimestampConversionError(ForecastError):
    """Raised when epoch seconds cannot be represented as a UTC instant."""


class IrregularSamplingError(ForecastError):
    """Raised when samples are not uniformly spaced in time."""


class InvalidSampleError(ForecastError):
    """Raised when a sample carries a non-finite value."""
