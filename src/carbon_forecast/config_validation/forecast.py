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

from carbon_forecast.config_validation.schema_registry import validate_schema_version
from carbon_forecast.exceptions import ConfigError

_FORECAST_KEYS = {"duration_minutes", "start", "validate_sampling", "sampling_tolerance_seconds"}
_LOGGING_KEYS = {"level", "log_dir"}


def _section(working: dict, name: str, allowed: set, *, required: bool) -> dict:
    section = working.get(name)
    if section is None:
        if required:
            raise ValueError(f"Invalid forecast configuration: missing '{name}' section")
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"Invalid forecast configuration: '{name}' must be a mapping")

    extra = sorted(set(section.keys()) - allowed)
    if extra:
        raise ValueError(f"Invalid forecast configuration: '{name}' has unexpected keys {extra}")
    return dict(section)


def validate_forecast_config(raw: dict) -> dict:
    """Validate forecast YAML payload and return normalized mapping."""
    if not isinstance(raw, dict):
        raise ValueError("Invalid forecast configuration: root must be a mapping")

    try:
        schema_spec = validate_schema_version("forecast", raw.get("schema_version"))
    except ConfigError as exc:
        raise ValueError(str(exc)) from exc

    working = dict(raw)
    if schema_spec.migration is not None:
        working = dict(schema_spec.migration(working))

    working["schema_version"] = schema_spec.canonical

    allowed_root = {"schema_version", "forecast", "logging"}
    extra_root = sorted(set(working.keys()) - allowed_root)
    if extra_root:
        raise ValueError(f"Invalid forecast configuration: unexpected keys {extra_root}")

    forecast = _section(working, "forecast", _FORECAST_KEYS, required=True)
    if "duration_minutes" not in forecast:
        raise ValueError("Invalid forecast configuration: 'forecast' missing key 'duration_minutes'")

    logging_section = _section(working, "logging", _LOGGING_KEYS, required=False)

    return {
        "schema_version": working["schema_version"],
        "forecast": forecast,
        "logging": logging_section,
    }
