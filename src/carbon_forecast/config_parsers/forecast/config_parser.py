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

from typing import Any, Dict
from pathlib import Path
import yaml

from carbon_forecast.config_parsers.forecast.config_dataclass import (
    ForecastConfig,
    ForecastRunConfig,
    LoggingConfig,
)
from carbon_forecast.config_validation import validate_forecast_config
from carbon_forecast.exceptions import ConfigError


class ForecastConfigParser:
    """
    Parses and validates the forecast run YAML configuration file.

    Produces a ForecastRunConfig describing the window parameters
    and logging setup for run_forecast.
    """

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise FileNotFoundError(f"Forecast config not found: {config_path}")

    # ------------------------------------------------------------------
    def load_config(self) -> ForecastRunConfig:
        """Load and validate the forecast YAML into config dataclasses."""

        # --- Parse YAML ---
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                raw: Dict[str, Any] = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML at {self.config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError("Invalid forecast config: root must be a mapping (YAML dict)")

        try:
            validated = validate_forecast_config(raw)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        # --- Build config dataclasses ---
        try:
            forecast = ForecastConfig(**validated["forecast"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid 'forecast' section in {self.config_path}: {e}") from e

        try:
            logging_config = LoggingConfig(**validated["logging"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid 'logging' section in {self.config_path}: {e}") from e

        return ForecastRunConfig(
            schema_version=validated["schema_version"],
            forecast=forecast,
            logging=logging_config,
        )
