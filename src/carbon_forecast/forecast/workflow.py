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

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from carbon_forecast.config_parsers.forecast.config_dataclass import ForecastRunConfig
from carbon_forecast.config_parsers.forecast.config_parser import ForecastConfigParser
from carbon_forecast.exceptions import ForecastError
from carbon_forecast.forecast.estimates import PointEstimate
from carbon_forecast.forecast.summary import ForecastSummary, get_average_estimate
from carbon_forecast.logging_utils import (
    configure_logging,
    generate_run_id,
    get_git_hash,
    log_run_metadata,
    run_context,
)

logger = logging.getLogger(__name__)

__all__ = [
    "load_config",
    "run_forecast",
    "setup_logging",
]


def load_config(config_path: Path | str) -> ForecastRunConfig:
    """Parse a forecast run configuration file."""
    parser = ForecastConfigParser(Path(config_path))
    return parser.load_config()


def setup_logging(run_id: str, config: ForecastRunConfig) -> logging.Logger:
    configure_logging(run_id=run_id, log_dir=config.logging.log_dir, level=config.logging.level)
    return logging.getLogger(__name__)


def run_forecast(
    samples: Iterable[PointEstimate],
    config: Union[ForecastRunConfig, Path, str],
    *,
    run_id: Optional[str] = None,
    region: Optional[str] = None,
) -> ForecastSummary:
    """Summarise ``samples`` using the window parameters in ``config``.

    ``config`` may be a parsed ForecastRunConfig or a path to a YAML file.
    Logging is not reconfigured here; call :func:`setup_logging` first for
    structured output.
    """
    config_path: Optional[Path] = None
    if not isinstance(config, ForecastRunConfig):
        config_path = Path(config)
        config = load_config(config_path)

    run_id = run_id or generate_run_id()
    forecast_config = config.forecast

    with run_context(run_id=run_id, region=region):
        log_run_metadata(logger, run_config=config, config_path=config_path, git_hash=get_git_hash())

        try:
            summary = get_average_estimate(
                samples,
                forecast_config.duration_minutes,
                forecast_config.start,
                **forecast_config.to_kwargs(),
            )
        except ForecastError:
            logger.exception(
                "forecast failed",
                extra={"duration_minutes": forecast_config.duration_minutes},
            )
            raise

        logger.info("forecast complete", extra={"summary": summary.as_dict()})

    return summary
