"""Engine configuration.

Defaults live here as module constants; ``EngineConfig.from_env`` lets a
deployment override them without code changes.
"""

import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Mapping, Optional

# Packaged catalog source (CDC / WHO derived milestone list)
DEFAULT_CATALOG_PATH = Path(__file__).parent / "content" / "milestone_definitions.json"

# Upcoming milestones expected within this many months are "imminent"
IMMINENT_HORIZON_MONTHS = 3.0

DEFAULT_LOG_LEVEL = "WARNING"

ENV_CATALOG_PATH = "MILESTONE_ENGINE_CATALOG_PATH"
ENV_IMMINENT_MONTHS = "MILESTONE_ENGINE_IMMINENT_MONTHS"
ENV_LOG_LEVEL = "MILESTONE_ENGINE_LOG_LEVEL"
ENV_JSON_LOGS = "MILESTONE_ENGINE_JSON_LOGS"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class EngineConfig:
    """Runtime settings for the milestone engine."""
    catalog_path: Path = DEFAULT_CATALOG_PATH
    imminent_horizon_months: float = IMMINENT_HORIZON_MONTHS
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["catalog_path"] = str(self.catalog_path)
        return data

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            EngineConfig with any overrides applied

        Raises:
            ValueError: If the imminent horizon is not a number
        """
        if environ is None:
            environ = os.environ

        catalog_path = environ.get(ENV_CATALOG_PATH)
        horizon = environ.get(ENV_IMMINENT_MONTHS)

        return cls(
            catalog_path=Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH,
            imminent_horizon_months=float(horizon) if horizon else IMMINENT_HORIZON_MONTHS,
            log_level=environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
            json_logs=_parse_bool(environ.get(ENV_JSON_LOGS, "")),
        )
