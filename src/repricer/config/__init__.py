"""Config loading and freezing."""

from repricer.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    parse_config,
    serialize_config,
    verify_config_lock,
)
from repricer.config.models import (
    CompetitorConfig,
    MonitoringConfig,
    RunConfig,
    SimulationSettings,
)

__all__ = [
    "CompetitorConfig",
    "MonitoringConfig",
    "RunConfig",
    "SimulationSettings",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "parse_config",
    "serialize_config",
    "verify_config_lock",
]
