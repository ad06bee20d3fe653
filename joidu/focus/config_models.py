from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from joidu.focus import CONFIG_PATH

logger = logging.getLogger(__name__)


# =============================================================================
# Energy advisor (args/focus.yaml -> energy)
# =============================================================================

class EnergyThresholdsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    high: float = Field(default=0.7, ge=0.0, le=1.0)
    medium: float = Field(default=0.4, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _ordered(self) -> EnergyThresholdsConfig:
        if self.medium > self.high:
            raise ValueError("energy medium threshold must not exceed high")
        return self



class EnergyConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    history_cap: int = Field(default=20, ge=1)
    recent_window: int = Field(default=5, ge=1)
    min_recent_sessions: int = Field(default=3, ge=1)
    refresh_interval_seconds: float = Field(default=3600, gt=0)
    thresholds: EnergyThresholdsConfig = Field(default_factory=EnergyThresholdsConfig)
    default_priors: dict[str, str] = Field(
        default_factory=lambda: {
            "morning": "high",
            "afternoon": "medium",
            "evening": "low",
            "night": "low",
        }
    )


# =============================================================================
# Hyperfocus guard (args/focus.yaml -> hyperfocus)
# =============================================================================

class HyperfocusThresholdsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    gentle: int = Field(default=25, ge=0)
    strong: int = Field(default=45, ge=0)
    urgent: int = Field(default=90, ge=0)
    emergency: int = Field(default=120, ge=0)

    @model_validator(mode="after")
    def _ascending(self) -> HyperfocusThresholdsConfig:
        if not (self.gentle <= self.strong <= self.urgent <= self.emergency):
            raise ValueError("hyperfocus thresholds must be ascending")
        return self


class HyperfocusConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    tick_interval_seconds: float = Field(default=60, gt=0, le=60)
    default_break_minutes: int = Field(default=10, ge=1)
    break_history_cap: int = Field(default=50, ge=1)
    dismissal_history_cap: int = Field(default=50, ge=1)
    session_history_cap: int = Field(default=100, ge=1)
    thresholds: HyperfocusThresholdsConfig = Field(default_factory=HyperfocusThresholdsConfig)


class StorageConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    db_path: str | None = None


class FocusConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    energy: EnergyConfig = Field(default_factory=EnergyConfig)
    hyperfocus: HyperfocusConfig = Field(default_factory=HyperfocusConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


# =============================================================================
# load_and_validate
# =============================================================================

def load_and_validate(path: Path | None = None) -> FocusConfig:
    yaml_path = Path(path) if path else CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return FocusConfig.model_validate(raw.get("focus", raw))
    except Exception as e:
        logger.warning(f"Config validation failed for {yaml_path}: {e}, using defaults")
        return FocusConfig()
