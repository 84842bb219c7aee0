"""Configuration management for the Fourier analysis engine and CLI."""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .logger import get_logger
from .types import WaveParams
from .utils import is_power_of_two

LOGGER = get_logger(__name__)

_HOME_DIR = Path(os.environ.get("FFTLAB_HOME", Path.home() / ".fftlab"))
DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


class EngineDefaults(BaseModel):
    """Sampling grid and presentation conventions for every recompute."""

    num_points: int = Field(512, gt=0, description="Samples per signal; must be a power of two")
    sampling_rate: float = Field(1000.0, gt=0.0, description="Samples per second")
    phase_offset_deg: float = Field(90.0, ge=-360.0, le=360.0, description="Shift added to every phase bin")
    centroid_scale: float = Field(2.0, description="Scale applied to the mean of the projected trajectory")

    @field_validator("num_points")
    @classmethod
    def _validate_power_of_two(cls, value: int) -> int:
        if not is_power_of_two(value):
            raise ValueError("num_points must be a power of two")
        return value

    @field_validator("sampling_rate", "centroid_scale")
    @classmethod
    def _validate_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("value must be finite")
        return value


class WaveDefaults(BaseModel):
    """One damped sinusoid in the default scene."""

    frequency: float = Field(10.0, description="Cycles across the sample window")
    amplitude: float = Field(1.0, description="Peak amplitude")
    decay: float = Field(0.0, ge=0.0, description="Exponential decay per sample index")
    phase_degrees: float = Field(0.0, description="Initial phase in degrees")

    @model_validator(mode="after")
    def _validate_finite(self) -> "WaveDefaults":
        for name in ("frequency", "amplitude", "decay", "phase_degrees"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")
        return self

    def to_params(self) -> WaveParams:
        return WaveParams(
            frequency=self.frequency,
            amplitude=self.amplitude,
            decay=self.decay,
            phase_degrees=self.phase_degrees,
        )


def _default_waves() -> List[WaveDefaults]:
    return [
        WaveDefaults(frequency=17.0, amplitude=5.0, decay=0.003, phase_degrees=-120.0),
        WaveDefaults(frequency=23.0, amplitude=5.0, decay=0.005, phase_degrees=77.0),
        WaveDefaults(frequency=31.0, amplitude=5.0, decay=0.001, phase_degrees=0.0),
    ]


class DisplayDefaults(BaseModel):
    """What the caller inspects after each recompute."""

    selected_frequency: float = Field(33.201, description="Frequency projected onto the complex plane")
    frequency_range: Tuple[float, float] = Field((0.0, 100.0), description="Inclusive spectrum window in Hz")

    @model_validator(mode="after")
    def _validate_range(self) -> "DisplayDefaults":
        low, high = self.frequency_range
        if low > high:
            raise ValueError("frequency_range lower bound must not exceed the upper bound")
        if not math.isfinite(self.selected_frequency):
            raise ValueError("selected_frequency must be finite")
        return self


class LoggingDefaults(BaseModel):
    """Logging behaviour for the CLI entry point."""

    level: str = Field("INFO", description="Root logger level")
    directory: Path = Field(_HOME_DIR / "logs", description="Where rotating logs are stored")
    rotate_bytes: int = Field(5 * 1024 * 1024, ge=1024, description="Maximum log size in bytes")
    backup_count: int = Field(5, ge=1, description="Number of rotated archives to keep")


class AppConfig(BaseModel):
    """Top-level configuration tree."""

    debug: bool = Field(False, description="Enable verbose logging and developer diagnostics")
    engine: EngineDefaults = Field(default_factory=EngineDefaults)
    waves: List[WaveDefaults] = Field(default_factory=_default_waves, min_length=1)
    display: DisplayDefaults = Field(default_factory=DisplayDefaults)
    logging: LoggingDefaults = Field(default_factory=LoggingDefaults)

    @model_validator(mode="after")
    def _check_display_range(self) -> "AppConfig":
        nyquist = self.engine.sampling_rate / 2
        if self.display.frequency_range[1] > nyquist:
            LOGGER.debug(
                "Display range extends past Nyquist",
                extra={"high": self.display.frequency_range[1], "nyquist": nyquist},
            )
        return self

    def wave_params(self) -> List[WaveParams]:
        return [wave.to_params() for wave in self.waves]


def _merge_dicts(base: MutableMapping[str, Any], overrides: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), MutableMapping):
            _merge_dicts(base[key], value)  # type: ignore[index]
        else:
            base[key] = value  # type: ignore[index]
    return base


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle) or {}
    if not isinstance(content, dict):
        raise TypeError("Configuration file must contain a mapping at the root level")
    return content


def load_config(path: Optional[Path] = None, overrides: Optional[Mapping[str, Any]] = None) -> AppConfig:
    """Load, merge, and validate the configuration tree."""

    if path is None:
        path = DEFAULT_CONFIG_PATH

    LOGGER.debug("Loading configuration", extra={"path": str(path)})

    config_map: MutableMapping[str, Any] = {}
    if path.exists():
        config_map = _load_yaml(path)
    else:
        LOGGER.warning("Configuration file not found, using defaults", extra={"path": str(path)})

    env_log_dir = os.getenv("FFTLAB_LOG_DIR")
    if env_log_dir:
        config_map.setdefault("logging", {})["directory"] = env_log_dir

    if overrides:
        _merge_dicts(config_map, dict(overrides))

    try:
        config = AppConfig.model_validate(config_map)
    except ValidationError as exc:
        LOGGER.error("Invalid configuration", exc_info=exc)
        raise

    return config


__all__ = [
    "AppConfig",
    "DisplayDefaults",
    "EngineDefaults",
    "LoggingDefaults",
    "WaveDefaults",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]
