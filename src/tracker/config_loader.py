"""Load, validate, and hot-reload the cycle tracker configuration.

The config lives in ``tracker_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_tracker_config()`` to re-read from
disk after an edit.  Trackers built without an explicit config read the cached
singleton on every operation, so they pick up the reload without a restart;
trackers given a config at construction keep it.

Usage::

    from src.tracker.config_loader import get_tracker_config

    config = get_tracker_config()
    config.irregularity_threshold_days      # 5
    config.prediction.max_cycle_length      # 30
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger("cyclelog.tracker.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "tracker_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class PredictionConfig:
    """Forward prediction settings."""

    count: int = 2
    min_cycle_length: int = 28
    max_cycle_length: int = 30


@dataclass
class FertilityConfig:
    """Ovulation and fertile window offsets, in days."""

    luteal_phase_days: int = 14
    days_before_ovulation: int = 2
    window_span_days: int = 3


@dataclass
class TrackerConfig:
    """Complete, validated tracker configuration.

    This is the single in-memory representation of tracker_config.yaml.

    Attributes:
        version:                     Config schema version string.
        initial_average_cycle_length: Seed for the running average.
        irregularity_threshold_days: Max allowed |gap - average| before a pair
                                     of cycles is reported as irregular.
        order_by_start_date:         Sort cycles by start date before
                                     irregularity checks and predictions.
        prediction:                  Forward prediction settings.
        fertility:                   Ovulation / fertile window offsets.
        advisories:                  Symptom tag → tip text.
    """

    version: str
    initial_average_cycle_length: int = 28
    irregularity_threshold_days: int = 5
    order_by_start_date: bool = False
    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    fertility: FertilityConfig = field(default_factory=FertilityConfig)
    advisories: dict[str, str] = field(default_factory=dict)
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracker_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracker config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> TrackerConfig:
    """Validate the raw YAML dict and construct a TrackerConfig.

    Every problem is collected before raising so a single run reports all of
    them.

    Raises:
        ConfigValidationError: If any field is missing its expected type or
                               range.
    """
    errors: list[str] = []

    def _int(section: dict, key: str, path: str, default: int, minimum: int) -> int:
        value = section.get(key, default)
        if isinstance(value, bool):
            errors.append(f"{path} must be an integer, got {value!r}")
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{path} must be an integer, got {value!r}")
            return default
        if number < minimum:
            errors.append(f"{path} = {number} is below the minimum of {minimum}")
        return number

    def _section(key: str) -> dict:
        section = raw.get(key) or {}
        if not isinstance(section, dict):
            errors.append(f"'{key}' must be a mapping")
            return {}
        return section

    version = str(raw.get("version", "1.0"))

    # ── Date format ──
    if "date_format" in raw:
        errors.append("date_format is not configurable; dates are always dd-mm-yyyy")

    # ── Cycle length ──
    cl_raw = _section("cycle_length")
    initial_average = _int(cl_raw, "initial_average", "cycle_length.initial_average", 28, 1)
    threshold = _int(
        cl_raw, "irregularity_threshold_days", "cycle_length.irregularity_threshold_days", 5, 0
    )

    # ── Ordering ──
    ord_raw = _section("ordering")
    order_by_start = ord_raw.get("order_by_start_date", False)
    if not isinstance(order_by_start, bool):
        errors.append(f"ordering.order_by_start_date must be true/false, got {order_by_start!r}")
        order_by_start = False

    # ── Prediction ──
    pr_raw = _section("prediction")
    prediction = PredictionConfig(
        count=_int(pr_raw, "count", "prediction.count", 2, 1),
        min_cycle_length=_int(pr_raw, "min_cycle_length", "prediction.min_cycle_length", 28, 1),
        max_cycle_length=_int(pr_raw, "max_cycle_length", "prediction.max_cycle_length", 30, 1),
    )
    if prediction.min_cycle_length > prediction.max_cycle_length:
        errors.append(
            f"prediction.min_cycle_length ({prediction.min_cycle_length}) is greater than "
            f"prediction.max_cycle_length ({prediction.max_cycle_length})"
        )

    # ── Fertility ──
    fw_raw = _section("fertility")
    fertility = FertilityConfig(
        luteal_phase_days=_int(fw_raw, "luteal_phase_days", "fertility.luteal_phase_days", 14, 0),
        days_before_ovulation=_int(
            fw_raw, "days_before_ovulation", "fertility.days_before_ovulation", 2, 0
        ),
        window_span_days=_int(fw_raw, "window_span_days", "fertility.window_span_days", 3, 0),
    )

    # ── Advisories ──
    advisories: dict[str, str] = {}
    for tag, tip in _section("advisories").items():
        if not isinstance(tip, str) or not tip.strip():
            errors.append(f"advisories.{tag} must be a non-empty string")
            continue
        advisories[str(tag)] = tip.strip()
    if not advisories:
        logger.warning("No symptom advisories configured; health reminders are disabled")

    if errors:
        raise ConfigValidationError(
            f"tracker_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackerConfig(
        version=version,
        initial_average_cycle_length=initial_average,
        irregularity_threshold_days=threshold,
        order_by_start_date=order_by_start,
        prediction=prediction,
        fertility=fertility,
        advisories=advisories,
        _raw=raw,
    )


def load_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Load and validate the tracker config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracker_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded tracker config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackerConfig | None = None
_config_lock = threading.Lock()


def get_tracker_config() -> TrackerConfig:
    """Return the global TrackerConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_tracker_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_tracker_config()
    return _config


def reload_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Reload the tracker config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_tracker_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded tracker config: %s → %s", old_version, new_config.version)
    return new_config
