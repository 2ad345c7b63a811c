# config.py
# YAML settings: defaults, validation, command-line overrides

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ('binarise', 'topology', 'classify', 'report')


def default_labels(max_holes: int = 2) -> Dict[str, Dict[int, int]]:
    """One label per hole-count bucket: '0 holes', '1 hole', '2 holes', ..."""
    return {("1 hole" if k == 1 else f"{k} holes"): {k: 1} for k in range(max_holes + 1)}


@dataclass
class Settings:
    # luminance <= threshold is foreground; None = Otsu per image
    threshold: Optional[int] = 128
    shape_connectivity: int = 4
    hole_connectivity: int = 4
    max_holes: int = 2
    # output label -> {hole count: coefficient}
    labels: Dict[str, Dict[int, int]] = field(default_factory=default_labels)

    def validate(self) -> "Settings":
        """Raise ConfigError on the first bad value; returns self."""
        if self.threshold is not None and not 0 <= self.threshold <= 255:
            raise ConfigError(f"threshold must be in 0..255 or null, got {self.threshold}")
        for name in ('shape_connectivity', 'hole_connectivity'):
            if getattr(self, name) not in (4, 8):
                raise ConfigError(f"{name} must be 4 or 8, got {getattr(self, name)}")
        if self.max_holes < 0:
            raise ConfigError(f"max_holes must be >= 0, got {self.max_holes}")
        for label, combo in self.labels.items():
            for holes in combo:
                if not 0 <= holes <= self.max_holes:
                    raise ConfigError(
                        f"label {label!r} uses bucket {holes}, outside 0..{self.max_holes}"
                    )
        return self


def _as_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{section}.{key} must be an integer, got {value!r}")
    return value


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    raw = config.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(raw).__name__}")
    return raw


def _parse_labels(raw: Any) -> Dict[str, Dict[int, int]]:
    if not isinstance(raw, dict):
        raise ConfigError(f"report.labels must be a mapping, got {type(raw).__name__}")
    labels: Dict[str, Dict[int, int]] = {}
    for name, combo in raw.items():
        if isinstance(combo, int) and not isinstance(combo, bool):
            combo = {combo: 1}   # shorthand: label: <hole count>
        if not isinstance(combo, dict):
            raise ConfigError(f"report.labels.{name} must map hole count to coefficient")
        labels[str(name)] = {
            _as_int('report.labels', str(name), k): _as_int('report.labels', str(name), v)
            for k, v in combo.items()
        }
    return labels


def settings_from_dict(config: Optional[Dict[str, Any]]) -> Settings:
    """
    Settings from a parsed mapping with optional sections
    binarise/topology/classify/report; missing values keep their defaults.
    """
    config = config or {}
    if not isinstance(config, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(config).__name__}")
    for section in config:
        if section not in KNOWN_SECTIONS:
            logger.warning(f"Unknown configuration section: {section}")

    settings = Settings()
    binarise = _section(config, 'binarise')
    if 'threshold' in binarise:
        thr = binarise['threshold']
        settings.threshold = None if thr in (None, 'otsu') else _as_int('binarise', 'threshold', thr)

    topology = _section(config, 'topology')
    if 'connectivity' in topology:
        c = _as_int('topology', 'connectivity', topology['connectivity'])
        settings.shape_connectivity = settings.hole_connectivity = c
    for key in ('shape_connectivity', 'hole_connectivity'):
        if key in topology:
            setattr(settings, key, _as_int('topology', key, topology[key]))

    classify = _section(config, 'classify')
    if 'max_holes' in classify:
        settings.max_holes = _as_int('classify', 'max_holes', classify['max_holes'])
        if settings.max_holes >= 0:
            settings.labels = default_labels(settings.max_holes)

    report = _section(config, 'report')
    if 'labels' in report:
        settings.labels = _parse_labels(report['labels'])

    return settings.validate()


def load_config(config_path: str) -> Settings:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ConfigError: If a value is out of range
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML configuration: {e}")
        raise

    settings = settings_from_dict(config)
    logger.info(f"Configuration loaded from {config_path}")
    return settings


def update_config(settings: Settings, overrides: Dict[str, Any]) -> Settings:
    """New validated Settings with overrides applied; None values are ignored."""
    changes = {k: v for k, v in (overrides or {}).items() if v is not None}
    for key, value in changes.items():
        if not hasattr(settings, key):
            raise ConfigError(f"Unknown setting: {key}")
        logger.info(f"Override {key} = {value}")
    if ('max_holes' in changes and 'labels' not in changes
            and settings.labels == default_labels(settings.max_holes)):
        changes['labels'] = default_labels(changes['max_holes'])
    return replace(settings, **changes).validate()
