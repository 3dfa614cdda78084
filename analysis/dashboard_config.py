"""
Dashboard configuration - YAML defaults with environment overrides.
"""

import os
import logging
import yaml
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from dotenv import load_dotenv

from reports.palette import DEFAULT_CATEGORY_COLOR, CategoryPalette

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / 'config' / 'dashboard.yml'
PREFERRED_GLOBAL_WAVE = ['Top300', 'PE_low', 'PB_low']


class ConfigError(Exception):
    """Raised when dashboard configuration is invalid or cannot be loaded."""
    pass


@dataclass
class DashboardConfig:
    """Configuration for one dashboard build."""
    start: str = "2003-01-01"
    end: str = "2025-12-31"
    risk_free_rate: float = 0.0
    periods_per_year: int = 252
    selected: List[str] = field(default_factory=lambda: ['Top300'])
    global_wave_selected: List[str] = field(default_factory=lambda: list(PREFERRED_GLOBAL_WAVE))
    benchmark: Optional[str] = 'Top300'
    global_wave_horizon: int = 6
    palette: CategoryPalette = field(default_factory=CategoryPalette)

    def __post_init__(self):
        """Validate settings."""
        if self.global_wave_horizon not in (6, 12):
            raise ConfigError(
                f"global_wave_horizon must be 6 or 12, got {self.global_wave_horizon}"
            )

        if not isinstance(self.periods_per_year, int) or self.periods_per_year <= 0:
            raise ConfigError(
                f"periods_per_year must be a positive integer, got {self.periods_per_year}"
            )


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _parse_config(raw: Dict[str, Any]) -> DashboardConfig:
    defaults = _section(raw, 'defaults')
    colors = _section(raw, 'colors')
    categories = _section(colors, 'categories')

    palette = CategoryPalette(
        colors=dict(categories),
        default=colors.get('default', DEFAULT_CATEGORY_COLOR)
    )

    kwargs = {
        key: defaults[key]
        for key in (
            'start', 'end', 'risk_free_rate', 'periods_per_year', 'selected',
            'global_wave_selected', 'benchmark', 'global_wave_horizon'
        )
        if key in defaults
    }
    for key in ('start', 'end'):
        if key in kwargs:
            kwargs[key] = str(kwargs[key])
    if 'risk_free_rate' in kwargs:
        kwargs['risk_free_rate'] = float(kwargs['risk_free_rate'])

    return DashboardConfig(palette=palette, **kwargs)


def load_dashboard_config(config_path: Optional[str] = None) -> DashboardConfig:
    """
    Load dashboard configuration from YAML file.

    Path resolution: explicit argument, then FACTOR_DASHBOARD_CONFIG, then
    the bundled config/dashboard.yml. FACTOR_DASHBOARD_RF overrides the
    risk-free rate.

    Args:
        config_path: Path to dashboard config file

    Returns:
        DashboardConfig

    Raises:
        ConfigError: If config file cannot be loaded or is invalid
    """
    if config_path is None:
        config_path = os.getenv('FACTOR_DASHBOARD_CONFIG', str(DEFAULT_CONFIG_PATH))

    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Dashboard config file not found: {config_path}")

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load dashboard config: {e}")

    if not isinstance(raw, dict):
        raise ConfigError("Dashboard config must be a mapping")

    try:
        config = _parse_config(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid dashboard config: {e}")

    rf_override = os.getenv('FACTOR_DASHBOARD_RF', '').strip()
    if rf_override:
        try:
            config = replace(config, risk_free_rate=float(rf_override))
        except ValueError:
            raise ConfigError(f"FACTOR_DASHBOARD_RF must be numeric, got {rf_override!r}")

    logger.info(f"Loaded dashboard config from {config_file}")
    return config


def resolve_selection(config: DashboardConfig, available: Sequence[str]) -> DashboardConfig:
    """
    Fit the configured selections to the factors actually available.

    - selected: keep available entries, else the first available factor
    - global_wave_selected: preferred defaults that exist, else the first three
    - benchmark: Top300 if present, else the first available factor

    Args:
        config: Configured dashboard
        available: Factor names from the manifest

    Returns:
        New DashboardConfig (the input is returned unchanged if nothing is available)
    """
    names = list(available)
    if not names:
        return config

    selected = [f for f in config.selected if f in names] or [names[0]]

    wave = [f for f in config.global_wave_selected if f in names]
    if not wave:
        wave = names[:min(3, len(names))]

    if config.benchmark in names:
        benchmark = config.benchmark
    elif 'Top300' in names:
        benchmark = 'Top300'
    else:
        benchmark = names[0]

    return replace(config, selected=selected, global_wave_selected=wave, benchmark=benchmark)
