"""Site configuration.

Site metadata comes from, in order of precedence: command-line options,
environment variables (ENERGIA_SITE_NAME, ENERGIA_AREA_M2, ENERGIA_PERIOD,
also read from a .env file), a site.yaml file, and built-in defaults.

Example site.yaml:

    name: Oficina Centro
    area_m2: 120
    period: Marzo 2024
"""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .models import Site
from .reports.report_data import DEFAULT_SITE_NAME


class ConfigError(ValueError):
    """Raised for unreadable or invalid site configuration."""
    pass


def config_candidates() -> list[Path]:
    return [
        Path.cwd() / "config" / "site.yaml",
        Path.home() / ".config" / "energia" / "site.yaml",
    ]


def find_config_path() -> Path | None:
    """Find the first existing site.yaml, if any."""
    for path in config_candidates():
        if path.exists():
            return path
    return None


def parse_area(value) -> float | None:
    """Parse a floor area; blank means not provided."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        area = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid floor area: {value!r}")
    return area


def load_site_file(config_path: Path | None = None) -> dict:
    """Load raw site settings from YAML. Missing default file means {}."""
    path = config_path or find_config_path()
    if path is None:
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Site config not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    except UnicodeDecodeError as e:
        raise ConfigError(f"Site config is not UTF-8: {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Site config must be a mapping: {path}")
    return data


def load_site(
    config_path: Path | None = None,
    name: str | None = None,
    area_m2: float | None = None,
    period: str | None = None,
) -> Site:
    """Resolve site metadata from options, environment and YAML."""
    load_dotenv()
    data = load_site_file(config_path)

    resolved_name = name or os.environ.get("ENERGIA_SITE_NAME") or data.get("name") or DEFAULT_SITE_NAME

    if area_m2 is not None:
        resolved_area = area_m2
    elif os.environ.get("ENERGIA_AREA_M2"):
        resolved_area = parse_area(os.environ["ENERGIA_AREA_M2"])
    else:
        resolved_area = parse_area(data.get("area_m2"))

    resolved_period = period or os.environ.get("ENERGIA_PERIOD") or data.get("period")

    return Site(
        name=str(resolved_name),
        area_m2=resolved_area,
        period=str(resolved_period) if resolved_period else None,
    )
