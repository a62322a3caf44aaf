"""
YAML configuration for the report builder.

Sample ``fedramp_compare.yaml``
-------------------------------
```yaml
# Relative paths resolve from the config file location.
source:
  url: https://www.fedramp.gov/assets/resources/documents/FedRAMP_Security_Controls_Baseline.xlsx
  path: ./inputs/FedRAMP_Security_Controls_Baseline.xlsx   # wins over url when set
  timeout: 60

# Optional tab-name overrides, keyed by baseline.
sheets:
  High: High Baseline
  Moderate: Moderate Baseline
  Low: Low Baseline

parsing:
  header_row: 1   # zero-based; row 0 is the title row

report:
  title: fedramp controls comparison
  stylesheet: style.css
  html_path: ./reports/controls.html
  xlsx_path: ./reports/controls.xlsx
  summary_path: ./reports/summary.csv
```

Environment (or ``.env``) overrides: ``FEDRAMP_COMPARE_CONFIG`` names the
config file when none is passed explicitly; ``FEDRAMP_BASELINE_URL`` and
``FEDRAMP_BASELINE_PATH`` override ``source.url`` / ``source.path``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .html_report import DEFAULT_TITLE
from .models import Baseline
from .parser import DEFAULT_HEADER_ROW
from .workbook import DEFAULT_BASELINE_URL, DEFAULT_TIMEOUT

CONFIG_ENV_KEY = "FEDRAMP_COMPARE_CONFIG"
URL_ENV_KEY = "FEDRAMP_BASELINE_URL"
PATH_ENV_KEY = "FEDRAMP_BASELINE_PATH"


class ConfigError(ValueError):
    """Raised when the YAML configuration is invalid."""


@dataclass
class SourceSettings:
    url: str = DEFAULT_BASELINE_URL
    path: Optional[Path] = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class ReportSettings:
    title: str = DEFAULT_TITLE
    stylesheet: Optional[str] = None
    html_path: Path = Path("./reports/controls.html")
    xlsx_path: Optional[Path] = None
    summary_path: Optional[Path] = None


@dataclass
class AppConfig:
    path: Optional[Path] = None
    source: SourceSettings = field(default_factory=SourceSettings)
    sheet_names: Dict[Baseline, str] = field(default_factory=dict)
    header_row: int = DEFAULT_HEADER_ROW
    report: ReportSettings = field(default_factory=ReportSettings)


def _resolve_path(base: Path, value: Any) -> Optional[Path]:
    if value in (None, ""):
        return None
    return (base / str(value)).expanduser().resolve()


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"`{name}` must be a mapping")
    return value


def _parse_sheet_names(section: Dict[str, Any]) -> Dict[Baseline, str]:
    names: Dict[Baseline, str] = {}
    for key, value in section.items():
        try:
            baseline = Baseline.parse(key)
        except ValueError as exc:
            raise ConfigError(f"sheets: {exc}") from exc
        names[baseline] = str(value)
    return names


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    url = os.getenv(URL_ENV_KEY)
    if url:
        config.source.url = url
    local = os.getenv(PATH_ENV_KEY)
    if local:
        config.source.path = Path(local).expanduser().resolve()
    return config


def load_config(path: Optional[Path] = None) -> AppConfig:
    """
    Load the YAML configuration, falling back to built-in defaults.

    With no ``path`` the ``FEDRAMP_COMPARE_CONFIG`` variable is consulted; when
    that is unset too, defaults are used. An explicit path that does not exist
    is an error.
    """

    load_dotenv()

    if path is None and os.getenv(CONFIG_ENV_KEY):
        path = Path(os.environ[CONFIG_ENV_KEY])
    if path is None:
        return _apply_env_overrides(AppConfig())

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping")

    base = path.parent
    source_cfg = _section(raw, "source")
    parsing_cfg = _section(raw, "parsing")
    report_cfg = _section(raw, "report")

    try:
        timeout = float(source_cfg.get("timeout", DEFAULT_TIMEOUT))
        header_row = int(parsing_cfg.get("header_row", DEFAULT_HEADER_ROW))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid number in configuration: {exc}") from exc
    if header_row < 0:
        raise ConfigError("parsing.header_row must be zero or greater")

    source = SourceSettings(
        url=str(source_cfg.get("url") or DEFAULT_BASELINE_URL),
        path=_resolve_path(base, source_cfg.get("path")),
        timeout=timeout,
    )
    report = ReportSettings(
        title=str(report_cfg.get("title") or DEFAULT_TITLE),
        stylesheet=report_cfg.get("stylesheet"),
        html_path=_resolve_path(base, report_cfg.get("html_path")) or _resolve_path(base, "./reports/controls.html"),
        xlsx_path=_resolve_path(base, report_cfg.get("xlsx_path")),
        summary_path=_resolve_path(base, report_cfg.get("summary_path")),
    )

    config = AppConfig(
        path=path,
        source=source,
        sheet_names=_parse_sheet_names(_section(raw, "sheets")),
        header_row=header_row,
        report=report,
    )
    return _apply_env_overrides(config)
