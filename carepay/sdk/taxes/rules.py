"""Tax rules loading and year resolution.

Rules live in tax_rules/YYYY.yaml (see config.get_tax_rules_dir). A paycheck
uses the rules for its pay-period-end year, falling back to:

1. the most recent year at or before the requested year
2. the most recent year available at all

If no rules exist, MissingConfigurationError is raised; zero rates are never
substituted.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml
from pydantic import ValidationError

from ..config import get_tax_rules_dir
from ..errors import MissingConfigurationError
from .schemas import TaxRateConfiguration, TaxRules

logger = logging.getLogger(__name__)


def get_available_years(rules_dir: Optional[Path] = None) -> List[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = rules_dir or get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def select_year(available_years: Iterable[int], year: int) -> int:
    """Pick the rules year to use for a requested year.

    Raises:
        MissingConfigurationError: If no years are available
    """
    years = sorted(set(available_years), reverse=True)
    if not years:
        raise MissingConfigurationError("No tax configuration found", {"requested_year": year})

    if year in years:
        return year

    candidates = [y for y in years if y <= year]
    chosen = candidates[0] if candidates else years[0]
    logger.warning(f"No tax rules for {year}; using {chosen}")
    return chosen


def resolve_tax_rules(available: Dict[int, TaxRules], year: int) -> TaxRules:
    """Resolve rules for a year from an in-memory set of rules keyed by year."""
    return available[select_year(available.keys(), year)]


@lru_cache(maxsize=32)
def _load_rules_file(path: Path) -> TaxRules:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise MissingConfigurationError(f"Unreadable tax rules file {path}: {e}", {"path": str(path)}) from e
    try:
        return TaxRules.model_validate(data)
    except ValidationError as e:
        raise MissingConfigurationError(f"Invalid tax rules file {path}: {e}", {"path": str(path)}) from e


def load_tax_rules(year: int, rules_dir: Optional[Path] = None) -> TaxRules:
    """Load tax rules effective for a year, with fallback to other years.

    Args:
        year: Tax year (the paycheck's pay-period-end year)
        rules_dir: Directory of YYYY.yaml files (default: config.get_tax_rules_dir())

    Returns:
        TaxRules (rates + federal withholding tables)

    Raises:
        MissingConfigurationError: If no rules exist or the file is invalid
    """
    rules_dir = rules_dir or get_tax_rules_dir()
    chosen = select_year(get_available_years(rules_dir), int(year))
    rules = _load_rules_file(rules_dir / f"{chosen}.yaml")
    if rules.year != chosen:
        raise MissingConfigurationError(
            f"Tax rules file {chosen}.yaml declares year {rules.year}",
            {"path": str(rules_dir / f"{chosen}.yaml")},
        )
    return rules


def get_tax_configuration(year: int, rules_dir: Optional[Path] = None) -> TaxRateConfiguration:
    """Rates and wage bases effective for a year."""
    return load_tax_rules(year, rules_dir).rates


def clear_cache() -> None:
    """Forget loaded rules files (after editing YAML in place)."""
    _load_rules_file.cache_clear()
