"""Reference table loading.

Tables are read from a tax-rules directory:
- {year}.yaml: federal brackets, Social Security, Medicare, 401(k)/HSA limits
- states.yaml: flat state income tax rates
- cost_of_living.yaml: per-state cost-of-living index

Each file is parsed and validated once per (name, directory) and the
validated model is cached for the life of the process.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from ..config import get_tax_rules_dir, get_tax_year
from ..errors import ConfigurationError
from .schemas import CostOfLivingTable, StateTaxTable, TaxRules

logger = logging.getLogger(__name__)

STATES_FILENAME = "states.yaml"
COST_OF_LIVING_FILENAME = "cost_of_living.yaml"

PathLike = Union[str, Path]
ModelT = TypeVar("ModelT", bound=BaseModel)


def _resolve_dir(rules_dir: Optional[PathLike]) -> Path:
    return Path(rules_dir) if rules_dir else get_tax_rules_dir()


def available_tax_years(rules_dir: Optional[PathLike] = None) -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    directory = _resolve_dir(rules_dir)
    years = [int(p.stem) for p in directory.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def _load_model(path: Path, model: Type[ModelT]) -> ModelT:
    if not path.exists():
        raise ConfigurationError(f"Reference table not found: {path}")

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in reference table {path.name}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Reference table is empty or not a mapping: {path}")

    try:
        parsed = model.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid reference table {path.name}:\n{e}") from e

    logger.debug(f"loaded {model.__name__} from {path}")
    return parsed


def load_tax_rules(year: Optional[Union[str, int]] = None,
                   rules_dir: Optional[PathLike] = None) -> TaxRules:
    """Load federal and payroll tax rules for a year from {rules_dir}/YYYY.yaml.

    Args:
        year: Tax year (defaults to the configured tax year)
        rules_dir: Directory holding the tables (defaults to configured/bundled)

    Raises:
        ConfigurationError: If the year has no table or the table is invalid
    """
    year = str(year) if year is not None else get_tax_year()
    if not year.isdigit():
        raise ConfigurationError(f"Invalid tax year '{year}'. Must be digits, e.g. 2024.")

    directory = _resolve_dir(rules_dir)
    config_file = (directory / f"{year}.yaml").resolve()
    if not config_file.exists():
        available = ", ".join(str(y) for y in available_tax_years(directory)) or "none"
        raise ConfigurationError(
            f"No tax rules for year {year} in {directory} (available: {available})"
        )

    rules = _load_model(config_file, TaxRules)
    if str(rules.year) != year:
        raise ConfigurationError(f"{config_file.name} declares year {rules.year}, expected {year}")
    return rules


def load_state_tax_table(rules_dir: Optional[PathLike] = None) -> StateTaxTable:
    """Load flat state income tax rates from states.yaml."""
    path = (_resolve_dir(rules_dir) / STATES_FILENAME).resolve()
    return _load_model(path, StateTaxTable)


def load_cost_of_living_table(rules_dir: Optional[PathLike] = None) -> CostOfLivingTable:
    """Load the per-state cost-of-living index from cost_of_living.yaml."""
    path = (_resolve_dir(rules_dir) / COST_OF_LIVING_FILENAME).resolve()
    return _load_model(path, CostOfLivingTable)


def clear_cache() -> None:
    """Drop cached tables so edited files are re-read."""
    _load_model.cache_clear()
