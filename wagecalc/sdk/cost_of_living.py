"""Cost-of-living comparison between states.

Salaries are rescaled linearly by the ratio of the two states' indices.
"""

import logging
from typing import Optional

from .errors import InvalidInputError, UnknownRegionError
from .schemas import CostOfLivingComparison, RegionSummary
from .taxes.rules import load_cost_of_living_table
from .taxes.schemas import CostOfLivingRegion, CostOfLivingTable

logger = logging.getLogger(__name__)


def _get_region(state_code: str, table: CostOfLivingTable) -> CostOfLivingRegion:
    region = table.states.get(state_code.strip().upper())
    if region is None:
        raise UnknownRegionError(state_code, table="cost-of-living")
    if region.index <= 0:
        raise InvalidInputError(
            f"Cost-of-living index for {state_code} must be positive, got {region.index}"
        )
    return region


def get_cost_of_living_index(state_code: str, table: Optional[CostOfLivingTable] = None) -> float:
    """Index for a state (national average = table.base_index).

    Raises:
        UnknownRegionError: If the state is not in the table
    """
    table = table or load_cost_of_living_table()
    return _get_region(state_code, table).index


def compare_cost_of_living(
    current_state: str,
    target_state: str,
    current_salary: float,
    table: Optional[CostOfLivingTable] = None,
) -> CostOfLivingComparison:
    """Compare purchasing power of a salary between two states.

    equivalent_salary is what the target state would need to pay to match
    current_salary's purchasing power at home. purchasing_power_change_percent
    is (current_index - target_index) / target_index * 100: positive when
    moving lowers costs.

    Raises:
        UnknownRegionError: If either state is not in the table
        InvalidInputError: If the salary is negative or an index is not positive
    """
    if current_salary < 0:
        raise InvalidInputError(f"current_salary must be non-negative, got {current_salary}")

    table = table or load_cost_of_living_table()
    current = _get_region(current_state, table)
    target = _get_region(target_state, table)

    equivalent_salary = (current_salary * target.index) / current.index
    purchasing_power_change = ((current.index - target.index) / target.index) * 100
    cost_difference = equivalent_salary - current_salary

    logger.debug(
        f"cost of living {current_state}->{target_state}: {current_salary:.2f} -> "
        f"{equivalent_salary:.2f} ({purchasing_power_change:+.1f}%)"
    )

    return CostOfLivingComparison(
        current_region=current.name,
        target_region=target.name,
        current_salary=current_salary,
        equivalent_salary=equivalent_salary,
        purchasing_power_change_percent=purchasing_power_change,
        cost_difference=cost_difference,
        current_index=current.index,
        target_index=target.index,
    )


def list_regions(table: Optional[CostOfLivingTable] = None) -> list[RegionSummary]:
    """All states in table order."""
    table = table or load_cost_of_living_table()
    return [
        RegionSummary(code=code, name=region.name, index=region.index)
        for code, region in table.states.items()
    ]


def most_expensive_regions(n: int = 10, table: Optional[CostOfLivingTable] = None) -> list[RegionSummary]:
    """Top n states by cost-of-living index, highest first."""
    return sorted(list_regions(table), key=lambda r: r.index, reverse=True)[:n]


def least_expensive_regions(n: int = 10, table: Optional[CostOfLivingTable] = None) -> list[RegionSummary]:
    """Top n states by cost-of-living index, lowest first."""
    return sorted(list_regions(table), key=lambda r: r.index)[:n]
