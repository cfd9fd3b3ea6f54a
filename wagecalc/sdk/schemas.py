"""Pydantic schemas for Wage Calc results.

All result schemas use extra='forbid' and are frozen: a result is built
once per call and never mutated afterwards.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Amounts are floats; allow for representation error when checking sums.
_COHERENCE_TOLERANCE = 0.005


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED_JOINTLY = "married_jointly"
    MARRIED_SEPARATELY = "married_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"


# =============================================================================
# Tax calculation
# =============================================================================


class TaxCalculationResult(BaseModel):
    """Annual tax breakdown for a gross income. Internally coherent."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: float = Field(..., ge=0, description="Gross annual wages")
    federal_tax: float = Field(..., ge=0, description="Federal income tax from brackets")
    state_tax: float = Field(..., ge=0, description="State income tax (flat rate)")
    social_security: float = Field(..., ge=0, description="Social Security (capped)")
    medicare: float = Field(..., ge=0, description="Medicare including additional tax")
    total_tax: float = Field(..., ge=0)
    net_income: float
    effective_tax_rate_percent: float = Field(
        ..., ge=0, description="total_tax / gross_income * 100; 0 when gross is 0"
    )

    @model_validator(mode="after")
    def check_coherence(self) -> "TaxCalculationResult":
        """Validate that the totals agree with their components."""
        component_sum = self.federal_tax + self.state_tax + self.social_security + self.medicare
        if abs(self.total_tax - component_sum) > _COHERENCE_TOLERANCE:
            raise ValueError(
                f"total_tax ({self.total_tax:.2f}) != sum of components ({component_sum:.2f})"
            )
        if abs(self.gross_income - self.total_tax - self.net_income) > _COHERENCE_TOLERANCE:
            raise ValueError(
                f"net_income ({self.net_income:.2f}) != gross_income - total_tax "
                f"({self.gross_income - self.total_tax:.2f})"
            )
        return self


class TakeHomePay(BaseModel):
    """Net income split across common pay periods."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    annual: float
    monthly: float
    biweekly: float
    weekly: float


class BracketSlice(BaseModel):
    """Portion of income taxed within one federal bracket."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float
    max: Optional[float]
    rate: float
    taxable_amount: float
    tax: float


# =============================================================================
# Cost of living
# =============================================================================


class CostOfLivingComparison(BaseModel):
    """Salary needed in a target state to match purchasing power at home.

    purchasing_power_change_percent is positive when the current state is
    the more expensive one, i.e. the target stretches the same salary further.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    current_region: str = Field(..., description="Current state name")
    target_region: str = Field(..., description="Target state name")
    current_salary: float = Field(..., ge=0)
    equivalent_salary: float = Field(..., ge=0)
    purchasing_power_change_percent: float
    cost_difference: float = Field(..., description="equivalent_salary - current_salary")
    current_index: float = Field(..., gt=0)
    target_index: float = Field(..., gt=0)


class RegionSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str
    name: str
    index: float


# =============================================================================
# Optimization report
# =============================================================================

Category = Literal["tax_strategy", "location", "income", "deductions", "timing"]
Effort = Literal["low", "medium", "high"]
Priority = Literal["high", "medium", "low"]


class OptimizationRecommendation(BaseModel):
    """One heuristic suggestion with an estimated annual savings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    category: Category
    title: str
    description: str
    potential_savings: float = Field(..., ge=0)
    effort: Effort
    priority: Priority
    action_items: List[str] = Field(default_factory=list)


class OptimizationReport(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    total_potential_savings: float = Field(
        ..., ge=0, description="Sum over every generated recommendation, before truncation"
    )
    recommendations: List[OptimizationRecommendation] = Field(..., max_length=8)
    summary: str
    generated_at: str = Field(..., description="ISO-8601 timestamp")
