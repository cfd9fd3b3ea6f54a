"""Pydantic schemas for reference table validation.

These schemas validate the tax-rules/*.yaml files and provide typed access
to federal brackets, payroll tax parameters, state flat rates and
cost-of-living indices.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single progressive bracket covering [min, max)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound of the bracket")
    max: Optional[float] = Field(default=None, description="Upper bound (None for the top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")


class SocialSecurityRules(BaseModel):
    """Social Security tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    wage_cap: float = Field(..., gt=0, description="SS wage base (max taxable)")
    tax_rate: float = Field(..., ge=0, le=1, description="SS tax rate (employee portion)")


class MedicareRules(BaseModel):
    """Medicare tax rules, including the Additional Medicare Tax."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_rate: float = Field(..., ge=0, le=1)
    additional_rate: float = Field(..., ge=0, le=1)
    additional_threshold: Dict[str, float] = Field(
        ..., description="Income above which additional_rate applies, per filing status"
    )


class Retirement401kRules(BaseModel):
    """401(k) contribution limits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_elective_limit: float = Field(..., ge=0, description="Pre-tax + Roth employee limit")


class HsaRules(BaseModel):
    """Health savings account contribution limits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    self_only_limit: float = Field(..., ge=0)


class TaxRules(BaseModel):
    """Federal and payroll tax rules for one tax year."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    year: int
    federal: Dict[str, List[TaxBracket]]
    social_security: SocialSecurityRules
    medicare: MedicareRules
    retirement_401k: Retirement401kRules = Field(..., alias="401k")
    hsa: HsaRules

    @model_validator(mode="after")
    def check_brackets(self) -> "TaxRules":
        """Brackets must be contiguous and cover [0, inf) for every filing status."""
        for status, brackets in self.federal.items():
            if not brackets:
                raise ValueError(f"{status}: no brackets defined")
            if brackets[0].min != 0:
                raise ValueError(f"{status}: first bracket must start at 0, got {brackets[0].min}")
            for current, following in zip(brackets, brackets[1:]):
                if current.max is None:
                    raise ValueError(f"{status}: only the last bracket may be unbounded")
                if current.max <= current.min:
                    raise ValueError(
                        f"{status}: bracket starting at {current.min} must end above it "
                        f"(got max {current.max})"
                    )
                if current.max != following.min:
                    raise ValueError(
                        f"{status}: bracket ending at {current.max} is not followed by "
                        f"one starting there (got {following.min})"
                    )
            if brackets[-1].max is not None:
                raise ValueError(f"{status}: last bracket must be unbounded")
        return self


class StateTaxProfile(BaseModel):
    """Flat-rate income tax profile for one state."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    rate: float = Field(default=0.0, ge=0, le=1, description="Average flat rate")
    has_no_tax: bool = Field(default=False, description="State levies no wage income tax")

    @property
    def effective_rate(self) -> float:
        """Rate actually applied; zero for no-tax states whatever `rate` says."""
        return 0.0 if self.has_no_tax else self.rate


class StateTaxTable(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    states: Dict[str, StateTaxProfile]


class CostOfLivingRegion(BaseModel):
    """Cost-of-living index for one state (national average = base_index)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    index: float


class CostOfLivingTable(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_index: float = Field(default=100.0, gt=0)
    states: Dict[str, CostOfLivingRegion]
