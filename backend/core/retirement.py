"""Retirement projection: compound growth of current savings plus an annuity of contributions."""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from backend.models import ContributionType

ANNUAL_RETURN_RATE = 0.05
MONTHS_PER_YEAR = 12
MAX_AGE = 150

REQUIRED_PARAMETERS = (
    "currentContribution",
    "contributionType",
    "currentAge",
    "salary",
    "retirementAge",
)


class InvalidInput(ValueError):
    def __init__(self, errors: List[str], missing: Sequence[str] = ()):
        super().__init__("; ".join(errors))
        self.errors = errors
        self.missing = list(missing)


class RetirementInputs(BaseModel):
    """Typed calculator inputs, parsed from query-string style parameters."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        allow_inf_nan=False,
        frozen=True,
    )

    contribution_value: float = Field(alias="currentContribution", gt=0)
    contribution_type: ContributionType = Field(alias="contributionType")
    current_age: int = Field(alias="currentAge", ge=0, le=MAX_AGE)
    salary: float = Field(ge=0)
    retirement_age: int = Field(alias="retirementAge", ge=0, le=MAX_AGE)
    current_savings: float = Field(0.0, alias="currentSavings", ge=0)

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        # "?salary=" arrives as an empty string; treat it the same as absent
        if not isinstance(data, Mapping):
            return data
        return {
            key: value.strip() if isinstance(value, str) else value
            for key, value in data.items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }

    @model_validator(mode="after")
    def check_percentage_range(self) -> "RetirementInputs":
        if self.contribution_type == ContributionType.PERCENTAGE and self.contribution_value > 100:
            raise ValueError("percentage contribution must be at most 100")
        return self


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_age: int
    retirement_age: int
    years_to_retirement: int
    annual_contribution: float
    future_value_of_current: float
    future_value_of_contributions: float
    total_future_value: float
    total_contributions: float
    investment_growth: float
    annual_return_rate: float


def parse_retirement_inputs(params: Mapping[str, Any]) -> RetirementInputs:
    """Validate raw request parameters, raising InvalidInput on any problem."""
    try:
        return RetirementInputs.model_validate(dict(params))
    except ValidationError as exc:
        raise _invalid_input_from(exc) from exc


def _invalid_input_from(exc: ValidationError) -> InvalidInput:
    missing: List[str] = []
    errors: List[str] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            missing.append(field)
        elif field:
            errors.append(f"{field}: {error['msg']}")
        else:
            errors.append(error["msg"])

    if missing:
        errors.insert(0, "Missing required parameters: " + ", ".join(REQUIRED_PARAMETERS))
    return InvalidInput(errors, missing=missing)


def annual_contribution_for(
    contribution_type: ContributionType, contribution_value: float, salary: float
) -> float:
    """Annualize a contribution setting.

    Percentage mode takes that share of salary. Fixed mode treats the value as
    a monthly amount.
    """
    if contribution_type == ContributionType.PERCENTAGE:
        return (contribution_value / 100) * salary
    if contribution_type == ContributionType.FIXED:
        return contribution_value * MONTHS_PER_YEAR
    raise InvalidInput([f"contributionType: unsupported value {contribution_type!r}"])


def calculate_retirement_impact(
    inputs: RetirementInputs,
    annual_return_rate: float = ANNUAL_RETURN_RATE,
) -> ProjectionResult:
    """
    Project savings at retirement with a constant annual return.

      FV(current)       = savings * (1 + r)^n
      FV(contributions) = P * ((1 + r)^n - 1) / r

    n = retirementAge - currentAge and may be zero or negative; the formulas
    are evaluated as-is in that case.
    """
    if annual_return_rate == 0:
        # annuity formula divides by r
        raise InvalidInput(["annual return rate must be non-zero"])

    r = annual_return_rate
    years = inputs.retirement_age - inputs.current_age
    try:
        growth_factor = (1 + r) ** years
    except OverflowError as exc:
        raise InvalidInput(["projection out of range"]) from exc

    future_value_of_current = inputs.current_savings * growth_factor
    annual_contribution = annual_contribution_for(
        inputs.contribution_type, inputs.contribution_value, inputs.salary
    )
    future_value_of_contributions = annual_contribution * ((growth_factor - 1) / r)

    total_future_value = future_value_of_current + future_value_of_contributions
    total_contributions = annual_contribution * years
    investment_growth = total_future_value - (inputs.current_savings + total_contributions)
    if not all(
        math.isfinite(value)
        for value in (total_future_value, total_contributions, investment_growth)
    ):
        # huge salaries or savings overflow to inf, which has no whole-unit rounding
        raise InvalidInput(["projection out of range"])

    return ProjectionResult(
        current_age=inputs.current_age,
        retirement_age=inputs.retirement_age,
        years_to_retirement=years,
        annual_contribution=annual_contribution,
        future_value_of_current=future_value_of_current,
        future_value_of_contributions=future_value_of_contributions,
        total_future_value=total_future_value,
        total_contributions=total_contributions,
        investment_growth=investment_growth,
        annual_return_rate=r,
    )


def round_currency(amount: float) -> int:
    """Round to the nearest whole unit; halves round up (-2.5 -> -2)."""
    return math.floor(amount + 0.5)
