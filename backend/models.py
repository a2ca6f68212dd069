from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContributionType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


MODE_DEFAULT_VALUES = {
    ContributionType.PERCENTAGE: 5.0,
    ContributionType.FIXED: 250.0,
}


def default_contribution_value(contribution_type: ContributionType) -> float:
    """Suggested starting value when the user switches contribution mode."""
    return MODE_DEFAULT_VALUES[ContributionType(contribution_type)]


class ContributionSettings(BaseModel):
    """A full settings snapshot. Each save supersedes the previous one."""

    model_config = ConfigDict(extra="ignore", use_enum_values=True, validate_default=True)

    contribution_type: ContributionType = ContributionType.FIXED
    contribution_value: float = Field(250.0, gt=0)
    age: int = Field(30, ge=0, le=150)
    salary: float = Field(80000.0, ge=0)
    retirement_age: int = Field(65, ge=0, le=150)

    @model_validator(mode="after")
    def check_percentage_range(self) -> "ContributionSettings":
        if self.contribution_type == ContributionType.PERCENTAGE and self.contribution_value > 100:
            raise ValueError("percentage contribution_value must be at most 100")
        return self


class ContributionHistoryEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    date: str
    amount: float
    type: str = "contribution"
