"""Wire contract for the retirement-impact endpoint."""

from pydantic import BaseModel

from backend.core.retirement import ProjectionResult, round_currency


class RetirementImpactResponse(BaseModel):
    """Projection as shown on the dashboard. Monetary fields are whole units."""

    currentAge: int
    retirementAge: int
    annualContribution: int
    estimatedSavings: int
    futureValueOfCurrent: int
    futureValueOfContributions: int
    totalContributions: int
    investmentGrowth: int
    yearsToRetirement: int
    annualReturnRate: float

    @classmethod
    def from_projection(cls, result: ProjectionResult) -> "RetirementImpactResponse":
        return cls(
            currentAge=result.current_age,
            retirementAge=result.retirement_age,
            annualContribution=round_currency(result.annual_contribution),
            estimatedSavings=round_currency(result.total_future_value),
            futureValueOfCurrent=round_currency(result.future_value_of_current),
            futureValueOfContributions=round_currency(result.future_value_of_contributions),
            totalContributions=round_currency(result.total_contributions),
            investmentGrowth=round_currency(result.investment_growth),
            yearsToRetirement=result.years_to_retirement,
            annualReturnRate=result.annual_return_rate,
        )
