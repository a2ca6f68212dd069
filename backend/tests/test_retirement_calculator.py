from __future__ import annotations

from math import isclose

import pytest

from backend.core.retirement import (
    InvalidInput,
    RetirementInputs,
    calculate_retirement_impact,
    parse_retirement_inputs,
    round_currency,
)


def make_inputs(**overrides) -> RetirementInputs:
    params = {
        "currentContribution": 250,
        "contributionType": "fixed",
        "currentAge": 30,
        "salary": 80000,
        "retirementAge": 65,
        "currentSavings": 0,
    }
    params.update(overrides)
    return parse_retirement_inputs(params)


def test_fixed_contribution_default_settings():
    result = calculate_retirement_impact(make_inputs())

    assert result.years_to_retirement == 35
    assert result.annual_contribution == 3000
    assert result.future_value_of_current == 0
    expected = 3000 * ((1.05**35 - 1) / 0.05)
    assert isclose(result.future_value_of_contributions, expected)
    assert round_currency(result.future_value_of_contributions) == 270961
    assert round_currency(result.total_future_value) == 270961
    assert round_currency(result.total_contributions) == 105000
    assert round_currency(result.investment_growth) == 165961
    assert result.annual_return_rate == 0.05


def test_percentage_contribution_with_existing_savings():
    result = calculate_retirement_impact(
        make_inputs(
            currentContribution=5,
            contributionType="percentage",
            currentAge=40,
            salary=100000,
            currentSavings=10000,
        )
    )

    assert result.years_to_retirement == 25
    assert result.annual_contribution == 5000
    assert round_currency(result.future_value_of_current) == 33864
    assert round_currency(result.future_value_of_contributions) == 238635
    assert round_currency(result.total_future_value) == 272499
    assert round_currency(result.investment_growth) == 137499


def test_total_is_sum_of_components():
    result = calculate_retirement_impact(
        make_inputs(contributionType="percentage", currentContribution=7.5, currentSavings=12345.67)
    )
    assert result.total_future_value == (
        result.future_value_of_current + result.future_value_of_contributions
    )


def test_zero_horizon_keeps_savings_and_adds_nothing():
    result = calculate_retirement_impact(
        make_inputs(currentAge=65, retirementAge=65, currentSavings=5000)
    )

    assert result.years_to_retirement == 0
    assert result.future_value_of_contributions == 0
    assert result.future_value_of_current == 5000
    assert result.total_contributions == 0
    assert result.investment_growth == 0


def test_negative_horizon_computes_without_error():
    result = calculate_retirement_impact(
        make_inputs(currentContribution=100, currentAge=70, retirementAge=65, currentSavings=1000)
    )

    assert result.years_to_retirement == -5
    assert isclose(result.future_value_of_current, 1000 * 1.05**-5)
    assert round_currency(result.future_value_of_current) == 784
    assert round_currency(result.future_value_of_contributions) == -5195
    assert result.total_contributions == -6000
    assert round_currency(result.investment_growth) == 588


def test_percentage_mode_scales_with_salary():
    base = calculate_retirement_impact(make_inputs(contributionType="percentage", currentContribution=6))
    doubled = calculate_retirement_impact(
        make_inputs(contributionType="percentage", currentContribution=6, salary=160000)
    )
    assert isclose(doubled.annual_contribution, 2 * base.annual_contribution)


@pytest.mark.parametrize("value", [1, 99.5, 250, 1234.56])
def test_fixed_mode_annualizes_monthly_value(value):
    result = calculate_retirement_impact(make_inputs(currentContribution=value))
    assert result.annual_contribution == value * 12


def test_custom_return_rate_is_reported():
    result = calculate_retirement_impact(make_inputs(), annual_return_rate=0.07)
    assert result.annual_return_rate == 0.07
    assert isclose(result.future_value_of_contributions, 3000 * ((1.07**35 - 1) / 0.07))


def test_zero_return_rate_is_rejected():
    with pytest.raises(InvalidInput, match="non-zero"):
        calculate_retirement_impact(make_inputs(), annual_return_rate=0.0)


@pytest.mark.parametrize(
    "amount, expected",
    [(2.5, 3), (-2.5, -2), (0.5, 1), (1.4, 1), (-1.6, -2), (270960.92, 270961)],
)
def test_round_currency_rounds_halves_up(amount, expected):
    assert round_currency(amount) == expected


def test_overflowing_projection_is_rejected():
    inputs = make_inputs(contributionType="percentage", currentContribution=100, salary=1e308)

    with pytest.raises(InvalidInput, match="out of range"):
        calculate_retirement_impact(inputs)


def test_overflowing_growth_factor_is_rejected():
    inputs = make_inputs(currentAge=150, retirementAge=0)

    with pytest.raises(InvalidInput, match="out of range"):
        calculate_retirement_impact(inputs, annual_return_rate=-0.999999)
