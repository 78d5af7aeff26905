import math

import pytest

from cashcheck.models.constants import Currency, JurisdictionCode
from cashcheck.models.evaluation import EvaluationInput
from cashcheck.models.jurisdiction import JURISDICTIONS
from cashcheck.services.declaration import (
    STATUS_DECLARE,
    STATUS_NO_DECLARATION,
    STATUS_UNDETERMINED,
    apply_rate_texts,
    declaration_status,
    evaluate,
    evaluate_input,
    parse_amount,
    parse_rate,
)

ALL_RATES = {Currency.SGD: 12000, Currency.AED: 4200, Currency.EUR: 17000}


@pytest.mark.parametrize(
    "text,expected",
    [
        ("25.000.000", 25000000),
        ("Rp 1,200,000,000", 1200000000),
        ("150000000", 150000000),
        ("  42 ", 42),
        ("", None),
        ("abc", None),
        ("0", None),
        ("000", None),
        (None, None),
    ],
)
def test_parse_amount_strips_non_digits(text, expected):
    assert parse_amount(text) == expected


def test_parse_amount_ignores_non_ascii_digits():
    # Arabic-Indic digits are not treated as digits
    assert parse_amount("١٢٣") is None


@pytest.mark.parametrize(
    "text,expected",
    [
        ("12000", 12000.0),
        (" 4200.5 ", 4200.5),
        ("1e4", 10000.0),
        ("", None),
        ("abc", None),
        ("0", None),
        ("-5", None),
        ("nan", None),
        ("inf", None),
        ("12,000", None),
        (None, None),
    ],
)
def test_parse_rate(text, expected):
    assert parse_rate(text) == expected


@pytest.mark.parametrize("amount_text", ["", "   ", "abc", "Rp", "0", None])
def test_missing_amount_is_undetermined_everywhere(amount_text):
    results = evaluate(amount_text, ALL_RATES)
    assert set(results) == set(JurisdictionCode)
    assert all(r is None for r in results.values())


def test_missing_or_invalid_rate_is_undetermined_for_that_jurisdiction_only():
    table = {Currency.SGD: 12000, Currency.AED: 0, Currency.EUR: float("nan")}
    results = evaluate("25000000", table)
    assert results[JurisdictionCode.SG] is not None
    assert results[JurisdictionCode.AE] is None
    assert results[JurisdictionCode.EU] is None
    assert evaluate("25000000", {})[JurisdictionCode.SG] is None
    assert evaluate("25000000", {Currency.SGD: -12000})[JurisdictionCode.SG] is None


def test_singapore_scenario_below_threshold():
    result = evaluate("25.000.000", {Currency.SGD: 12000})[JurisdictionCode.SG]
    assert result.converted_amount == pytest.approx(2083.3333333)
    assert result.meets_or_exceeds_threshold is False
    assert result.equivalent_home_currency_threshold == 240_000_000


def test_uae_scenario_above_threshold():
    result = evaluate("1,200,000,000", {Currency.AED: 4200})[JurisdictionCode.AE]
    assert result.converted_amount == pytest.approx(285714.2857)
    assert result.meets_or_exceeds_threshold is True
    assert result.equivalent_home_currency_threshold == 252_000_000


def test_eu_scenario_below_threshold():
    result = evaluate("150,000,000", {Currency.EUR: 17000})[JurisdictionCode.EU]
    assert result.converted_amount == pytest.approx(8823.5294)
    assert result.meets_or_exceeds_threshold is False
    assert result.equivalent_home_currency_threshold == 170_000_000


def test_amount_equal_to_threshold_must_be_declared():
    result = evaluate("240000000", {Currency.SGD: 12000})[JurisdictionCode.SG]
    assert result.converted_amount == 20000
    assert result.meets_or_exceeds_threshold is True
    just_below = evaluate("239999999", {Currency.SGD: 12000})[JurisdictionCode.SG]
    assert just_below.meets_or_exceeds_threshold is False


@pytest.mark.parametrize("amount", [1, 999, 240_000_000, 7_654_321_987])
@pytest.mark.parametrize("rate", [0.5, 1, 4200.75, 12000, 17000.25])
def test_conversion_and_threshold_invariants(amount, rate):
    results = evaluate(str(amount), {c: rate for c in Currency})
    for code, jurisdiction in JURISDICTIONS.items():
        result = results[code]
        assert result.converted_amount == amount / rate
        assert result.meets_or_exceeds_threshold == (amount / rate >= jurisdiction.threshold_amount)
        assert result.equivalent_home_currency_threshold == math.floor(
            jurisdiction.threshold_amount * rate
        )
        assert result.equivalent_home_currency_threshold >= 0


def test_no_rounding_before_comparison():
    # 200000001 / 10000 = 20000.0001 -> declare, even though it displays as 20,000
    result = evaluate("200000001", {Currency.SGD: 10000})[JurisdictionCode.SG]
    assert result.meets_or_exceeds_threshold is True
    assert result.converted_amount == 20000.0001


def test_evaluate_accepts_a_subset_of_jurisdictions():
    results = evaluate("1000", ALL_RATES, [JURISDICTIONS[JurisdictionCode.EU]])
    assert list(results) == [JurisdictionCode.EU]


def test_apply_rate_texts_overrides_and_clears():
    table = {Currency.SGD: 12000.0, Currency.AED: 4200.0}
    merged = apply_rate_texts(table, {Currency.SGD: "12500", Currency.AED: "", Currency.EUR: "17000"})
    assert merged == {Currency.SGD: 12500.0, Currency.EUR: 17000.0}
    # input table untouched
    assert table == {Currency.SGD: 12000.0, Currency.AED: 4200.0}


def test_evaluate_input_uses_manual_rate_texts():
    data = EvaluationInput(
        amount_text="1.200.000.000",
        rate_texts={Currency.AED: "4200", Currency.SGD: "x"},
    )
    results = evaluate_input(data)
    assert results[JurisdictionCode.AE].meets_or_exceeds_threshold is True
    assert results[JurisdictionCode.SG] is None
    assert results[JurisdictionCode.EU] is None


def test_declaration_status_labels():
    results = evaluate("1,200,000,000", {Currency.AED: 4200, Currency.EUR: 170000})
    assert declaration_status(results[JurisdictionCode.AE]) == STATUS_DECLARE
    assert declaration_status(results[JurisdictionCode.EU]) == STATUS_NO_DECLARATION
    assert declaration_status(results[JurisdictionCode.SG]) == STATUS_UNDETERMINED


def test_jurisdictions_are_fixed_and_immutable():
    assert {j.currency for j in JURISDICTIONS.values()} == set(Currency)
    assert JURISDICTIONS[JurisdictionCode.SG].threshold_amount == 20000
    assert JURISDICTIONS[JurisdictionCode.AE].threshold_amount == 60000
    assert JURISDICTIONS[JurisdictionCode.EU].threshold_amount == 10000
    with pytest.raises(Exception):
        JURISDICTIONS[JurisdictionCode.SG].threshold_amount = 1


def test_very_long_amount_still_compares():
    result = evaluate("9" * 300, {Currency.SGD: 12000})[JurisdictionCode.SG]
    assert result.meets_or_exceeds_threshold is True
    assert math.isfinite(result.converted_amount)


def test_amount_beyond_float_range_is_infinite_and_declared():
    assert parse_amount("1" * 5000) == math.inf
    results = evaluate("1" * 5000, ALL_RATES)
    for result in results.values():
        assert result.converted_amount == math.inf
        assert result.meets_or_exceeds_threshold is True
        assert declaration_status(result) == STATUS_DECLARE


def test_rate_too_large_for_a_threshold_is_undetermined():
    results = evaluate("25000000", {Currency.SGD: 1e305, Currency.EUR: 17000})
    assert results[JurisdictionCode.SG] is None
    assert results[JurisdictionCode.EU] is not None
