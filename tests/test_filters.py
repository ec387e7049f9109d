import pytest

from app.models.Product import AgeBracket, BudgetTier, Gender, SkinType
from app.models.Selection import SelectionProfile
from app.repositories.CatalogRepository import FilterSpec
from app.routine.Compatibility import (
    DEFAULT_AGE_BRACKETS,
    affordable_budgets,
    compatible_age_brackets,
    is_cheaper,
    parse_age,
)
from app.routine.Filters import build_filter


# =============================================================================
# Budget / age rules
# =============================================================================

def test_affordable_budgets_is_at_or_below():
    assert affordable_budgets(BudgetTier.BUDGET_FRIENDLY) == {BudgetTier.BUDGET_FRIENDLY}
    assert affordable_budgets(BudgetTier.MID_RANGE) == {BudgetTier.BUDGET_FRIENDLY, BudgetTier.MID_RANGE}
    assert affordable_budgets(BudgetTier.PREMIUM) == set(BudgetTier)


def test_is_cheaper_is_strict():
    assert is_cheaper(BudgetTier.BUDGET_FRIENDLY, BudgetTier.MID_RANGE)
    assert not is_cheaper(BudgetTier.MID_RANGE, BudgetTier.MID_RANGE)
    assert not is_cheaper(BudgetTier.PREMIUM, BudgetTier.MID_RANGE)
    assert not is_cheaper(None, BudgetTier.PREMIUM)
    assert not is_cheaper(BudgetTier.BUDGET_FRIENDLY, None)


@pytest.mark.parametrize("age,expected", [
    ("25", 25),
    (" 48 ", 48),
    ("25 anos", 25),
    ("18-25", 18),
    ("abc", None),
    ("", None),
    (None, None),
])
def test_parse_age(age, expected):
    assert parse_age(age) == expected


@pytest.mark.parametrize("age,expected", [
    ("13", {AgeBracket.TEEN, AgeBracket.YOUNG, AgeBracket.ALL}),
    ("19", {AgeBracket.TEEN, AgeBracket.YOUNG, AgeBracket.ALL}),
    ("20", {AgeBracket.YOUNG, AgeBracket.ALL}),
    ("29", {AgeBracket.YOUNG, AgeBracket.ALL}),
    ("30", {AgeBracket.MATURE, AgeBracket.ALL}),
    ("49", {AgeBracket.MATURE, AgeBracket.ALL}),
    ("50", {AgeBracket.SENIOR, AgeBracket.MATURE, AgeBracket.ALL}),
    ("95", {AgeBracket.SENIOR, AgeBracket.MATURE, AgeBracket.ALL}),
])
def test_compatible_age_brackets(age, expected):
    assert compatible_age_brackets(age) == expected


@pytest.mark.parametrize("age", ["8", "twenty", None])
def test_age_outside_brackets_uses_middle_brackets(age):
    assert compatible_age_brackets(age) == DEFAULT_AGE_BRACKETS
    assert DEFAULT_AGE_BRACKETS == {AgeBracket.ALL, AgeBracket.YOUNG, AgeBracket.MATURE}


# =============================================================================
# build_filter
# =============================================================================

def test_empty_profile_builds_unconstrained_filter():
    assert build_filter(SelectionProfile()) == FilterSpec()


def test_full_profile_filter():
    profile = SelectionProfile(skin_type="Oily", budget="midRange", gender="female", age="24")

    filter_spec = build_filter(profile)

    assert filter_spec.skin_type_in == {SkinType.OILY}
    assert filter_spec.budget_in == {BudgetTier.BUDGET_FRIENDLY, BudgetTier.MID_RANGE}
    assert filter_spec.gender_in == {Gender.FEMALE, Gender.UNISEX}
    assert filter_spec.age_bracket_in == {AgeBracket.YOUNG, AgeBracket.ALL}
    assert filter_spec.product_type is None
    assert filter_spec.exclude_types == frozenset()


def test_invalid_values_are_ignored():
    profile = SelectionProfile(skin_type="scaly", budget="priceless", gender="robot")

    assert build_filter(profile) == FilterSpec()


def test_unparseable_age_widens_to_default_brackets():
    filter_spec = build_filter(SelectionProfile(age="old enough"))

    assert filter_spec.age_bracket_in == DEFAULT_AGE_BRACKETS


@pytest.mark.parametrize("budget,expected", [
    ("budget-friendly", {BudgetTier.BUDGET_FRIENDLY}),
    ("low", {BudgetTier.BUDGET_FRIENDLY}),
    ("Mid Range", {BudgetTier.BUDGET_FRIENDLY, BudgetTier.MID_RANGE}),
    ("Premium", set(BudgetTier)),
    ("high", set(BudgetTier)),
])
def test_budget_aliases(budget, expected):
    assert build_filter(SelectionProfile(budget=budget)).budget_in == expected


def test_unisex_profile_matches_only_unisex():
    assert build_filter(SelectionProfile(gender="unisex")).gender_in == {Gender.UNISEX}
