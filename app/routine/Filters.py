from app.models.Product import BudgetTier, Gender, SkinType
from app.models.Selection import SelectionProfile
from app.repositories.CatalogRepository import FilterSpec
from app.routine.Compatibility import affordable_budgets, compatible_age_brackets


def build_filter(profile: SelectionProfile) -> FilterSpec:
    """
    Monta o filtro base a partir do perfil.

    Cada critério ausente ou inválido é omitido: o filtro fica mais amplo,
    nunca vazio.
    """
    filter_spec = FilterSpec()

    skin_type = SkinType.parse(profile.skin_type)
    if skin_type is not None:
        filter_spec = filter_spec.narrow(skin_type_in=frozenset({skin_type}))

    budget = BudgetTier.parse(profile.budget)
    if budget is not None:
        filter_spec = filter_spec.narrow(budget_in=affordable_budgets(budget))

    gender = Gender.parse(profile.gender)
    if gender is not None:
        filter_spec = filter_spec.narrow(gender_in=frozenset({gender, Gender.UNISEX}))

    if profile.age is not None:
        filter_spec = filter_spec.narrow(age_bracket_in=compatible_age_brackets(profile.age))

    return filter_spec
