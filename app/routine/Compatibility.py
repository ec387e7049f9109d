import re
from typing import FrozenSet, Optional, Tuple

from app.models.Product import AgeBracket, BudgetTier

# Ordem crescente de preço
BUDGET_ORDER: Tuple[BudgetTier, ...] = (
    BudgetTier.BUDGET_FRIENDLY,
    BudgetTier.MID_RANGE,
    BudgetTier.PREMIUM,
)

# (idade mínima, idade máxima, faixas compatíveis); faixas vizinhas se sobrepõem
AGE_BRACKET_RANGES: Tuple[Tuple[int, Optional[int], FrozenSet[AgeBracket]], ...] = (
    (13, 19, frozenset({AgeBracket.TEEN, AgeBracket.YOUNG, AgeBracket.ALL})),
    (20, 29, frozenset({AgeBracket.YOUNG, AgeBracket.ALL})),
    (30, 49, frozenset({AgeBracket.MATURE, AgeBracket.ALL})),
    (50, None, frozenset({AgeBracket.SENIOR, AgeBracket.MATURE, AgeBracket.ALL})),
)

DEFAULT_AGE_BRACKETS: FrozenSet[AgeBracket] = frozenset(
    {AgeBracket.ALL, AgeBracket.YOUNG, AgeBracket.MATURE}
)


def affordable_budgets(budget: BudgetTier) -> FrozenSet[BudgetTier]:
    """Faixas de preço iguais ou abaixo da faixa do usuário."""
    return frozenset(BUDGET_ORDER[:BUDGET_ORDER.index(budget) + 1])


def is_cheaper(product_budget: Optional[BudgetTier], user_budget: Optional[BudgetTier]) -> bool:
    """True se o produto estiver em uma faixa estritamente abaixo da do usuário."""
    if product_budget is None or user_budget is None:
        return False
    return BUDGET_ORDER.index(product_budget) < BUDGET_ORDER.index(user_budget)


def parse_age(age: Optional[str]) -> Optional[int]:
    """Extrai a idade em anos: '25', '25 anos' e '25-30' resultam em 25."""
    if age is None:
        return None
    match = re.match(r'\s*(\d+)', str(age))
    return int(match.group(1)) if match else None


def compatible_age_brackets(age: Optional[str]) -> FrozenSet[AgeBracket]:
    """
    Faixas etárias compatíveis com a idade informada.

    Idade inválida ou fora de todas as faixas usa as três faixas centrais.
    """
    years = parse_age(age)
    if years is None:
        return DEFAULT_AGE_BRACKETS

    for minimum, maximum, brackets in AGE_BRACKET_RANGES:
        if years >= minimum and (maximum is None or years <= maximum):
            return brackets

    return DEFAULT_AGE_BRACKETS
