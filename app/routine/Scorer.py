from typing import Iterable, List

from app.models.Product import BudgetTier, Gender, Product, SkinType, normalize_concern
from app.models.Selection import ScoredProduct, SelectionProfile
from app.routine.Compatibility import is_cheaper

SKIN_TYPE_POINTS = 10
CONCERN_POINTS = 5
EXACT_BUDGET_POINTS = 3
CHEAPER_BUDGET_POINTS = 1
GENDER_POINTS = 2


def score(product: Product, profile: SelectionProfile) -> int:
    """
    Pontua a relevância do produto para o perfil (regras aditivas):

    - +10 se o tipo de pele do perfil estiver entre os do produto
    - +5 por preocupação do perfil atendida pelo produto
    - +3 se a faixa de preço for exatamente a do perfil, +1 se for mais barata
    - +2 se o gênero do produto for o do perfil ou unissex
    """
    total = 0

    skin_type = SkinType.parse(profile.skin_type)
    if skin_type is not None and skin_type in product.skin_types:
        total += SKIN_TYPE_POINTS

    concerns = {normalize_concern(concern) for concern in profile.skin_concerns or ()}
    total += CONCERN_POINTS * len(concerns & product.skin_concerns)

    budget = BudgetTier.parse(profile.budget)
    if budget is not None and product.budget == budget:
        total += EXACT_BUDGET_POINTS
    elif is_cheaper(product.budget, budget):
        total += CHEAPER_BUDGET_POINTS

    gender = Gender.parse(profile.gender)
    if gender is not None and product.gender in (gender, Gender.UNISEX):
        total += GENDER_POINTS

    return total


def rank(products: Iterable[Product], profile: SelectionProfile) -> List[ScoredProduct]:
    """Pontua e ordena por score decrescente; empates mantêm a ordem de entrada."""
    scored = [ScoredProduct(product=product, score=score(product, profile)) for product in products]
    return sorted(scored, key=lambda item: item.score, reverse=True)
