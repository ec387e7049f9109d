from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import FrozenSet, List, Optional

from app.models.Product import AgeBracket, BudgetTier, Gender, Product, SkinType


class CatalogRepositoryError(Exception):
    """Falha de infraestrutura ao consultar o catálogo de produtos."""
    pass


@dataclass(frozen=True)
class FilterSpec:
    """
    Filtro de consulta ao catálogo.

    Campos None não restringem a busca. Os campos *_in exigem interseção
    (coleções do produto) ou pertinência (valores escalares do produto).
    """
    product_type: Optional[str] = None
    skin_type_in: Optional[FrozenSet[SkinType]] = None
    concern_in: Optional[FrozenSet[str]] = None
    budget_in: Optional[FrozenSet[BudgetTier]] = None
    gender_in: Optional[FrozenSet[Gender]] = None
    age_bracket_in: Optional[FrozenSet[AgeBracket]] = None
    exclude_types: FrozenSet[str] = field(default_factory=frozenset)

    def narrow(self, **changes) -> "FilterSpec":
        return replace(self, **changes)

    def matches(self, product: Product) -> bool:
        if self.product_type is not None and product.type != self.product_type:
            return False
        if product.type in self.exclude_types:
            return False
        if self.skin_type_in is not None and not (product.skin_types & self.skin_type_in):
            return False
        if self.concern_in is not None and not (product.skin_concerns & self.concern_in):
            return False
        if self.budget_in is not None and product.budget not in self.budget_in:
            return False
        if self.gender_in is not None and product.gender not in self.gender_in:
            return False
        if self.age_bracket_in is not None and not (product.age & self.age_bracket_in):
            return False
        return True


class CatalogRepository(ABC):
    """
    Catálogo consultável de produtos.

    As consultas sempre retornam os produtos mais recentes primeiro
    (created_at decrescente); empates mantêm a ordem do catálogo.
    Erros de acesso ao backend devem ser lançados como CatalogRepositoryError.
    """

    @abstractmethod
    def query_many(self, filter_spec: FilterSpec, limit: int) -> List[Product]:
        ...

    def query_one(self, filter_spec: FilterSpec) -> Optional[Product]:
        products = self.query_many(filter_spec, limit=1)
        return products[0] if products else None
