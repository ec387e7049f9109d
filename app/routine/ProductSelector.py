import logging
from typing import Iterable, List, Sequence, Set

from app.models.Product import Product, normalize_concern
from app.models.Selection import SelectionProfile, SelectionResult
from app.repositories.CatalogRepository import CatalogRepository, FilterSpec
from app.routine.ConcernPriority import priority_types
from app.routine.Filters import build_filter
from app.routine.RoutineTiers import DEFAULT_COMPLEXITY, resolve_tier
from app.routine.Scorer import rank

logger = logging.getLogger(__name__)


def dedupe(products: Iterable[Product]) -> List[Product]:
    """Remove duplicados por (marca, nome), mantendo a primeira ocorrência."""
    seen = set()
    unique = []
    for product in products:
        if product.identity in seen:
            continue
        seen.add(product.identity)
        unique.append(product)
    return unique


class ProductSelector:
    """
    Monta a lista de produtos de uma rotina a partir do catálogo.

    Três buscas em sequência (obrigatórios, preocupações, complemento),
    seguidas de deduplicação, pontuação e corte no limite da rotina.
    Sem estado entre chamadas; erros do repositório são propagados.
    """

    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    def fetch_required(self, profile: SelectionProfile, required_types: Sequence[str]) -> List[Product]:
        """Um produto por tipo obrigatório; sem match completo, qualquer produto do tipo."""
        base_filter = build_filter(profile)
        products = []

        for product_type in required_types:
            product = self.repository.query_one(base_filter.narrow(product_type=product_type))
            if product is None:
                product = self.repository.query_one(FilterSpec(product_type=product_type))
                if product is not None:
                    logger.info(f"[SELECTOR] '{product_type}' preenchido sem os filtros do perfil")
            if product is None:
                logger.info(f"[SELECTOR] Nenhum produto do tipo obrigatório '{product_type}'")
                continue
            products.append(product)

        return products

    def fetch_concern_products(self, profile: SelectionProfile, remaining_slots: int) -> List[Product]:
        """
        Distribui tipos de produto distintos entre as preocupações do perfil.

        Percorre as preocupações na ordem informada e, para cada uma, os tipos
        prioritários; um tipo já usado nesta busca não é repetido.
        """
        if remaining_slots <= 0:
            return []

        base_filter = build_filter(profile)
        used_types: Set[str] = set()
        products: List[Product] = []

        for concern in profile.skin_concerns or ():
            concern_key = normalize_concern(concern)
            for product_type in priority_types(concern_key):
                if len(products) >= remaining_slots:
                    return products
                if product_type in used_types:
                    continue

                product = self.repository.query_one(
                    base_filter.narrow(product_type=product_type, concern_in=frozenset({concern_key}))
                )
                if product is not None:
                    products.append(product)
                    used_types.add(product_type)

        return products

    def fetch_filler(
            self,
            profile: SelectionProfile,
            remaining_slots: int,
            already_selected: Sequence[Product],
    ) -> List[Product]:
        """Completa a rotina com os produtos mais recentes de tipos ainda não usados."""
        if remaining_slots <= 0:
            return []

        filter_spec = build_filter(profile).narrow(
            exclude_types=frozenset(product.type for product in already_selected)
        )
        return self.repository.query_many(filter_spec, limit=remaining_slots)

    def select_routine(self, profile: SelectionProfile) -> SelectionResult:
        tier, used_fallback = resolve_tier(profile.routine_complexity)
        note = None
        if used_fallback:
            note = (
                f"Complexidade de rotina desconhecida '{profile.routine_complexity}'; "
                f"usando '{DEFAULT_COMPLEXITY}'"
            )
            logger.warning(f"[SELECTOR] {note}")

        required = self.fetch_required(profile, tier.required)
        concern = self.fetch_concern_products(profile, tier.max_products - len(required))
        filler = self.fetch_filler(
            profile,
            tier.max_products - len(required) - len(concern),
            required + concern,
        )

        merged = dedupe(required + concern + filler)
        ranked = rank(merged, profile)[:tier.max_products]

        logger.info(
            f"[SELECTOR] Rotina '{tier.name}': {len(ranked)} produtos "
            f"(obrigatórios={len(required)}, preocupações={len(concern)}, complemento={len(filler)})"
        )

        return SelectionResult(
            products=ranked,
            used_fallback_tier=used_fallback,
            routine_complexity=tier.name,
            note=note,
        )
