import logging
import re
from typing import Any, Iterable, List

from pydantic import ValidationError
from supabase import Client

from app.models.Product import Product
from app.repositories.CatalogRepository import CatalogRepository, CatalogRepositoryError, FilterSpec

logger = logging.getLogger(__name__)


def _stored_spellings(value: str) -> List[str]:
    """
    Grafias aceitas na tabela para um valor canônico.

    As linhas podem vir no formato canônico ('spotTreatment', 'oily') ou com
    os nomes de enum do banco ('SPOT_TREATMENT', 'OILY'); as consultas
    enviam as duas.
    """
    upper = re.sub(r'(?<=[a-z0-9])(?=[A-Z])', '_', value).upper()
    return [value] if upper == value else [value, upper]


def _values(members: Iterable[Any]) -> List[str]:
    canonical = {getattr(member, "value", member) for member in members}
    return sorted({spelling for value in canonical for spelling in _stored_spellings(value)})


class SupabaseCatalogRepository(CatalogRepository):
    """
    Catálogo na tabela de produtos do Supabase.

    Colunas esperadas: name, brand, type, skin_types[], skin_concerns[],
    budget, gender, age[], created_at e o payload do produto.
    """

    def __init__(self, client: Client, table: str = "products"):
        self.client = client
        self.table = table

    def query_many(self, filter_spec: FilterSpec, limit: int) -> List[Product]:
        if limit <= 0:
            return []

        query = self._apply_filter(self.client.table(self.table).select("*"), filter_spec)

        try:
            response = query.order("created_at", desc=True).limit(limit).execute()
        except Exception as e:
            logger.error(f"[CATALOG] Erro na consulta ao Supabase: {e}")
            raise CatalogRepositoryError(f"Falha na consulta à tabela {self.table}: {e}") from e

        try:
            return [Product.from_record(row) for row in response.data or []]
        except ValidationError as e:
            logger.error(f"[CATALOG] Linha inválida na tabela {self.table}: {e}")
            raise CatalogRepositoryError(f"Produto inválido na tabela {self.table}: {e}") from e

    @staticmethod
    def _apply_filter(query, filter_spec: FilterSpec):
        if filter_spec.product_type is not None:
            query = query.in_("type", _values({filter_spec.product_type}))
        if filter_spec.exclude_types:
            query = query.not_.in_("type", _values(filter_spec.exclude_types))
        if filter_spec.skin_type_in is not None:
            query = query.overlaps("skin_types", _values(filter_spec.skin_type_in))
        if filter_spec.concern_in is not None:
            query = query.overlaps("skin_concerns", _values(filter_spec.concern_in))
        if filter_spec.budget_in is not None:
            query = query.in_("budget", _values(filter_spec.budget_in))
        if filter_spec.gender_in is not None:
            query = query.in_("gender", _values(filter_spec.gender_in))
        if filter_spec.age_bracket_in is not None:
            query = query.overlaps("age", _values(filter_spec.age_bracket_in))
        return query
