import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Union

from pydantic import ValidationError

from app.models.Product import Product
from app.repositories.CatalogRepository import CatalogRepository, CatalogRepositoryError, FilterSpec

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryCatalogRepository(CatalogRepository):
    """Catálogo mantido em memória, somente leitura após a construção."""

    def __init__(self, products: Iterable[Product] = ()):
        # sorted() é estável também com reverse=True: empates mantêm a ordem de entrada
        self._products: List[Product] = sorted(
            products,
            key=lambda product: product.created_at or _OLDEST,
            reverse=True,
        )

    def __len__(self) -> int:
        return len(self._products)

    def query_many(self, filter_spec: FilterSpec, limit: int) -> List[Product]:
        if limit <= 0:
            return []
        matches = []
        for product in self._products:
            if filter_spec.matches(product):
                matches.append(product)
                if len(matches) >= limit:
                    break
        return matches

    @classmethod
    def from_json_file(cls, file_path: Union[str, Path]) -> "InMemoryCatalogRepository":
        """
        Carrega o catálogo de um arquivo JSON.

        Aceita uma lista de produtos ou um objeto {"products": [...]}.
        Arquivo inexistente resulta em catálogo vazio; arquivo inválido
        lança CatalogRepositoryError.
        """
        file_path = Path(file_path)

        if not file_path.exists():
            logger.warning(f"[CATALOG] Arquivo não encontrado: {file_path}")
            return cls()

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogRepositoryError(f"Erro ao carregar {file_path}: {e}") from e

        records = content.get("products", []) if isinstance(content, dict) else content
        if not isinstance(records, list):
            raise CatalogRepositoryError(f"Formato de catálogo inválido em {file_path}")

        try:
            products = [Product.from_record(record) for record in records]
        except ValidationError as e:
            raise CatalogRepositoryError(f"Produto inválido em {file_path}: {e}") from e

        logger.info(f"[CATALOG] {len(products)} produtos carregados de {file_path.name}")
        return cls(products)
