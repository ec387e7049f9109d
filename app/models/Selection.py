import re
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from app.models.Product import Product


class SelectionProfile(BaseModel):
    """
    Perfil usado na seleção de produtos.

    Todos os campos são strings opcionais: valores desconhecidos não geram
    erro de validação, apenas deixam de restringir a busca.
    """

    model_config = ConfigDict(frozen=True)

    skin_type: Optional[str] = None
    skin_concerns: Optional[Tuple[str, ...]] = None
    budget: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[str] = None
    routine_complexity: Optional[str] = None

    @field_validator("skin_concerns", mode="before")
    @classmethod
    def _split_concerns(cls, value):
        # "acne, dullness and redness" -> ("acne", "dullness", "redness")
        if isinstance(value, str):
            value = re.split(r'[,;\n]|\band\b', value, flags=re.IGNORECASE)
        if value is None:
            return None
        return tuple(str(item).strip() for item in value if str(item).strip())

    @field_validator("age", mode="before")
    @classmethod
    def _age_as_str(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class ScoredProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    product: Product
    score: int


class SelectionResult(BaseModel):
    products: List[ScoredProduct]
    used_fallback_tier: bool = False
    routine_complexity: str
    note: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.products)
