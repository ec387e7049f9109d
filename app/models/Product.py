import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, FrozenSet, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _compact(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return re.sub(r'[\s_\-]+', '', str(value)).lower()


class SkinType(str, Enum):
    OILY = "oily"
    DRY = "dry"
    COMBINATION = "combination"
    NORMAL = "normal"
    SENSITIVE = "sensitive"
    MATURE = "mature"
    ALL = "all"

    @classmethod
    def parse(cls, value: Any) -> Optional["SkinType"]:
        """Retorna o tipo de pele correspondente ou None para valores desconhecidos."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = _compact(value)
        return next((member for member in cls if member.value == key), None)


class BudgetTier(str, Enum):
    BUDGET_FRIENDLY = "budgetFriendly"
    MID_RANGE = "midRange"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: Any) -> Optional["BudgetTier"]:
        """Aceita as grafias canônicas e a escala antiga low/medium/high."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        return _BUDGET_ALIASES.get(_compact(value))


_BUDGET_ALIASES = {
    "budgetfriendly": BudgetTier.BUDGET_FRIENDLY,
    "budget": BudgetTier.BUDGET_FRIENDLY,
    "low": BudgetTier.BUDGET_FRIENDLY,
    "midrange": BudgetTier.MID_RANGE,
    "mid": BudgetTier.MID_RANGE,
    "medium": BudgetTier.MID_RANGE,
    "premium": BudgetTier.PREMIUM,
    "high": BudgetTier.PREMIUM,
}


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNISEX = "unisex"

    @classmethod
    def parse(cls, value: Any) -> Optional["Gender"]:
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = _compact(value)
        return next((member for member in cls if member.value == key), None)


class AgeBracket(str, Enum):
    KIDS = "kids"
    TEEN = "teen"
    YOUNG = "young"
    MATURE = "mature"
    SENIOR = "senior"
    ALL = "all"

    @classmethod
    def parse(cls, value: Any) -> Optional["AgeBracket"]:
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = _compact(value)
        return next((member for member in cls if member.value == key), None)


def normalize_product_type(value: Any) -> str:
    """
    Normaliza o tipo de produto para o formato camelCase do catálogo.

    'spot treatment', 'SPOT_TREATMENT' e 'spotTreatment' resultam todos em
    'spotTreatment'.
    """
    if isinstance(value, Enum):
        value = value.value
    cleaned = re.sub(r'[^\w\s\-]', ' ', str(value)).strip()
    parts = [part for part in re.split(r'[\s_\-]+', cleaned) if part]
    if not parts:
        return ""
    if len(parts) == 1:
        word = parts[0]
        return word.lower() if word.isupper() else word[:1].lower() + word[1:]
    return parts[0].lower() + ''.join(part.capitalize() for part in parts[1:])


def normalize_concern(value: Any) -> str:
    """'Fine lines', 'FINE_LINES' e 'fine-lines' viram 'fine_lines'."""
    if isinstance(value, Enum):
        value = value.value
    return re.sub(r'[\s\-_]+', '_', str(value).strip()).lower().strip('_')


def _parse_members(values: Any, parser) -> FrozenSet:
    if values is None:
        return frozenset()
    if isinstance(values, (str, Enum)):
        values = [values]
    parsed = (parser(value) for value in values)
    return frozenset(value for value in parsed if value)


class Product(BaseModel):
    """Registro de produto do catálogo, somente leitura durante a seleção."""

    model_config = ConfigDict(frozen=True)

    name: str
    brand: str
    type: str
    skin_types: FrozenSet[SkinType] = Field(
        default=frozenset(), validation_alias=AliasChoices("skin_types", "skinTypes")
    )
    skin_concerns: FrozenSet[str] = Field(
        default=frozenset(), validation_alias=AliasChoices("skin_concerns", "skinConcerns")
    )
    budget: Optional[BudgetTier] = None
    gender: Optional[Gender] = None
    age: FrozenSet[AgeBracket] = frozenset()

    id: Optional[str] = None
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )

    # Payload repassado sem alteração
    price: Optional[float] = Field(default=None, validation_alias=AliasChoices("price", "price_usd"))
    purchase_link: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("purchase_link", "purchaseLink", "link")
    )
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("image_url", "imageUrl"))
    instructions: Optional[str] = None
    use_time: Optional[Any] = Field(default=None, validation_alias=AliasChoices("use_time", "useTime"))
    texture: Optional[str] = None
    ingredients: Optional[Any] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return None if value is None else str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        return normalize_product_type(value)

    @field_validator("skin_types", mode="before")
    @classmethod
    def _parse_skin_types(cls, value):
        return _parse_members(value, SkinType.parse)

    @field_validator("skin_concerns", mode="before")
    @classmethod
    def _parse_concerns(cls, value):
        return _parse_members(value, normalize_concern)

    @field_validator("age", mode="before")
    @classmethod
    def _parse_age(cls, value):
        return _parse_members(value, AgeBracket.parse)

    @field_validator("budget", mode="before")
    @classmethod
    def _parse_budget(cls, value):
        return BudgetTier.parse(value)

    @field_validator("gender", mode="before")
    @classmethod
    def _parse_gender(cls, value):
        return Gender.parse(value)

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def identity(self) -> tuple:
        return self.brand, self.name

    @classmethod
    def from_record(cls, record: dict) -> "Product":
        """Cria o produto a partir de uma linha do catálogo (snake_case ou camelCase)."""
        return cls.model_validate(record)
