from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.Selection import ScoredProduct, SelectionResult
from app.routine.RoutineTiers import ROUTINE_TIERS


class ProductCandidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str
    brand: str
    type: str
    price: Optional[float] = None
    link: Optional[str] = None
    score: int
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    instructions: str = ""
    use_time: Optional[Any] = Field(default=None, alias="useTime")
    texture: Optional[str] = None
    skin_types: List[str] = Field(default_factory=list, alias="skinTypes")
    skin_concerns: List[str] = Field(default_factory=list, alias="skinConcerns")
    ingredients: Optional[Any] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    slot: Optional[str] = None

    @classmethod
    def from_scored(cls, scored: ScoredProduct, slot: Optional[str] = None) -> "ProductCandidate":
        product = scored.product
        return cls(
            id=product.id,
            name=product.name,
            brand=product.brand,
            type=product.type,
            price=product.price,
            link=product.purchase_link,
            score=scored.score,
            image_url=product.image_url,
            instructions=product.instructions or "",
            use_time=product.use_time,
            texture=product.texture,
            skin_types=sorted(skin_type.value for skin_type in product.skin_types),
            skin_concerns=sorted(product.skin_concerns),
            ingredients=product.ingredients,
            created_at=product.created_at,
            slot=slot,
        )


class ProductSearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    products: List[ProductCandidate]
    count: int
    routine_complexity: str = Field(alias="routineComplexity")
    search_latency: int = Field(alias="searchLatency")
    note: Optional[str] = None

    @classmethod
    def from_result(cls, result: SelectionResult, search_latency: int) -> "ProductSearchResponse":
        tier = ROUTINE_TIERS[result.routine_complexity]
        products = [
            ProductCandidate.from_scored(scored, slot=tier.slot_band(scored.product.type))
            for scored in result.products
        ]
        return cls(
            products=products,
            count=len(products),
            routine_complexity=result.routine_complexity,
            search_latency=search_latency,
            note=result.note,
        )


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    search_latency: int = Field(alias="searchLatency")
