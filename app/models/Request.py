from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.models.Selection import SelectionProfile


class ProductSearchRequest(BaseModel):
    """Perfil enviado pela ferramenta de busca de produtos do chat."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    skin_type: Optional[str] = Field(default=None, alias="skinType")
    skin_concerns: Optional[Union[List[str], str]] = Field(default=None, alias="skinConcerns")
    budget: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[Union[str, int]] = None
    routine_complexity: Optional[str] = Field(default=None, alias="routineComplexity")

    def to_profile(self) -> SelectionProfile:
        return SelectionProfile(
            skin_type=self.skin_type,
            skin_concerns=self.skin_concerns,
            budget=self.budget,
            gender=self.gender,
            age=self.age,
            routine_complexity=self.routine_complexity,
        )
