from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

class SkillOfferBase(BaseModel):
    """Offer payload; serialized with the legacy client keys."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="id_users")
    sub_skill_id: int = Field(alias="id_sub_habilidade")
    description: str = Field(alias="descricao")
    value: float = Field(alias="valor")

class SkillOfferCreate(SkillOfferBase):
    pass

class SkillOfferUpdate(SkillOfferBase):
    pass

class SkillOfferResponse(SkillOfferBase):
    created_at: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
