from pydantic import BaseModel
from typing import Optional

class UserPair(BaseModel):
    from_user: int
    to_user: int

class LikeCandidate(BaseModel):
    user_id: int
    name: str
    is_mutual: bool = False
    sub_skill_id: Optional[int] = None
    skill_description: Optional[str] = None
    skill_value: Optional[float] = None

class ConfirmedConnection(BaseModel):
    user_id: int
    name: str
    sub_skill_id: Optional[int] = None
    skill_description: Optional[str] = None
    own_sub_skill_id: Optional[int] = None
    own_skill_description: Optional[str] = None
