from pydantic import BaseModel

class HistoryPair(BaseModel):
    first_user: int
    second_user: int
