from typing import List

from pydantic import BaseModel

class Fortune(BaseModel):
    id: int
    text: str

class FortuneOut(BaseModel):
    fortune: Fortune

class ErrorOut(BaseModel):
    error: List[str]
