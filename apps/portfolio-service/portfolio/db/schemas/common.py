from typing import Generic, List, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    message: str
    data: T


class PaginatedEnvelope(BaseModel, Generic[T]):
    message: str
    data: List[T]
    page: int
    limit: int


class MessageResponse(BaseModel):
    message: str
