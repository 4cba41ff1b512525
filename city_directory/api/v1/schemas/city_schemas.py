"""Schemas for city directory endpoints."""
from typing import List, Optional

from pydantic import BaseModel, Field


class CitySchema(BaseModel):
    """City item in the listing. Fields the document lacks are omitted."""
    id: str
    friends: Optional[List[str]] = None
    neighbour: Optional[str] = None


class AddCityRequestSchema(BaseModel):
    """Body of the add/replace city endpoint."""
    cityName: str = Field(..., min_length=1)
    friends: List[str]


class FriendRequestSchema(BaseModel):
    """Body of the add/remove friend endpoints."""
    newFriend: str = Field(..., min_length=1)


class DeleteCityRequestSchema(BaseModel):
    """Body of the delete city endpoint."""
    chosenCity: str = Field(..., min_length=1)


class MessageResponseSchema(BaseModel):
    """Success acknowledgement."""
    message: str


class ErrorResponseSchema(BaseModel):
    """Body of every failure response."""
    error: str
    message: str
