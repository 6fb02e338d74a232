"""Pydantic models for API requests and responses.

Field names are camelCase to match the JSON wire format the browser and the
ProxyGenerator send.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Prompts and temperature are checked by the endpoint, which answers 400 with an error body."""

    systemPrompt: Optional[str] = Field(None, description="System prompt composed by the client")
    userPrompt: Optional[str] = Field(None, description="User prompt composed by the client")
    temperature: Optional[float] = Field(None, description="Sampling temperature between 0 and 1, default 0.7")


class GenerateResponse(BaseModel):
    content: str


class LinksRequest(BaseModel):
    content: Optional[str] = Field(None, description="Blog post markdown to find references for")
    topic: Optional[str] = Field(None, description="Optional topic to focus the suggestions on")
    maxLinks: int = Field(5, ge=1, le=20)


class LinkModel(BaseModel):
    title: str
    url: str
    description: str = ""
    relevance: str = "medium"
    type: str = "reference"


class LinksResponse(BaseModel):
    links: List[LinkModel]
    topics: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
