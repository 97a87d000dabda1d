"""
Pydantic models for tool arguments, engine output and tool responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Literal


# Tool arguments - strict so non-string values are rejected, not coerced

class StoreMemoryArgs(BaseModel):
    model_config = ConfigDict(strict=True)

    text: str


class RecallMemoryArgs(BaseModel):
    model_config = ConfigDict(strict=True)

    query: str


# Engine stdout

class SearchResult(BaseModel):
    id: int
    content: str
    score: float


class EngineAddResponse(BaseModel):
    id: int


class EngineSearchResponse(BaseModel):
    results: List[SearchResult]


# Tool responses

class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    content: List[TextContent]
    isError: Optional[bool] = None

    @classmethod
    def success(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(content=[TextContent(text=f"Error: {message}")], isError=True)

    @property
    def is_error(self) -> bool:
        return bool(self.isError)

    def first_text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_payload(self) -> Dict[str, Any]:
        """Wire shape; isError is only present on failures."""
        return self.model_dump(exclude_none=True)


# HTTP surface

class ToolCallRequest(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolInfo(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]


class ToolListResponse(BaseModel):
    tools: List[ToolInfo]


class HealthResponse(BaseModel):
    status: str
    version: str
    engine: str
    config_issues: List[str] = Field(default_factory=list)
