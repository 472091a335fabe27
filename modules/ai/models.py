"""
AI proxy data models.

Request options use the camelCase names clients already send
(``topP``, ``topK``, ``maxTokens``); snake_case is accepted too.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from modules.audit import AuditEntry

MAX_QUERY_LENGTH = 2000


class QueryOptions(BaseModel):
    """Sampling options for a single query. Unset fields use the server defaults."""

    model_config = {"populate_by_name": True}

    temperature: Optional[float] = Field(None, ge=0, le=2)
    top_p: Optional[float] = Field(None, alias="topP", ge=0, le=1)
    top_k: Optional[int] = Field(None, alias="topK", ge=1)
    max_tokens: Optional[int] = Field(None, alias="maxTokens", ge=1)


class AIQueryRequest(BaseModel):
    """Body of POST /api/ai/query."""

    query: str
    options: QueryOptions = Field(default_factory=QueryOptions)

    @field_validator("query", mode="before")
    @classmethod
    def validate_query(cls, value: Any) -> str:
        if value is None or value == "":
            raise ValueError("Query is required")
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Query must be a non-empty string")
        if len(value) > MAX_QUERY_LENGTH:
            raise ValueError(f"Query must be less than {MAX_QUERY_LENGTH} characters")
        return value


class AIQueryResult(BaseModel):
    success: bool = True
    result: str


class QueryAnalysis(BaseModel):
    """Aggregate token usage over a user's AI queries."""

    total_queries: int = 0
    average_tokens: Optional[float] = Field(None, description="Mean total tokens per query")
    max_tokens: Optional[int] = Field(None, description="Largest total tokens for one query")

    @classmethod
    def from_entries(cls, entries: list[AuditEntry]) -> "QueryAnalysis":
        totals = [
            usage["total_tokens"]
            for usage in (entry.metadata.get("usage") or {} for entry in entries)
            if isinstance(usage.get("total_tokens"), int)
        ]
        if not totals:
            return cls(total_queries=len(entries))
        return cls(
            total_queries=len(entries),
            average_tokens=sum(totals) / len(totals),
            max_tokens=max(totals),
        )
