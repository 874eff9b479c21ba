from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..graph.adjacency import RelationshipType

# Genre(3) + Author(5) + Keywords(5*1) + BorrowedTogether(2) + EdgeWeight(~10)
MAX_POSSIBLE_SCORE = 25


class BookCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    keywords: list[str] = Field(..., min_length=1, description="Free-form tags, at least one")
    description: str | None = None

    @field_validator("keywords")
    @classmethod
    def _clean_keywords(cls, value: list[str]) -> list[str]:
        cleaned = [k.strip() for k in value if k.strip()]
        if not cleaned:
            raise ValueError("At least one keyword is required")
        return cleaned


class Book(BookCreate):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str


class Recommendation(BaseModel):
    book: Book
    score: float
    relationship_types: list[RelationshipType] = Field(default_factory=list)
    depth: int = Field(..., ge=1, le=2)

    @computed_field
    @property
    def match_percentage(self) -> int:
        return min(round(self.score / MAX_POSSIBLE_SCORE * 100), 100)


class GraphStats(BaseModel):
    nodes: int
    edges: int
