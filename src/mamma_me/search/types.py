"""Data models for search output."""

from pydantic import BaseModel, Field

from mamma_me.schema import FoodSummary


class SearchResult(BaseModel):
    """Ranked foods for one query, plus the signals the UI needs."""

    query: str
    results: list[FoodSummary] = Field(default_factory=list)
    hints: list[str] = Field(default_factory=list)
    expanded: list[str] = Field(default_factory=list)
    strong_match: bool = False
    show_advisory: bool = False

    @property
    def top(self) -> FoodSummary | None:
        return self.results[0] if self.results else None
