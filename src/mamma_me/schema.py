"""Data models for mamma-me."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Verdict(str, Enum):
    """A source's stance on eating a food during pregnancy."""

    SAFE = "safe"
    CONDITIONAL = "conditional"
    CAUTION = "caution"
    AVOID = "avoid"


# Higher is safer; used for the weighted verdict score.
VERDICT_SCORE: dict[Verdict, int] = {
    Verdict.AVOID: 0,
    Verdict.CAUTION: 1,
    Verdict.CONDITIONAL: 2,
    Verdict.SAFE: 3,
}

# Higher is more severe; used when deduplicating entries.
VERDICT_RANK: dict[Verdict, int] = {
    Verdict.AVOID: 3,
    Verdict.CAUTION: 2,
    Verdict.CONDITIONAL: 1,
    Verdict.SAFE: 0,
}


def verdict_score(verdict: Verdict) -> int:
    return VERDICT_SCORE[verdict]


def verdict_rank(verdict: Verdict) -> int:
    return VERDICT_RANK[verdict]


class SourceEntry(BaseModel):
    """One opinion from one source about one food."""

    model_config = ConfigDict(frozen=True)

    source_name: str
    verdict: Verdict
    reliability: float = Field(ge=0.5, le=5.0)
    note: str | None = None
    url: str | None = None


class FoodSummary(BaseModel):
    """All deduplicated source entries for a single food name."""

    model_config = ConfigDict(frozen=True)

    name: str
    entries: tuple[SourceEntry, ...] = ()

    def weighted_entries(self) -> list[SourceEntry]:
        """Entries that carry weight in the verdict score."""
        return [entry for entry in self.entries if entry.reliability > 0.0]

    @computed_field
    @property
    def count(self) -> int:
        return len(self.weighted_entries())

    @computed_field
    @property
    def weighted_score(self) -> float:
        """Reliability-weighted mean of verdict scores (0 = avoid, 3 = safe)."""
        valid = self.weighted_entries()
        denom = sum(entry.reliability for entry in valid)
        if denom <= 0.0:
            return 0.0
        num = sum(verdict_score(entry.verdict) * entry.reliability for entry in valid)
        return num / denom

    @computed_field
    @property
    def score_rounded(self) -> int:
        return round(self.weighted_score)


class AdvisoryResult(BaseModel):
    """Free-text advisory for a query, or a user-visible failure message."""

    query: str
    ok: bool
    text: str
    provider: str | None = None
