"""Reliability-aware verdict summaries for a food's source entries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from mamma_me.schema import SourceEntry, Verdict

VERDICT_LABELS: dict[Verdict, str] = {
    Verdict.AVOID: "Avoid",
    Verdict.CAUTION: "Caution",
    Verdict.CONDITIONAL: "Conditional",
    Verdict.SAFE: "Safe",
}


class Tier(str, Enum):
    HIGH = "high"
    MID = "mid"
    LOW = "low"


class Dominance(str, Enum):
    SAFE = "safe"
    CONDITIONAL = "conditional"
    CAUTION = "caution"
    BAN = "ban"
    MIXED = "mixed"


TIER_LEADS: dict[Tier, str] = {
    Tier.HIGH: "According to high-reliability sources,",
    Tier.MID: "According to mid-reliability sources,",
    Tier.LOW: "According to lower-reliability sources,",
}

HEADLINES: dict[Dominance, str] = {
    Dominance.SAFE: "most opinions say it's generally okay.",
    Dominance.CONDITIONAL: "many say it's okay if you're careful.",
    Dominance.CAUTION: "caution is the dominant opinion.",
    Dominance.BAN: "avoiding it is the dominant opinion.",
    Dominance.MIXED: "opinions are mixed.",
}


@dataclass(frozen=True)
class VerdictCounts:
    safe: int = 0
    conditional: int = 0
    caution: int = 0
    avoid: int = 0

    @classmethod
    def of(cls, entries: Iterable[SourceEntry]) -> "VerdictCounts":
        counts = {verdict: 0 for verdict in Verdict}
        for entry in entries:
            counts[entry.verdict] += 1
        return cls(
            safe=counts[Verdict.SAFE],
            conditional=counts[Verdict.CONDITIONAL],
            caution=counts[Verdict.CAUTION],
            avoid=counts[Verdict.AVOID],
        )

    @property
    def total(self) -> int:
        return self.safe + self.conditional + self.caution + self.avoid

    def pct(self, n: int) -> float:
        return 0.0 if self.total == 0 else n * 100.0 / self.total

    def __add__(self, other: "VerdictCounts") -> "VerdictCounts":
        return VerdictCounts(
            safe=self.safe + other.safe,
            conditional=self.conditional + other.conditional,
            caution=self.caution + other.caution,
            avoid=self.avoid + other.avoid,
        )


@dataclass(frozen=True)
class Signal:
    icon: str
    label: str


@dataclass(frozen=True)
class GroupSignal:
    tier: Tier
    title: str
    counts: VerdictCounts
    signal: Signal


NO_DATA = Signal("？", "No data")

GROUP_TITLES: dict[Tier, str] = {
    Tier.HIGH: "Clinicians / Institutions",
    Tier.MID: "Companies / Press releases",
    Tier.LOW: "Individuals / Communities",
}


def verdict_label(verdict: Verdict | str) -> str:
    if isinstance(verdict, Verdict):
        return VERDICT_LABELS[verdict]
    try:
        return VERDICT_LABELS[Verdict(verdict.strip().lower())]
    except ValueError:
        return verdict


def tier_of(reliability: float) -> Tier:
    if reliability >= 3.0:
        return Tier.HIGH
    if reliability >= 2.0:
        return Tier.MID
    return Tier.LOW


def decide_signal(counts: VerdictCounts) -> Signal:
    """Pick the badge for a group of entries; any verdict at 40% or more dominates."""
    if counts.total == 0:
        return NO_DATA
    if counts.pct(counts.avoid) >= 40.0:
        return Signal("✖️", "Better to avoid")
    if counts.pct(counts.caution) >= 40.0:
        return Signal("⚠️", "Use caution")
    if counts.pct(counts.conditional) >= 40.0:
        return Signal("🟡", "Likely okay with care")
    return Signal("💚", "Generally okay")


def dominance_of(counts: VerdictCounts) -> Dominance:
    if counts.total == 0:
        return Dominance.MIXED

    safe = counts.pct(counts.safe)
    conditional = counts.pct(counts.conditional)
    caution = counts.pct(counts.caution)
    avoid = counts.pct(counts.avoid)

    if avoid >= 50.0:
        return Dominance.BAN
    if caution >= 40.0 or (avoid >= 30.0 and caution + avoid >= 50.0):
        return Dominance.CAUTION
    if conditional >= 40.0:
        return Dominance.CONDITIONAL
    if safe >= 60.0:
        return Dominance.SAFE
    return Dominance.MIXED


def counts_by_tier(entries: Iterable[SourceEntry]) -> dict[Tier, VerdictCounts]:
    grouped: dict[Tier, list[SourceEntry]] = {tier: [] for tier in Tier}
    for entry in entries:
        grouped[tier_of(entry.reliability)].append(entry)
    return {tier: VerdictCounts.of(items) for tier, items in grouped.items()}


def build_reliability_summary(entries: Sequence[SourceEntry]) -> str:
    """Describe the verdict of the most reliable tier, noting dissent from the others."""
    if not entries:
        return ""

    by_tier = counts_by_tier(entries)
    primary = next(tier for tier in Tier if by_tier[tier].total > 0)
    dominance = dominance_of(by_tier[primary])
    head = f"{TIER_LEADS[primary]} {HEADLINES[dominance]}"

    others = VerdictCounts()
    for tier in Tier:
        if tier != primary:
            others = others + by_tier[tier]
    other_total = max(1, others.total)

    def notable(n: int) -> bool:
        return n >= 2 or n * 100.0 / other_total >= 30.0

    tail = ""
    if dominance is Dominance.BAN:
        if notable(others.safe) or notable(others.conditional):
            tail = " Still, some other sources say it's conditional/okay."
    elif dominance is Dominance.CAUTION:
        if notable(others.safe):
            tail = " Still, some sources say it's okay."
        elif notable(others.conditional):
            tail = " Still, some sources say it's okay with conditions."
    elif dominance is Dominance.CONDITIONAL:
        if notable(others.caution) or notable(others.avoid):
            tail = " Still, some sources warn caution is needed."
        elif notable(others.safe):
            tail = " Also, some sources say it's okay."
    elif dominance is Dominance.SAFE:
        if notable(others.avoid) or notable(others.caution):
            tail = " Still, some sources recommend caution/avoidance."
        elif notable(others.conditional):
            tail = " Still, some sources consider it conditional."
    return head + tail


def tri_group_signals(entries: Sequence[SourceEntry]) -> list[GroupSignal]:
    """One signal per reliability group, high first.

    The low group only covers reliability in [1.0, 2.0); entries below 1.0
    appear in no group.
    """
    groups: list[GroupSignal] = []
    for tier in Tier:
        members = [
            entry
            for entry in entries
            if tier_of(entry.reliability) is tier and entry.reliability >= 1.0
        ]
        counts = VerdictCounts.of(members)
        groups.append(GroupSignal(tier=tier, title=GROUP_TITLES[tier], counts=counts, signal=decide_signal(counts)))
    return groups
