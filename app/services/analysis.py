"""Project analytics derived from a project's impacts. Read-only."""

from collections import Counter
from collections.abc import Iterable
from typing import Protocol

from app.models.enums import RelationType, SustainabilityDimension
from app.schemas.analysis import (
    AnalysisSummary,
    DistributionEntry,
    ProjectAnalysis,
    SdgCount,
)


class AnalyzableImpact(Protocol):
    relation: str
    dimension: str
    sdg_ids: list[int]


def _distribution(counts: Counter, order: Iterable[str]) -> list[DistributionEntry]:
    """Entries in declaration order; names with zero occurrences are omitted."""
    return [
        DistributionEntry(name=name, value=counts[name])
        for name in order
        if counts[name] > 0
    ]


def analyze(impacts: Iterable[AnalyzableImpact]) -> ProjectAnalysis:
    """
    Summarize a project's impacts.

    Each impact contributes once to its relation and dimension buckets; an SDG
    referenced by an impact is counted once per impact. Output ordering is fixed
    (enum declaration order for distributions, ascending SDG id for sdg_counts)
    so the same impacts always give the same result.
    """
    relation_counts: Counter = Counter()
    dimension_counts: Counter = Counter()
    sdg_counts: Counter = Counter()
    total = 0
    for impact in impacts:
        total += 1
        relation_counts[str(_value(impact.relation))] += 1
        dimension_counts[str(_value(impact.dimension))] += 1
        sdg_counts.update(set(impact.sdg_ids))

    return ProjectAnalysis(
        summary=AnalysisSummary(
            total_entries=total,
            sdgs_covered=len(sdg_counts),
            active_dimensions=sum(1 for c in dimension_counts.values() if c > 0),
        ),
        impact_distribution=_distribution(
            relation_counts, [r.value for r in RelationType]
        ),
        dimension_distribution=_distribution(
            dimension_counts, [d.value for d in SustainabilityDimension]
        ),
        sdg_counts=[
            SdgCount(sdg=sdg_id, count=count)
            for sdg_id, count in sorted(sdg_counts.items())
        ],
    )


def _value(member: object) -> object:
    """Enum members become their value; stored strings pass through."""
    return getattr(member, "value", member)
