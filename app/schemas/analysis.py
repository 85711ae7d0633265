"""Response schema for project analytics."""

from app.schemas.base import CamelModel


class AnalysisSummary(CamelModel):
    total_entries: int
    sdgs_covered: int
    active_dimensions: int


class DistributionEntry(CamelModel):
    name: str
    value: int


class SdgCount(CamelModel):
    sdg: int
    count: int


class ProjectAnalysis(CamelModel):
    summary: AnalysisSummary
    impact_distribution: list[DistributionEntry]
    dimension_distribution: list[DistributionEntry]
    sdg_counts: list[SdgCount]
