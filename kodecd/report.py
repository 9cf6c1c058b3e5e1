"""Findings and the report that summarises them."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

__all__ = ["Finding", "Summary", "Report"]


@dataclass
class Finding:
    """One issue reported by a query."""

    file_path: str
    line: int
    column: int
    message: str
    severity: str
    code_snippet: str
    category: str
    rule_id: str


@dataclass(frozen=True)
class Summary:
    """Counts of findings by severity."""

    total_files: int
    total_findings: int
    critical: int
    high: int
    medium: int
    low: int

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> Summary:
        """Count findings; severities other than the four known ones are not tallied."""
        findings = list(findings)
        counts = Counter(f.severity for f in findings)
        return cls(
            total_files=0,
            total_findings=len(findings),
            critical=counts["Critical"],
            high=counts["High"],
            medium=counts["Medium"],
            low=counts["Low"],
        )


@dataclass
class Report:
    """A list of findings together with their summary."""

    findings: list[Finding] = field(default_factory=list)
    summary: Summary = field(init=False)

    def __post_init__(self) -> None:
        self.findings = list(self.findings)
        self.summary = Summary.from_findings(self.findings)

    def to_dict(self) -> dict[str, Any]:
        """The report as plain JSON-ready data."""
        return {
            "findings": [asdict(f) for f in self.findings],
            "summary": asdict(self.summary),
        }