"""Results of analysing many files and helpers that combine them."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
from pathlib import Path
from typing import Iterable, Optional

from kodecd.report import Finding

__all__ = [
    "FileAnalysisResult",
    "AnalysisStatistics",
    "aggregate_findings",
    "get_statistics",
]

_SEVERITY_RANK = {"Critical": 0, "High": 1, "Medium": 2, "Low": 3}


@dataclass
class FileAnalysisResult:
    """Outcome of analysing one file."""

    file_path: Path
    findings: list[Finding] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class AnalysisStatistics:
    """Counts over a set of file results."""

    total_files: int
    successful_files: int
    failed_files: int
    total_findings: int


def aggregate_findings(results: Iterable[FileAnalysisResult]) -> list[Finding]:
    """All findings, most severe first, then by file path and line."""
    findings = list(chain.from_iterable(r.findings for r in results))
    findings.sort(
        key=lambda f: (_SEVERITY_RANK.get(f.severity, 4), f.file_path, f.line)
    )
    return findings


def get_statistics(results: Iterable[FileAnalysisResult]) -> AnalysisStatistics:
    results = list(results)
    successful = sum(1 for r in results if r.success)
    return AnalysisStatistics(
        total_files=len(results),
        successful_files=successful,
        failed_files=len(results) - successful,
        total_findings=sum(len(r.findings) for r in results),
    )