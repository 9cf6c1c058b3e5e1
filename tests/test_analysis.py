from pathlib import Path

from kodecd.analysis import (
    AnalysisStatistics,
    FileAnalysisResult,
    aggregate_findings,
    get_statistics,
)
from kodecd.report import Finding


def _finding(path, line, severity, message="issue"):
    return Finding(
        file_path=path,
        line=line,
        column=0,
        message=message,
        severity=severity,
        code_snippet="x",
        category="security",
        rule_id="rule",
    )


def test_aggregate_orders_by_severity_path_line():
    results = [
        FileAnalysisResult(
            Path("b.ts"),
            [_finding("b.ts", 5, "Low"), _finding("b.ts", 2, "Critical")],
        ),
        FileAnalysisResult(
            Path("a.ts"),
            [
                _finding("a.ts", 9, "Critical"),
                _finding("a.ts", 1, "Weird"),
                _finding("a.ts", 3, "High"),
                _finding("a.ts", 1, "Critical"),
            ],
        ),
    ]
    ordered = aggregate_findings(results)
    assert [(f.severity, f.file_path, f.line) for f in ordered] == [
        ("Critical", "a.ts", 1),
        ("Critical", "a.ts", 9),
        ("Critical", "b.ts", 2),
        ("High", "a.ts", 3),
        ("Low", "b.ts", 5),
        ("Weird", "a.ts", 1),
    ]


def test_aggregate_keeps_every_finding_and_is_stable():
    first = _finding("a.ts", 1, "Medium", "first")
    second = _finding("a.ts", 1, "Medium", "second")
    results = [
        FileAnalysisResult(Path("a.ts"), [first]),
        FileAnalysisResult(Path("a.ts"), [second]),
        FileAnalysisResult(Path("c.ts"), [], success=False, error="Parse error: bad"),
    ]
    ordered = aggregate_findings(results)
    assert [f.message for f in ordered] == ["first", "second"]


def test_aggregate_of_nothing_is_empty():
    assert aggregate_findings([]) == []


def test_statistics():
    results = [
        FileAnalysisResult(Path("a.ts"), [_finding("a.ts", 1, "High")] * 2),
        FileAnalysisResult(Path("b.ts"), [_finding("b.ts", 1, "Low")]),
        FileAnalysisResult(Path("c.ts"), [], success=False, error="Parse error: bad"),
    ]
    stats = get_statistics(results)
    assert stats == AnalysisStatistics(
        total_files=3, successful_files=2, failed_files=1, total_findings=3
    )


def test_statistics_invariant():
    results = [
        FileAnalysisResult(Path(f"f{n}.py"), success=n % 2 == 0) for n in range(7)
    ]
    stats = get_statistics(results)
    assert stats.successful_files + stats.failed_files == stats.total_files == 7
    assert stats.total_findings == 0