import json

from kodecd.report import Finding, Report, Summary


def make_finding(severity="Critical", line=42, path="app.ts"):
    return Finding(
        file_path=path,
        line=line,
        column=10,
        message="SQL injection vulnerability",
        severity=severity,
        code_snippet="database.execute(userInput)",
        category="injection",
        rule_id="sql-injection",
    )


def test_empty_report_summary_is_all_zero():
    report = Report([])
    assert report.findings == []
    assert report.summary == Summary(0, 0, 0, 0, 0, 0)


def test_summary_counts_each_known_severity():
    severities = ["Critical", "High", "High", "Medium", "Low", "Low", "Low"]
    summary = Summary.from_findings(make_finding(s) for s in severities)
    assert summary.critical == severities.count("Critical")
    assert summary.high == severities.count("High")
    assert summary.medium == severities.count("Medium")
    assert summary.low == severities.count("Low")
    assert summary.total_findings == len(severities)


def test_unknown_and_lowercase_severities_are_not_tallied():
    findings = [make_finding("critical"), make_finding("Info"), make_finding("High")]
    summary = Summary.from_findings(findings)
    assert summary.total_findings == len(findings)
    assert summary.critical + summary.high + summary.medium + summary.low == 1
    assert summary.high == 1


def test_total_files_is_not_tracked():
    report = Report([make_finding(path="a.ts"), make_finding(path="b.ts")])
    assert report.summary.total_files == 0


def test_report_copies_findings_list():
    findings = [make_finding()]
    report = Report(findings)
    findings.append(make_finding("Low"))
    assert len(report.findings) == 1
    assert report.summary.total_findings == 1


def test_to_dict_is_json_serialisable_and_round_trips():
    report = Report([make_finding("High"), make_finding("Medium", line=7)])
    data = json.loads(json.dumps(report.to_dict()))
    assert [Finding(**f) for f in data["findings"]] == report.findings
    assert Summary(**data["summary"]) == report.summary


def test_to_dict_field_order():
    data = Report([make_finding()]).to_dict()
    assert list(data) == ["findings", "summary"]
    assert list(data["findings"][0]) == [
        "file_path",
        "line",
        "column",
        "message",
        "severity",
        "code_snippet",
        "category",
        "rule_id",
    ]
    assert list(data["summary"]) == [
        "total_files",
        "total_findings",
        "critical",
        "high",
        "medium",
        "low",
    ]


def test_to_dict_keeps_finding_values():
    finding = make_finding()
    (entry,) = Report([finding]).to_dict()["findings"]
    assert entry["code_snippet"] == "database.execute(userInput)"
    assert entry["line"] == finding.line
    assert entry["rule_id"] == "sql-injection"