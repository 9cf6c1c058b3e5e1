import pytest

from kodecd.metadata import (
    QueryCategory,
    QueryMetadata,
    QueryPrecision,
    QueryRegistry,
    QuerySeverity,
    QuerySuite,
)


def test_query_metadata_builder():
    metadata = (
        QueryMetadata.builder("js/sql-injection", "SQL Injection")
        .description("Detects SQL injection vulnerabilities")
        .category(QueryCategory.INJECTION)
        .severity(QuerySeverity.CRITICAL)
        .precision(QueryPrecision.HIGH)
        .cwe(89)
        .owasp("A03:2021 - Injection")
        .sans_top_25()
        .uses_taint()
        .build()
    )
    assert metadata.id == "js/sql-injection"
    assert metadata.name == "SQL Injection"
    assert metadata.severity == QuerySeverity.CRITICAL
    assert metadata.cwes == [89]
    assert metadata.sans_top_25
    assert metadata.uses_taint


def test_query_registry():
    registry = QueryRegistry()
    metadata = (
        QueryMetadata.builder("js/sql-injection", "SQL Injection")
        .category(QueryCategory.INJECTION)
        .cwe(89)
        .suite(QuerySuite.DEFAULT)
        .build()
    )
    registry.register(metadata)
    assert len(registry.all()) == 1
    assert len(registry.by_category(QueryCategory.INJECTION)) == 1
    assert len(registry.by_cwe(89)) == 1
    assert len(registry.by_suite(QuerySuite.DEFAULT)) == 1


def test_query_suite_includes():
    suites = QuerySuite.DEFAULT.includes()
    assert len(suites) == 3
    assert QuerySuite.DEFAULT in suites
    assert QuerySuite.SECURITY_EXTENDED in suites
    assert QuerySuite.SECURITY_AND_QUALITY in suites


def test_other_suite_includes():
    assert QuerySuite.SECURITY_EXTENDED.includes() == [
        QuerySuite.SECURITY_EXTENDED,
        QuerySuite.SECURITY_AND_QUALITY,
    ]
    assert QuerySuite.SECURITY_AND_QUALITY.includes() == [QuerySuite.SECURITY_AND_QUALITY]


@pytest.mark.parametrize(
    "value, expected",
    [
        (QuerySeverity.CRITICAL, "critical"),
        (QuerySeverity.INFO, "info"),
        (QueryPrecision.VERY_HIGH, "very-high"),
        (QueryCategory.PATH_TRAVERSAL, "path-traversal"),
        (QueryCategory.INFORMATION_DISCLOSURE, "information-disclosure"),
        (QueryCategory.API_MISUSE, "api-misuse"),
        (QuerySuite.SECURITY_AND_QUALITY, "security-and-quality"),
    ],
)
def test_as_str(value, expected):
    assert value.as_str() == expected


def test_builder_defaults():
    metadata = QueryMetadata.builder("x/y", "Y").build()
    assert metadata.category == QueryCategory.BEST_PRACTICES
    assert metadata.severity == QuerySeverity.MEDIUM
    assert metadata.precision == QueryPrecision.HIGH
    assert metadata.suites == [QuerySuite.DEFAULT]
    assert metadata.languages == ["javascript", "typescript"]
    assert metadata.primary_cwe() is None
    assert metadata.owasp_top_10 is None


def test_builder_suite_is_not_duplicated():
    metadata = (
        QueryMetadata.builder("a", "A")
        .suite(QuerySuite.DEFAULT)
        .suite(QuerySuite.SECURITY_EXTENDED)
        .suite(QuerySuite.SECURITY_EXTENDED)
        .build()
    )
    assert metadata.suites == [QuerySuite.DEFAULT, QuerySuite.SECURITY_EXTENDED]
    assert metadata.in_suite(QuerySuite.SECURITY_EXTENDED)
    assert not metadata.in_suite(QuerySuite.SECURITY_AND_QUALITY)


def test_builder_replacing_lists():
    metadata = (
        QueryMetadata.builder("a", "A")
        .cwe(1)
        .cwes([79, 80])
        .tag("t1")
        .tags(["x", "y"])
        .language("python")
        .suites([QuerySuite.SECURITY_AND_QUALITY])
        .example_vulnerable("bad()")
        .example_fixed("good()")
        .reference("ref-1")
        .path_sensitive()
        .build()
    )
    assert metadata.cwes == [79, 80]
    assert metadata.primary_cwe() == 79
    assert metadata.tags == ["x", "y"]
    assert metadata.languages == ["javascript", "typescript", "python"]
    assert metadata.suites == [QuerySuite.SECURITY_AND_QUALITY]
    assert metadata.example_vulnerable == "bad()"
    assert metadata.example_fixed == "good()"
    assert metadata.references == ["ref-1"]
    assert metadata.path_sensitive


def _populated_registry():
    registry = QueryRegistry()
    registry.register(
        QueryMetadata.builder("q1", "One")
        .category(QueryCategory.INJECTION)
        .severity(QuerySeverity.CRITICAL)
        .cwes([89, 564])
        .owasp("A03")
        .sans_top_25()
        .uses_taint()
        .build()
    )
    registry.register(
        QueryMetadata.builder("q2", "Two")
        .category(QueryCategory.XSS)
        .severity(QuerySeverity.HIGH)
        .cwe(79)
        .owasp("A03")
        .suite(QuerySuite.SECURITY_EXTENDED)
        .path_sensitive()
        .build()
    )
    registry.register(
        QueryMetadata.builder("q3", "Three")
        .severity(QuerySeverity.HIGH)
        .cwe(89)
        .suites([QuerySuite.SECURITY_AND_QUALITY])
        .build()
    )
    return registry


def test_registry_queries():
    registry = _populated_registry()
    assert registry.get("q2").name == "Two"
    assert registry.get("missing") is None
    assert {m.id for m in registry.by_cwe(89)} == {"q1", "q3"}
    assert registry.by_cwe(1) == []
    assert {m.id for m in registry.by_severity(QuerySeverity.HIGH)} == {"q2", "q3"}
    assert [m.id for m in registry.by_category(QueryCategory.BEST_PRACTICES)] == ["q3"]
    assert [m.id for m in registry.sans_top_25_queries()] == ["q1"]
    assert registry.owasp_coverage() == {"A03": 2}


def test_registry_stats():
    stats = _populated_registry().stats()
    assert stats.total_queries == 3
    assert stats.unique_cwes == 3
    assert stats.owasp_queries == 2
    assert stats.sans_queries == 1
    assert stats.taint_queries == 1
    assert stats.path_sensitive_queries == 1
    assert stats.default_suite == 2
    assert stats.security_extended == 1
    assert stats.security_and_quality == 1


def test_empty_registry_stats():
    stats = QueryRegistry().stats()
    assert stats.total_queries == 0
    assert stats.default_suite == 0
    assert stats.unique_cwes == 0