"""Metadata for security queries: severities, categories, suites and a registry."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum


class QuerySeverity(Enum):
    """How serious the issue a query reports is."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    def as_str(self) -> str:
        return self.value


class QueryPrecision(Enum):
    """How likely a query's results are to be true positives."""

    VERY_HIGH = "very-high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def as_str(self) -> str:
        return self.value


class QueryCategory(Enum):
    """The kind of problem a query looks for."""

    INJECTION = "injection"
    XSS = "xss"
    AUTHENTICATION = "authentication"
    CRYPTOGRAPHY = "cryptography"
    PATH_TRAVERSAL = "path-traversal"
    INFORMATION_DISCLOSURE = "information-disclosure"
    CODE_QUALITY = "code-quality"
    RESOURCE_MANAGEMENT = "resource-management"
    ERROR_HANDLING = "error-handling"
    CONCURRENCY = "concurrency"
    MEMORY_SAFETY = "memory-safety"
    CONFIGURATION = "configuration"
    API_MISUSE = "api-misuse"
    FRAMEWORK_SPECIFIC = "framework-specific"
    BEST_PRACTICES = "best-practices"

    def as_str(self) -> str:
        return self.value


class QuerySuite(Enum):
    """A named collection of queries."""

    DEFAULT = "default"
    SECURITY_EXTENDED = "security-extended"
    SECURITY_AND_QUALITY = "security-and-quality"

    def as_str(self) -> str:
        return self.value

    def includes(self) -> list[QuerySuite]:
        """Return the suites that contain this suite's queries."""
        if self is QuerySuite.DEFAULT:
            return [
                QuerySuite.DEFAULT,
                QuerySuite.SECURITY_EXTENDED,
                QuerySuite.SECURITY_AND_QUALITY,
            ]
        if self is QuerySuite.SECURITY_EXTENDED:
            return [QuerySuite.SECURITY_EXTENDED, QuerySuite.SECURITY_AND_QUALITY]
        return [QuerySuite.SECURITY_AND_QUALITY]


@dataclass
class QueryMetadata:
    """Descriptive information about one query."""

    id: str
    name: str
    description: str = ""
    category: QueryCategory = QueryCategory.BEST_PRACTICES
    severity: QuerySeverity = QuerySeverity.MEDIUM
    precision: QueryPrecision = QueryPrecision.HIGH
    cwes: list[int] = field(default_factory=list)
    owasp_top_10: str | None = None
    sans_top_25: bool = False
    suites: list[QuerySuite] = field(default_factory=lambda: [QuerySuite.DEFAULT])
    tags: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=lambda: ["javascript", "typescript"])
    uses_taint: bool = False
    path_sensitive: bool = False
    example_vulnerable: str | None = None
    example_fixed: str | None = None
    references: list[str] = field(default_factory=list)

    @staticmethod
    def builder(id: str, name: str) -> QueryMetadataBuilder:
        """Start building metadata for the query with this id and name."""
        return QueryMetadataBuilder(id, name)

    def in_suite(self, suite: QuerySuite) -> bool:
        return suite in self.suites

    def primary_cwe(self) -> int | None:
        """The first CWE listed, if any."""
        return self.cwes[0] if self.cwes else None


class QueryMetadataBuilder:
    """Fluent builder for QueryMetadata; each setter returns the builder."""

    def __init__(self, id: str, name: str) -> None:
        self._id = id
        self._name = name
        self._description = ""
        self._category: QueryCategory | None = None
        self._severity = QuerySeverity.MEDIUM
        self._precision = QueryPrecision.HIGH
        self._cwes: list[int] = []
        self._owasp: str | None = None
        self._sans_top_25 = False
        self._suites: list[QuerySuite] = [QuerySuite.DEFAULT]
        self._tags: list[str] = []
        self._languages: list[str] = ["javascript", "typescript"]
        self._uses_taint = False
        self._path_sensitive = False
        self._example_vulnerable: str | None = None
        self._example_fixed: str | None = None
        self._references: list[str] = []

    def description(self, desc: str) -> QueryMetadataBuilder:
        self._description = desc
        return self

    def category(self, category: QueryCategory) -> QueryMetadataBuilder:
        self._category = category
        return self

    def severity(self, severity: QuerySeverity) -> QueryMetadataBuilder:
        self._severity = severity
        return self

    def precision(self, precision: QueryPrecision) -> QueryMetadataBuilder:
        self._precision = precision
        return self

    def cwe(self, cwe: int) -> QueryMetadataBuilder:
        self._cwes.append(cwe)
        return self

    def cwes(self, cwes: list[int]) -> QueryMetadataBuilder:
        self._cwes = list(cwes)
        return self

    def owasp(self, owasp: str) -> QueryMetadataBuilder:
        self._owasp = owasp
        return self

    def sans_top_25(self) -> QueryMetadataBuilder:
        self._sans_top_25 = True
        return self

    def suite(self, suite: QuerySuite) -> QueryMetadataBuilder:
        if suite not in self._suites:
            self._suites.append(suite)
        return self

    def suites(self, suites: list[QuerySuite]) -> QueryMetadataBuilder:
        self._suites = list(suites)
        return self

    def tag(self, tag: str) -> QueryMetadataBuilder:
        self._tags.append(tag)
        return self

    def tags(self, tags: list[str]) -> QueryMetadataBuilder:
        self._tags = list(tags)
        return self

    def language(self, lang: str) -> QueryMetadataBuilder:
        self._languages.append(lang)
        return self

    def languages(self, langs: list[str]) -> QueryMetadataBuilder:
        self._languages = list(langs)
        return self

    def uses_taint(self) -> QueryMetadataBuilder:
        self._uses_taint = True
        return self

    def path_sensitive(self) -> QueryMetadataBuilder:
        self._path_sensitive = True
        return self

    def example_vulnerable(self, example: str) -> QueryMetadataBuilder:
        self._example_vulnerable = example
        return self

    def example_fixed(self, example: str) -> QueryMetadataBuilder:
        self._example_fixed = example
        return self

    def reference(self, reference: str) -> QueryMetadataBuilder:
        self._references.append(reference)
        return self

    def build(self) -> QueryMetadata:
        return QueryMetadata(
            id=self._id,
            name=self._name,
            description=self._description,
            category=self._category or QueryCategory.BEST_PRACTICES,
            severity=self._severity,
            precision=self._precision,
            cwes=list(self._cwes),
            owasp_top_10=self._owasp,
            sans_top_25=self._sans_top_25,
            suites=list(self._suites),
            tags=list(self._tags),
            languages=list(self._languages),
            uses_taint=self._uses_taint,
            path_sensitive=self._path_sensitive,
            example_vulnerable=self._example_vulnerable,
            example_fixed=self._example_fixed,
            references=list(self._references),
        )


@dataclass(frozen=True)
class QueryRegistryStats:
    """Aggregate counts over a registry."""

    total_queries: int
    unique_cwes: int
    owasp_queries: int
    sans_queries: int
    taint_queries: int
    path_sensitive_queries: int
    default_suite: int
    security_extended: int
    security_and_quality: int


class QueryRegistry:
    """Holds query metadata, indexed by category, CWE and suite."""

    def __init__(self) -> None:
        self._queries: dict[str, QueryMetadata] = {}
        self._by_category: defaultdict[QueryCategory, list[str]] = defaultdict(list)
        self._by_cwe: defaultdict[int, list[str]] = defaultdict(list)
        self._by_suite: defaultdict[QuerySuite, list[str]] = defaultdict(list)

    def register(self, metadata: QueryMetadata) -> None:
        query_id = metadata.id
        self._by_category[metadata.category].append(query_id)
        for cwe in metadata.cwes:
            self._by_cwe[cwe].append(query_id)
        for suite in metadata.suites:
            self._by_suite[suite].append(query_id)
        self._queries[query_id] = metadata

    def get(self, id: str) -> QueryMetadata | None:
        return self._queries.get(id)

    def all(self) -> list[QueryMetadata]:
        return list(self._queries.values())

    def _resolve(self, ids: list[str] | None) -> list[QueryMetadata]:
        return [self._queries[i] for i in ids or () if i in self._queries]

    def by_category(self, category: QueryCategory) -> list[QueryMetadata]:
        return self._resolve(self._by_category.get(category))

    def by_cwe(self, cwe: int) -> list[QueryMetadata]:
        return self._resolve(self._by_cwe.get(cwe))

    def by_suite(self, suite: QuerySuite) -> list[QueryMetadata]:
        return self._resolve(self._by_suite.get(suite))

    def by_severity(self, severity: QuerySeverity) -> list[QueryMetadata]:
        return [m for m in self._queries.values() if m.severity == severity]

    def owasp_coverage(self) -> dict[str, int]:
        """Number of queries for each OWASP Top 10 entry."""
        return dict(
            Counter(
                m.owasp_top_10
                for m in self._queries.values()
                if m.owasp_top_10 is not None
            )
        )

    def sans_top_25_queries(self) -> list[QueryMetadata]:
        return [m for m in self._queries.values() if m.sans_top_25]

    def stats(self) -> QueryRegistryStats:
        queries = self._queries.values()
        unique_cwes = {cwe for m in queries for cwe in m.cwes}
        return QueryRegistryStats(
            total_queries=len(self._queries),
            unique_cwes=len(unique_cwes),
            owasp_queries=sum(1 for m in queries if m.owasp_top_10 is not None),
            sans_queries=sum(1 for m in queries if m.sans_top_25),
            taint_queries=sum(1 for m in queries if m.uses_taint),
            path_sensitive_queries=sum(1 for m in queries if m.path_sensitive),
            default_suite=len(self._by_suite.get(QuerySuite.DEFAULT, [])),
            security_extended=len(self._by_suite.get(QuerySuite.SECURITY_EXTENDED, [])),
            security_and_quality=len(
                self._by_suite.get(QuerySuite.SECURITY_AND_QUALITY, [])
            ),
        )