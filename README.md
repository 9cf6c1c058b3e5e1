# kodecd

Building blocks for static security analysis, in pure Python with no
third-party dependencies:

- **KQL**, a small query language for describing suspicious code patterns
  (`FROM <entity> AS <var> WHERE <predicate> SELECT <var>, "<message>"`),
  with a parser and a typed syntax tree;
- a library of built-in security queries covering common OWASP Top 10
  weaknesses;
- query metadata with CWE / OWASP / SANS mappings, query suites and a
  registry;
- findings, reports with severity summaries, and helpers that combine the
  results of many files.

## Parsing queries

```python
from kodecd.parser import parse_query, QueryParseError

query = parse_query('''
    FROM CallExpression AS call
    WHERE call.callee MATCHES "(?i)(execute|query)"
      AND NOT call.callee STARTS_WITH "safe"
    SELECT call, "Potential SQL injection"
''')

print(query.from_clause.variable)   # call
print(query)                        # the query written back as one line of KQL

try:
    parse_query("FROM InvalidType AS x SELECT x")
except QueryParseError as err:
    print("invalid query:", err, "at offset", err.offset)
```

Keywords and entity names are case-insensitive. The entities are
`MethodCall`, `FunctionDeclaration`, `VariableDeclaration`, `Assignment`,
`Literal`, `BinaryExpression`, `CallExpression`, `MemberExpression` and
`AnyNode`. Comparison operators are `==` (or `=`), `!=`, `CONTAINS`,
`STARTS_WITH`, `ENDS_WITH` and `MATCHES`; predicates combine with `AND`,
`OR` (lower precedence), `NOT` and parentheses. Operands are strings in
double or single quotes, integers, `true`/`false`, variables, property
access (`mc.callee.name`) and method calls (`mc.getName()`).

A `SELECT` of exactly one variable followed by one message becomes a single
`SelectBoth` item; any other list is kept item by item.

`kodecd.parser.parse_where_clause` parses text holding a single `WHERE`
clause. Both functions raise `QueryParseError` (a `ValueError`) on invalid
input, including trailing text after a complete query.

The syntax tree lives in `kodecd.query_ast`: `Query`, `FromClause`,
`WhereClause`, `SelectClause`, the expressions `Variable`, `StringLiteral`,
`NumberLiteral`, `BooleanLiteral`, `PropertyAccess`, `MethodCall`, the
predicates `Comparison`, `MethodName`, `And`, `Or`, `Not`, and the enums
`EntityType` and `ComparisonOp`. All nodes are frozen dataclasses.

## Built-in queries

```python
from kodecd.stdlib import owasp_queries, ssrf_query

for rule_id, query in owasp_queries():
    print(rule_id, "->", query)
```

The rule ids are `sql-injection`, `command-injection`, `xss`,
`path-traversal`, `hardcoded-secrets`, `insecure-deserialization`, `xxe`,
`ssrf`, `weak-crypto`, `ldap-injection`, `unsafe-redirect` and
`server-side-template-injection`; each also has its own function, such as
`sql_injection_query()` or `ssrf_query()`.

## Query metadata

```python
from kodecd.metadata import (
    QueryCategory, QueryMetadata, QueryRegistry, QuerySeverity, QuerySuite,
)

registry = QueryRegistry()
registry.register(
    QueryMetadata.builder("js/sql-injection", "SQL Injection")
    .category(QueryCategory.INJECTION)
    .severity(QuerySeverity.CRITICAL)
    .cwe(89)
    .owasp("A03:2021 - Injection")
    .sans_top_25()
    .uses_taint()
    .build()
)

print(len(registry.by_cwe(89)))                   # 1
print(len(registry.by_suite(QuerySuite.DEFAULT))) # 1
print(registry.stats())
```

Metadata built without a category falls into `BEST_PRACTICES`; every query
starts in the `DEFAULT` suite with the languages `javascript` and
`typescript`. `QuerySuite.includes()` lists the suites that contain a
suite's queries. The registry also answers `by_category`, `by_severity`,
`owasp_coverage` and `sans_top_25_queries`.

## Findings and reports

```python
import json

from kodecd.report import Finding, Report

report = Report([
    Finding(
        file_path="app.ts",
        line=42,
        column=10,
        message="SQL injection vulnerability",
        severity="Critical",
        code_snippet="database.execute(userInput)",
        category="injection",
        rule_id="sql-injection",
    )
])

print(report.summary.critical)                # 1
print(json.dumps(report.to_dict(), indent=2))
```

The summary counts the severities `Critical`, `High`, `Medium` and `Low`;
findings with any other severity count only towards `total_findings`.

## Results of many files

`kodecd.analysis.FileAnalysisResult` holds the findings of one file, whether
its analysis succeeded and the error if it did not.
`aggregate_findings(results)` merges them, most severe first (Critical,
High, Medium, Low, then anything else), then by file path and line.
`get_statistics(results)` counts total, successful and failed files and the
total number of findings.

## What this package does not do

It has no command-line tool, does not find or parse source files, builds no
control-flow or call graphs, does no taint analysis and does not run queries
against code. Reports are available as Python objects and plain data
(`Report.to_dict()`); it writes no SARIF documents and no formatted console
output.