"""Built-in security queries covering common OWASP Top 10 weaknesses."""

from __future__ import annotations

from kodecd.query_ast import (
    Comparison,
    ComparisonOp,
    EntityType,
    FromClause,
    MethodName,
    PropertyAccess,
    Query,
    SelectBoth,
    SelectClause,
    StringLiteral,
    Variable,
    WhereClause,
)

__all__ = [
    "owasp_queries",
    "sql_injection_query",
    "command_injection_query",
    "xss_query",
    "path_traversal_query",
    "hardcoded_secrets_query",
    "insecure_deserialization_query",
    "xxe_query",
    "ssrf_query",
    "weak_crypto_query",
    "ldap_injection_query",
    "unsafe_redirect_query",
    "template_injection_query",
]


def _method_name_query(value: str, message: str) -> Query:
    return Query(
        FromClause(EntityType.METHOD_CALL, "mc"),
        WhereClause([MethodName("mc", ComparisonOp.EQUAL, value)]),
        SelectClause([SelectBoth("mc", message)]),
    )


def _property_matches_query(
    entity: EntityType, variable: str, prop: str, pattern: str, message: str
) -> Query:
    return Query(
        FromClause(entity, variable),
        WhereClause(
            [
                Comparison(
                    PropertyAccess(Variable(variable), prop),
                    ComparisonOp.MATCHES,
                    StringLiteral(pattern),
                )
            ]
        ),
        SelectClause([SelectBoth(variable, message)]),
    )


def _callee_matches_query(pattern: str, message: str) -> Query:
    return _property_matches_query(
        EntityType.CALL_EXPRESSION, "call", "callee", pattern, message
    )


def sql_injection_query() -> Query:
    """Method calls named ``execute``."""
    return _method_name_query("execute", "Potential SQL injection vulnerability")


def command_injection_query() -> Query:
    """Method calls named ``exec``."""
    return _method_name_query("exec", "Potential command injection vulnerability")


def xss_query() -> Query:
    """Member expressions that manipulate raw HTML."""
    return _property_matches_query(
        EntityType.MEMBER_EXPRESSION,
        "member",
        "property",
        "(?i)(innerHTML|outerHTML|insertAdjacentHTML)",
        "Potential XSS vulnerability - dangerous HTML manipulation",
    )


def path_traversal_query() -> Query:
    """File operations that may reach arbitrary paths."""
    return _callee_matches_query(
        "readFile|writeFile|open|require|import|fs\\.",
        "Potential path traversal - file operation may access arbitrary files",
    )


def hardcoded_secrets_query() -> Query:
    """Variable declarations whose names suggest sensitive data."""
    return _property_matches_query(
        EntityType.VARIABLE_DECLARATION,
        "vd",
        "name",
        "(?i)(password|passwd|pwd|secret|api[_-]?key|apikey|token|auth|credential|private[_-]?key)",
        "Potential hardcoded secret - sensitive data should not be in source code",
    )


def insecure_deserialization_query() -> Query:
    """Calls to unsafe deserialization functions."""
    return _callee_matches_query(
        "(?i)(pickle\\.loads|yaml\\.unsafe_load|unserialize|eval|deserialize|fromJson|readObject)",
        "Insecure deserialization - untrusted data deserialization can lead to RCE",
    )


def xxe_query() -> Query:
    """Calls to XML parsers that may expand external entities."""
    return _callee_matches_query(
        "(?i)(parseXml|parse|xml\\.parse|XMLParser|DocumentBuilder)",
        "Potential XXE vulnerability - XML parser may be vulnerable to entity expansion attacks",
    )


def ssrf_query() -> Query:
    """Outgoing HTTP requests."""
    return _callee_matches_query(
        "(?i)(fetch|axios|request|http\\.get|http\\.post|urllib|requests\\.get|curl)",
        "Potential SSRF - HTTP request with user-controlled URL can access internal resources",
    )


def weak_crypto_query() -> Query:
    """Uses of weak or deprecated cryptographic primitives."""
    return _callee_matches_query(
        "(?i)(createHash|createCipher|md5|sha1|des|rc4|ecb|cbc)",
        "Weak cryptography - using deprecated or weak cryptographic algorithms",
    )


def ldap_injection_query() -> Query:
    """Calls that run LDAP searches."""
    return _callee_matches_query(
        "(?i)(ldap\\.search|searchLdap|LdapContext)",
        "Potential LDAP injection - unsanitized input in LDAP queries",
    )


def unsafe_redirect_query() -> Query:
    """Calls that redirect the client."""
    return _callee_matches_query(
        "(?i)(redirect|sendRedirect|setHeader.*Location)",
        "Unvalidated redirect - user-controlled redirect can lead to phishing",
    )


def template_injection_query() -> Query:
    """Calls that render or compile templates."""
    return _callee_matches_query(
        "(?i)(render|compile|template\\.render|ejs\\.render|pug\\.render|handlebars)",
        "Potential template injection - user input in templates can lead to RCE",
    )


def owasp_queries() -> list[tuple[str, Query]]:
    """All built-in queries, as ``(rule id, query)`` pairs in a fixed order."""
    return [
        ("sql-injection", sql_injection_query()),
        ("command-injection", command_injection_query()),
        ("xss", xss_query()),
        ("path-traversal", path_traversal_query()),
        ("hardcoded-secrets", hardcoded_secrets_query()),
        ("insecure-deserialization", insecure_deserialization_query()),
        ("xxe", xxe_query()),
        ("ssrf", ssrf_query()),
        ("weak-crypto", weak_crypto_query()),
        ("ldap-injection", ldap_injection_query()),
        ("unsafe-redirect", unsafe_redirect_query()),
        ("server-side-template-injection", template_injection_query()),
    ]