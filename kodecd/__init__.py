"""Static security analysis building blocks: KQL queries, built-in rules, metadata and reports."""

__version__ = "0.1.0"

__all__ = [
    "analysis",
    "metadata",
    "parser",
    "query_ast",
    "report",
    "stdlib",
]