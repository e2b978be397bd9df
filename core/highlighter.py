import re
from typing import Any

from core.formatter import format_sql

KEYWORDS = [
    "SELECT", "FROM", "WHERE", "JOIN", "INNER", "LEFT", "RIGHT", "FULL", "OUTER",
    r"GROUP\s+BY", r"ORDER\s+BY", "HAVING", "WITH", "AS", "AND", "OR", "UNION",
    "ALL", "ON",
]
FUNCTIONS = [
    "COUNT", "SUM", "AVG", "MIN", "MAX", "CASE", "WHEN", "THEN", "ELSE", "END",
    "CAST", "EXTRACT", "COALESCE",
]

# Quoted text comes first in the alternation so nothing inside it is wrapped.
TOKEN = re.compile(
    r"(?P<string>'(?:[^']|'')*')"
    r"|(?P<identifier>\"(?:[^\"]|\"\")*\"|`[^`]*`)"
    r"|\b(?P<keyword>" + "|".join(KEYWORDS) + r")\b"
    r"|\b(?P<function>" + "|".join(FUNCTIONS) + r")\b"
    r"|\b(?P<number>\d+(?:\.\d+)?)\b",
    re.IGNORECASE,
)

SPAN_CLASSES = {
    "string": "sql-string",
    "keyword": "sql-keyword",
    "function": "sql-function",
    "number": "sql-number",
}


def _wrap(match: re.Match) -> str:
    kind = match.lastgroup
    if kind == "identifier":
        return match.group(0)
    return f'<span class="{SPAN_CLASSES[kind]}">{match.group(kind)}</span>'


def format_sql_with_highlighting(sql: Any) -> Any:
    """
    Formats SQL and wraps keywords, functions, string and number literals in
    `<span class="sql-...">` markup.

    The SQL text itself is not HTML-escaped. Anything that renders the result
    as HTML has to treat it as untrusted.
    """
    formatted = format_sql(sql)
    if not formatted or not isinstance(formatted, str):
        return formatted
    return TOKEN.sub(_wrap, formatted)
