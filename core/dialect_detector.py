import re
from typing import List, Tuple

# (dialect, marker) pairs checked in order; the first hit wins.
DIALECT_MARKERS: List[Tuple[str, re.Pattern]] = [
    ("oracle", re.compile(r"\b(NVL|ROWNUM|SYSDATE|CONNECT\s+BY)\b", re.IGNORECASE)),
    ("tsql", re.compile(r"\bSELECT\s+(DISTINCT\s+)?TOP\s+\d+|\bGETDATE\s*\(|\[[A-Za-z_]\w*\]", re.IGNORECASE)),
    ("bigquery", re.compile(r"`[\w-]+\.[\w-]+\.[\w-]+`|\bSAFE_CAST\s*\(", re.IGNORECASE)),
    ("mysql", re.compile(r"`|\bIFNULL\s*\(", re.IGNORECASE)),
]


def detect_dialect(sql: str) -> str:
    """
    Guesses the sqlglot dialect of a query from vendor-specific keywords and
    quoting. Falls back to 'postgres', which reads most standard SQL.
    """
    if not sql or not isinstance(sql, str):
        return "postgres"

    for dialect, marker in DIALECT_MARKERS:
        if marker.search(sql):
            return dialect
    return "postgres"
