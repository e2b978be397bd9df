import logging
from typing import Any, Dict, Iterable, Optional

import sqlglot
from sqlglot.errors import SqlglotError

from core.dialect_detector import detect_dialect
from core.formatter import format_sql
from utils.sql_utils import get_columns, get_tables, normalize

logger = logging.getLogger(__name__)


class FormatVerifier:
    """
    Checks that display formatting did not change what a query means, by
    parsing the raw and the formatted text with sqlglot and comparing the
    normalised renderings.
    """

    def __init__(self, default_dialect: str = "auto"):
        self.default_dialect = default_dialect

    def verify(self, sql: str, formatted: Optional[str] = None, dialect: Optional[str] = None) -> Dict[str, Any]:
        if not sql or not isinstance(sql, str):
            return {"error": "No SQL text to verify."}

        dialect = dialect or self.default_dialect
        if dialect == "auto":
            dialect = detect_dialect(sql)
        if formatted is None:
            formatted = format_sql(sql)

        try:
            sqlglot.Dialect.get_or_raise(dialect)
        except ValueError as e:
            logger.debug("Rejected dialect %r: %s", dialect, e)
            return {"error": f"Unsupported dialect: {str(e)}", "dialect": dialect}

        try:
            original_ast = sqlglot.parse_one(sql, read=dialect)
        except SqlglotError as e:
            logger.debug("Original SQL did not parse as %s: %s", dialect, e)
            return {"error": f"Failed to parse original SQL: {str(e)}", "dialect": dialect}

        try:
            formatted_ast = sqlglot.parse_one(formatted, read=dialect)
        except SqlglotError as e:
            logger.debug("Formatted SQL did not parse as %s: %s", dialect, e)
            return {"error": f"Failed to parse formatted SQL: {str(e)}", "dialect": dialect}

        original_normalized = normalize(original_ast, dialect)
        formatted_normalized = normalize(formatted_ast, dialect)

        return {
            "dialect": dialect,
            "equivalent": original_normalized == formatted_normalized,
            "original_normalized": original_normalized,
            "formatted_normalized": formatted_normalized,
            "tables": get_tables(original_ast),
            "columns": get_columns(original_ast),
        }

    def verify_samples(self, samples: Iterable[str], dialect: Optional[str] = None) -> Dict[str, Any]:
        """Runs verify() over a batch of representative queries and tallies the outcome."""
        results = [self.verify(sql, dialect=dialect) for sql in samples]
        errors = sum(1 for r in results if "error" in r)
        equivalent = sum(1 for r in results if r.get("equivalent"))
        return {
            "total": len(results),
            "equivalent": equivalent,
            "mismatched": len(results) - equivalent - errors,
            "errors": errors,
            "results": results,
        }
