import logging
import sys

from mcp.server.fastmcp import FastMCP
from config import ServerConfig
from core.formatter import format_sql, minify_sql
from core.highlighter import format_sql_with_highlighting
from core.verifier import FormatVerifier
from utils.formatting import format_json_response, create_side_by_side

config = ServerConfig.from_env()

# stdout carries the MCP protocol, so logs go to stderr
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP(config.server_name)

verifier = FormatVerifier(default_dialect=config.dialect)


@mcp.tool()
def format_query(sql: str, highlight: bool = False) -> str:
    """
    Formats a SQL query for display, one clause per line with nested queries indented.

    Args:
        sql: The SQL query to format.
        highlight: Wrap keywords, functions and literals in HTML <span> tags.
    """
    if not sql or not sql.strip():
        return format_json_response({"error": "No SQL provided."})

    formatted = format_sql_with_highlighting(sql) if highlight else format_sql(sql)
    logger.info("Formatted query (%d chars, highlight=%s)", len(sql), highlight)

    response = {
        "formatted": formatted,
        "highlighted": highlight,
        "line_count": len(formatted.splitlines()),
    }
    return format_json_response(response)


@mcp.tool()
def minify_query(sql: str) -> str:
    """
    Collapses a SQL query onto a single line.

    Args:
        sql: The SQL query to minify.
    """
    if not sql or not sql.strip():
        return format_json_response({"error": "No SQL provided."})

    minified = minify_sql(sql)
    response = {
        "minified": minified,
        "original_length": len(sql),
        "minified_length": len(minified),
        "saved_chars": len(sql) - len(minified),
    }
    return format_json_response(response)


@mcp.tool()
def verify_formatting(sql: str, dialect: str = "") -> str:
    """
    Checks that formatting a query for display leaves its meaning unchanged.

    Args:
        sql: The SQL query to format and verify.
        dialect: The SQL dialect (postgres, mysql, oracle, tsql, bigquery, auto).
            Empty uses the server's configured default.
    """
    formatted = format_sql(sql)
    result = verifier.verify(sql, formatted, dialect or None)
    if "error" in result:
        logger.warning("Verification failed: %s", result["error"])
        return format_json_response(result)

    if not result["equivalent"]:
        logger.warning("Formatting changed the parsed query (dialect=%s)", result["dialect"])

    result["comparison"] = create_side_by_side(sql, formatted)
    return format_json_response(result)


if __name__ == "__main__":
    logger.info("SQL formatter MCP server '%s' running on stdio...", config.server_name)
    mcp.run()
