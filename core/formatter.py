import re
from typing import Any, Callable, List, Tuple

INDENT = "    "

# Lines starting with one of these get a single indent unit at the top level.
INDENT_KEYWORDS = re.compile(r"^(ON|AND|OR|WHEN|THEN|ELSE)\b", re.IGNORECASE)
WITH_KEYWORD = re.compile(r"\bWITH\b", re.IGNORECASE)

CTE_NAME = re.compile(r",\s*(\w+)\s+AS\s*\(", re.IGNORECASE)
CASE_KEYWORD = re.compile(r"\bCASE\b", re.IGNORECASE)
SUBQUERY_OPEN = re.compile(r"\(\s*(SELECT)\b", re.IGNORECASE)
CLAUSE_AFTER_PAREN = re.compile(
    r"\)\s*(FROM|WHERE|GROUP\s+BY|ORDER\s+BY|HAVING|UNION)\b", re.IGNORECASE
)
BETWEEN_TAIL = re.compile(r"\bBETWEEN\s+\S+\s*$", re.IGNORECASE)
SELECT_LINE = re.compile(r"^(\s*)(SELECT)(\s+DISTINCT)?\s+(.+)$", re.IGNORECASE)
BLANK_RUNS = re.compile(r"\n\s*\n\s*\n")
# String literals plus double-quoted and backtick identifiers.
QUOTED = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|`[^`]*`")

# BETWEEN's lower bound is looked for only this far back from an AND.
BETWEEN_WINDOW = 200


def _sentinel(text: str) -> str:
    """Picks a placeholder delimiter that does not occur in `text`."""
    if "\x00" not in text:
        return "\x00"
    code = 0xE000  # private use area
    while chr(code) in text:
        code += 1
    return chr(code)


def mask_literals(text: str) -> Tuple[str, List[str], str]:
    """Swaps quoted literals and identifiers for placeholders so no pass rewrites their contents."""
    literals: List[str] = []
    marker = _sentinel(text)

    def stash(m: re.Match) -> str:
        literals.append(m.group(0))
        return f"{marker}{len(literals) - 1}{marker}"

    return QUOTED.sub(stash, text), literals, marker


def unmask_literals(text: str, literals: List[str], marker: str) -> str:
    slot = re.compile(re.escape(marker) + r"(\d+)" + re.escape(marker))
    return slot.sub(lambda m: literals[int(m.group(1))], text)


def _canonical(keyword: str) -> str:
    return " ".join(keyword.upper().split())


def _line_break(pattern: str, indent: str = "") -> Callable[[str], str]:
    """
    Builds a pass that puts every match of `pattern` at the start of a new line.
    The whitespace in front of the keyword is consumed, so reapplying the pass
    to text that is already broken leaves it unchanged.
    """
    regex = re.compile(r"\s*\b(" + pattern + r")\b", re.IGNORECASE)

    def rewrite(text: str) -> str:
        return regex.sub(lambda m: "\n" + indent + _canonical(m.group(1)), text)

    return rewrite


break_with = _line_break(r"WITH")
break_case = _line_break(r"CASE")
break_when = _line_break(r"WHEN", INDENT)
break_else = _line_break(r"ELSE", INDENT)
break_end = _line_break(r"END")
break_join = _line_break(r"(?:(?:INNER|CROSS|(?:LEFT|RIGHT|FULL)(?:\s+OUTER)?)\s+)?JOIN")
break_on = _line_break(r"ON", INDENT)
break_clauses = _line_break(
    r"UNION\s+ALL|UNION|GROUP\s+BY|ORDER\s+BY|SELECT|FROM|WHERE|HAVING"
)

_CONDITION = re.compile(r"\s*\b(AND|OR)\b", re.IGNORECASE)


def break_conditions(text: str) -> str:
    def rewrite(m: re.Match) -> str:
        keyword = m.group(1).upper()
        start = max(0, m.start() - BETWEEN_WINDOW)
        if keyword == "AND" and BETWEEN_TAIL.search(m.string[start:m.start()]):
            return m.group(0)
        return "\n" + INDENT + keyword

    return _CONDITION.sub(rewrite, text)


def break_ctes(text: str) -> str:
    return CTE_NAME.sub(lambda m: ",\n" + m.group(1) + " AS (", text)


def break_case_blocks(text: str) -> str:
    if not CASE_KEYWORD.search(text):
        return text
    for rewrite in (break_case, break_when, break_else, break_end):
        text = rewrite(text)
    return text


def break_subqueries(text: str) -> str:
    """
    Opens `(SELECT` onto a new line and moves the parenthesis closing that
    subquery to the start of its own line.
    """
    text = SUBQUERY_OPEN.sub(lambda m: "(\n" + m.group(1).upper(), text)

    out: List[str] = []
    opened: List[bool] = []
    in_string = False
    for i, ch in enumerate(text):
        if ch == "'":
            in_string = not in_string
        elif not in_string and ch == "(":
            opened.append(text.startswith("\n", i + 1))
        elif not in_string and ch == ")" and opened:
            if opened.pop():
                while out and out[-1] == " ":
                    out.pop()
                out.append("\n")
        out.append(ch)
    return "".join(out)


def break_after_paren(text: str) -> str:
    return CLAUSE_AFTER_PAREN.sub(lambda m: ")\n" + _canonical(m.group(1)), text)


def split_columns(columns: str) -> List[str]:
    """Splits a column list on commas outside parentheses and string literals."""
    parts: List[str] = []
    depth = 0
    in_string = False
    current = []
    for ch in columns:
        if ch == "'":
            in_string = not in_string
        elif not in_string:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth = max(0, depth - 1)
            elif ch == "," and depth == 0:
                parts.append("".join(current).strip())
                current = []
                continue
        current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def expand_select_columns(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        match = SELECT_LINE.match(line)
        if match:
            lead, keyword, distinct, columns = match.groups()
            column_list = split_columns(columns)
            if len(column_list) > 1:
                head = lead + keyword.upper() + (" DISTINCT" if distinct else "")
                body = [lead + INDENT + col for col in column_list]
                lines.append(head + "\n" + ",\n".join(body))
                continue
        lines.append(line)
    return "\n".join(lines)


REWRITE_PASSES = [
    break_with,
    break_ctes,
    break_case_blocks,
    break_subqueries,
    break_after_paren,
    break_join,
    break_on,
    break_conditions,
    break_clauses,
    expand_select_columns,
]


def indent_lines(text: str) -> str:
    indent_level = 0
    lines = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            lines.append("")
            continue

        if line.startswith(")"):
            indent_level = max(0, indent_level - 1)

        own_indent = raw[: len(raw) - len(raw.lstrip())]
        if indent_level == 0 and INDENT_KEYWORDS.match(line):
            indented = INDENT + line
        else:
            indented = INDENT * indent_level + own_indent + line

        if line.endswith("(") or WITH_KEYWORD.search(line):
            indent_level += 1

        lines.append(indented)
    return "\n".join(lines)


def format_sql(sql: Any) -> Any:
    """
    Formats SQL for display: clause keywords start new lines, subqueries and
    CTE bodies are indented, multi-column SELECT lists get one column per line.

    This is a heuristic text rewrite, not a parser. Non-string or empty input
    is returned unchanged, and unusual SQL is formatted on a best-effort basis.
    """
    if not sql or not isinstance(sql, str):
        return sql

    formatted, literals, marker = mask_literals(sql)
    formatted = re.sub(r"\s+", " ", formatted).strip()
    for rewrite in REWRITE_PASSES:
        formatted = rewrite(formatted)

    formatted = indent_lines(formatted)
    formatted = BLANK_RUNS.sub("\n\n", formatted)
    return unmask_literals(formatted.strip(), literals, marker)


def minify_sql(sql: Any) -> Any:
    """Collapses SQL onto a single line with normalised comma and paren spacing."""
    if not sql or not isinstance(sql, str):
        return sql

    minified = re.sub(r"\s+", " ", sql)
    minified = re.sub(r"\s*,\s*", ", ", minified)
    minified = re.sub(r"\(\s+", "(", minified)
    minified = re.sub(r"\s+\)", ")", minified)
    return minified.strip()
