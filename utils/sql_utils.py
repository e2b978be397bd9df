from sqlglot import exp


def get_tables(expression: exp.Expression) -> list[str]:
    """Extracts the distinct table names from a sqlglot expression, in order of appearance."""
    names = []
    for table in expression.find_all(exp.Table):
        if table.name and table.name not in names:
            names.append(table.name)
    return names


def get_columns(expression: exp.Expression) -> list[str]:
    """Extracts all column names from a sqlglot expression."""
    return [c.name for c in expression.find_all(exp.Column)]


def normalize(expression: exp.Expression, dialect: str) -> str:
    """Renders an expression as single-line SQL so two parses can be compared."""
    return expression.sql(dialect=dialect, normalize=True)
