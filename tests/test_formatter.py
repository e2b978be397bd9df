import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.formatter import format_sql, minify_sql, split_columns
from core.highlighter import format_sql_with_highlighting


class TestFormatSQL(unittest.TestCase):
    def test_non_string_and_empty_input_returned_unchanged(self):
        for value in (None, 42, "", [], 3.5):
            self.assertIs(format_sql(value), value)
            self.assertIs(minify_sql(value), value)
            self.assertIs(format_sql_with_highlighting(value), value)

    def test_select_columns_and_conditions(self):
        sql = "SELECT a, b FROM t WHERE a = 1 AND b = 2"
        expected = "\n".join([
            "SELECT",
            "    a,",
            "    b",
            "FROM t",
            "WHERE a = 1",
            "    AND b = 2",
        ])
        self.assertEqual(format_sql(sql), expected)

    def test_subquery_is_nested_and_closing_paren_dedents(self):
        formatted = format_sql("SELECT * FROM (SELECT x FROM y) z")
        self.assertEqual(formatted, "SELECT *\nFROM (\n    SELECT x\n    FROM y\n) z")

        lines = formatted.splitlines()
        outer = lines[0]
        inner = next(l for l in lines if l.strip() == "SELECT x")
        indent = lambda line: len(line) - len(line.lstrip())
        self.assertGreater(indent(inner), indent(outer))
        self.assertEqual(lines[-1], ") z")

    def test_conditions_inside_subquery_are_indented_deeper(self):
        sql = "SELECT id FROM t WHERE id IN (SELECT id FROM u WHERE a = 1 AND b = 2)"
        expected = "\n".join([
            "SELECT id",
            "FROM t",
            "WHERE id IN (",
            "    SELECT id",
            "    FROM u",
            "    WHERE a = 1",
            "        AND b = 2",
            ")",
        ])
        self.assertEqual(format_sql(sql), expected)

    def test_join_variants_and_on(self):
        sql = "SELECT a.id FROM a left   join b ON a.id = b.id INNER JOIN c ON c.id = a.id"
        expected = "\n".join([
            "SELECT a.id",
            "FROM a",
            "LEFT JOIN b",
            "    ON a.id = b.id",
            "INNER JOIN c",
            "    ON c.id = a.id",
        ])
        self.assertEqual(format_sql(sql), expected)

    def test_full_outer_join_stays_on_one_line(self):
        formatted = format_sql("SELECT * FROM a FULL OUTER JOIN b ON a.k = b.k")
        self.assertIn("\nFULL OUTER JOIN b\n", formatted)

    def test_case_block(self):
        sql = "SELECT CASE WHEN x > 1 THEN 'big' ELSE 'small' END AS size FROM t"
        expected = "\n".join([
            "SELECT",
            "CASE",
            "    WHEN x > 1 THEN 'big'",
            "    ELSE 'small'",
            "END AS size",
            "FROM t",
        ])
        self.assertEqual(format_sql(sql), expected)

    def test_ctes(self):
        sql = "WITH a AS (SELECT id FROM t), b AS (SELECT id FROM u) SELECT * FROM a"
        expected = "\n".join([
            "WITH a AS (",
            "    SELECT id",
            "    FROM t",
            "),",
            "b AS (",
            "    SELECT id",
            "    FROM u",
            ")",
            "SELECT *",
            "FROM a",
        ])
        self.assertEqual(format_sql(sql), expected)

    def test_between_and_stays_inline(self):
        sql = "SELECT id FROM t WHERE d BETWEEN 1 AND 5 AND x = 2"
        self.assertEqual(
            format_sql(sql),
            "SELECT id\nFROM t\nWHERE d BETWEEN 1 AND 5\n    AND x = 2",
        )

    def test_order_by_is_not_treated_as_or(self):
        self.assertEqual(format_sql("SELECT a FROM t ORDER BY a"), "SELECT a\nFROM t\nORDER BY a")

    def test_union_all(self):
        self.assertEqual(
            format_sql("SELECT a FROM t UNION ALL SELECT a FROM u"),
            "SELECT a\nFROM t\nUNION ALL\nSELECT a\nFROM u",
        )

    def test_select_distinct_keeps_distinct_on_select_line(self):
        self.assertEqual(
            format_sql("select distinct a, b from t"),
            "SELECT DISTINCT\n    a,\n    b\nFROM t",
        )

    def test_commas_inside_function_calls_do_not_split_columns(self):
        self.assertEqual(
            format_sql("SELECT COALESCE(a, 0), b FROM t"),
            "SELECT\n    COALESCE(a, 0),\n    b\nFROM t",
        )

    def test_keywords_uppercased_and_whitespace_collapsed(self):
        self.assertEqual(
            format_sql("select a\n\n\n   from   t\twhere b = 1"),
            "SELECT a\nFROM t\nWHERE b = 1",
        )

    def test_string_literals_are_left_alone(self):
        formatted = format_sql("SELECT id FROM t WHERE note = 'from  here and there'")
        self.assertIn("'from  here and there'", formatted)
        self.assertEqual(len(formatted.splitlines()), 3)

    def test_reformatting_keeps_clause_order(self):
        for sql in (
            "SELECT a, b FROM t WHERE a = 1 AND b = 2",
            "SELECT * FROM (SELECT x FROM y) z",
            "SELECT a FROM t ORDER BY a",
        ):
            once = format_sql(sql)
            self.assertEqual(format_sql(once), once)

    def test_placeholder_lookalikes_in_input_survive(self):
        sql = "SELECT \x007\x00, 'x' FROM t"
        formatted = format_sql(sql)
        self.assertIn("\x007\x00", formatted)
        self.assertIn("'x'", formatted)
        self.assertEqual(format_sql("SELECT \x000\x00 FROM t"), "SELECT \x000\x00\nFROM t")

    def test_quoted_identifiers_are_left_alone(self):
        formatted = format_sql('SELECT "order by", `from` FROM t')
        self.assertEqual(formatted, 'SELECT\n    "order by",\n    `from`\nFROM t')

    def test_long_generated_condition_lists(self):
        conditions = " AND ".join(f"c{i} = {i}" for i in range(3000))
        formatted = format_sql(f"SELECT id FROM t WHERE {conditions} AND d BETWEEN 1 AND 5")
        lines = formatted.splitlines()
        self.assertEqual(len(lines), 2 + 3000 + 1)
        self.assertEqual(lines[-1], "    AND d BETWEEN 1 AND 5")

    def test_malformed_sql_does_not_raise(self):
        for sql in ("))) SELECT", "SELECT ((( FROM", "WHERE AND OR ON", "'unterminated", "   "):
            self.assertIsInstance(format_sql(sql), str)


class TestMinifySQL(unittest.TestCase):
    def test_collapses_whitespace(self):
        self.assertEqual(minify_sql("SELECT   *   FROM t"), "SELECT * FROM t")

    def test_parens_and_commas(self):
        self.assertEqual(minify_sql("foo( a, b )"), "foo(a, b)")
        self.assertEqual(minify_sql("SELECT a ,b,c FROM t"), "SELECT a, b, c FROM t")

    def test_multiline_input(self):
        sql = "SELECT a,\n    b\nFROM t\nWHERE c IN ( 1 , 2 )\n"
        self.assertEqual(minify_sql(sql), "SELECT a, b FROM t WHERE c IN (1, 2)")

    def test_minify_after_format_on_simple_query(self):
        sql = "SELECT a, b FROM t WHERE a = 1 AND b = 2"
        self.assertEqual(minify_sql(format_sql(sql)), minify_sql(sql))

    def test_minify_after_format_with_case_keeps_tokens(self):
        # Byte equality is not promised once CASE/WHEN is involved; only the
        # token sequence is expected to survive.
        sql = "select case when x > 1 then 'big' else 'small' end as size from t"
        round_trip = minify_sql(format_sql(sql))
        self.assertEqual(round_trip.upper().split(), minify_sql(sql).upper().split())


class TestSplitColumns(unittest.TestCase):
    def test_split_respects_parens_and_quotes(self):
        self.assertEqual(
            split_columns("a, COUNT(b, c), 'x,y' AS z"),
            ["a", "COUNT(b, c)", "'x,y' AS z"],
        )


class TestHighlighting(unittest.TestCase):
    def test_keywords_strings_and_numbers_are_wrapped(self):
        html = format_sql_with_highlighting("SELECT name FROM users WHERE status = 'active' AND age > 21")
        self.assertIn('<span class="sql-keyword">SELECT</span>', html)
        self.assertIn('<span class="sql-keyword">FROM</span>', html)
        self.assertIn('<span class="sql-string">\'active\'</span>', html)
        self.assertIn('<span class="sql-number">21</span>', html)

    def test_functions_are_wrapped(self):
        html = format_sql_with_highlighting("SELECT COUNT(*) FROM t")
        self.assertIn('<span class="sql-function">COUNT</span>', html)

    def test_nothing_inside_a_string_literal_is_wrapped(self):
        html = format_sql_with_highlighting("SELECT 'from 42' FROM t")
        self.assertIn('<span class="sql-string">\'from 42\'</span>', html)
        self.assertEqual(html.count('class="sql-keyword"'), 2)
        self.assertNotIn("sql-number", html)

    def test_quoted_identifiers_are_not_wrapped(self):
        html = format_sql_with_highlighting('SELECT "order by" FROM `from`')
        self.assertIn('"order by"', html)
        self.assertIn("`from`", html)
        self.assertEqual(html.count('class="sql-keyword"'), 2)

    def test_identifiers_with_digits_are_not_numbers(self):
        html = format_sql_with_highlighting("SELECT col1 FROM t2")
        self.assertNotIn("sql-number", html)

    def test_sql_is_not_html_escaped(self):
        html = format_sql_with_highlighting("SELECT '<b>' FROM t")
        self.assertIn("'<b>'", html)


if __name__ == '__main__':
    unittest.main()
