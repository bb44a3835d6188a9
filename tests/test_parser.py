"""Tests for loadspec/parser.py"""

import unittest

from conftest import FETCH, slowlog_line
from loadspec.parser import SLOWLOG_PATTERN, MalformedLineError, SlowlogFields, match_line

SPEC_LINE = (
    '[2020-01-01 10:00:00,000][INFO ][index.search.slowlog.query] [host1] [myindex] [] '
    'took[1ms], took_millis[1], types[mytype], stats[], search_type[QUERY_THEN_FETCH], '
    'total_shards[1], source[{"query":{"match_all":{}}}], extra_source[]'
)


class TestSlowlogPattern(unittest.TestCase):
    """Verify the compiled regex against the slowlog layout."""

    def test_matches_query_line(self):
        self.assertIsNotNone(SLOWLOG_PATTERN.search(SPEC_LINE))

    def test_no_match_on_empty(self):
        self.assertIsNone(SLOWLOG_PATTERN.search(""))

    def test_no_match_on_plain_text(self):
        self.assertIsNone(SLOWLOG_PATTERN.search("just some random text"))

    def test_named_groups(self):
        m = SLOWLOG_PATTERN.search(SPEC_LINE)
        self.assertEqual(m.group("timestamp"), "2020-01-01 10:00:00,000")
        self.assertEqual(m.group("log_type"), "index.search.slowlog.query")
        self.assertEqual(m.group("host"), "host1")
        self.assertEqual(m.group("index"), "myindex")


class TestMatchLine(unittest.TestCase):
    """Verify match_line extracts every field or raises."""

    def test_all_fields(self):
        fields = match_line(SPEC_LINE)
        self.assertEqual(fields, SlowlogFields(
            timestamp="2020-01-01 10:00:00,000",
            log_type="index.search.slowlog.query",
            host="host1",
            index="myindex",
            types="mytype",
            search_type="QUERY_THEN_FETCH",
            source='{"query":{"match_all":{}}}',
        ))

    def test_strips_trailing_newline(self):
        fields = match_line(SPEC_LINE + "\r\n")
        self.assertEqual(fields.source, '{"query":{"match_all":{}}}')

    def test_shard_id_in_ignored_field(self):
        line = SPEC_LINE.replace("[myindex] []", "[myindex] [3]")
        fields = match_line(line)
        self.assertEqual(fields.index, "myindex")
        self.assertEqual(fields.types, "mytype")

    def test_fetch_line_still_matches(self):
        fields = match_line(slowlog_line(log_type=FETCH))
        self.assertEqual(fields.log_type, FETCH)

    def test_source_with_brackets_and_commas(self):
        source = '{"query":{"terms":{"tag":["a","b"]}},"size":5}'
        fields = match_line(slowlog_line(source=source))
        self.assertEqual(fields.source, source)

    def test_missing_source_raises(self):
        line = SPEC_LINE.replace('source[{"query":{"match_all":{}}}], ', "")
        with self.assertRaises(MalformedLineError) as ctx:
            match_line(line)
        self.assertEqual(ctx.exception.line, line)
        self.assertIsNone(ctx.exception.line_number)

    def test_empty_line_raises(self):
        with self.assertRaises(MalformedLineError):
            match_line("\n")

    def test_garbage_raises(self):
        with self.assertRaises(MalformedLineError):
            match_line("not a slowlog line at all")

    def test_empty_search_type_does_not_match(self):
        with self.assertRaises(MalformedLineError):
            match_line(slowlog_line(search_type=""))


class TestSlowlogFieldsFrozen(unittest.TestCase):
    """Each line gets its own immutable field record."""

    def test_cannot_mutate(self):
        fields = match_line(SPEC_LINE)
        with self.assertRaises(AttributeError):
            fields.host = "other"

    def test_fresh_record_per_line(self):
        first = match_line(slowlog_line(host="a"))
        second = match_line(slowlog_line(host="b"))
        self.assertIsNot(first, second)
        self.assertEqual(first.host, "a")


if __name__ == "__main__":
    unittest.main()
