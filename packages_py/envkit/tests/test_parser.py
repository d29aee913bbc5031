"""
Tests for dotenv text parsing and serialization.
"""
import pytest
from envkit import parse_env_text, serialize_env


class TestParseEnvText:
    def test_basic_pairs(self):
        assert parse_env_text("A=1\nB=2") == {"A": "1", "B": "2"}

    def test_skips_comments_and_blank_lines(self):
        text = "# header\n\n   \nA=1\n  # indented comment\nB=2\n"
        assert parse_env_text(text) == {"A": "1", "B": "2"}

    def test_splits_on_first_equals_only(self):
        assert parse_env_text("URL=postgres://u:p@h/db?x=1&y=2") == {
            "URL": "postgres://u:p@h/db?x=1&y=2"
        }

    def test_malformed_lines_are_skipped(self):
        text = "NOT_A_PAIR\n=novalue\nGOOD=yes"
        assert parse_env_text(text) == {"GOOD": "yes"}

    def test_trims_key_and_value(self):
        assert parse_env_text("  KEY  =   value  ") == {"KEY": "value"}

    def test_strips_one_layer_of_matching_quotes(self):
        text = "D=\"double\"\nS='single'\nN=\"'nested'\""
        assert parse_env_text(text) == {"D": "double", "S": "single", "N": "'nested'"}

    def test_mismatched_quotes_are_kept(self):
        assert parse_env_text("A=\"open'") == {"A": "\"open'"}
        assert parse_env_text("B=\"") == {"B": "\""}

    def test_quoted_value_keeps_inner_spaces(self):
        assert parse_env_text('A="  padded  "') == {"A": "  padded  "}

    def test_empty_value(self):
        assert parse_env_text("EMPTY=\nQUOTED=\"\"") == {"EMPTY": "", "QUOTED": ""}

    def test_last_occurrence_wins(self):
        assert parse_env_text("A=first\nA=second") == {"A": "second"}

    def test_crlf_line_endings(self):
        assert parse_env_text("A=1\r\nB=2\r\n") == {"A": "1", "B": "2"}

    def test_no_escape_processing(self):
        assert parse_env_text(r'A="line\nbreak"') == {"A": r"line\nbreak"}

    def test_hash_inside_value_is_kept(self):
        assert parse_env_text("COLOR=#ff0000") == {"COLOR": "#ff0000"}

    @pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_only_newline_ends_a_line(self, separator):
        text = f"A=x{separator}EVIL=1\n"
        assert parse_env_text(text) == {"A": f"x{separator}EVIL=1"}


class TestSerializeEnv:
    def test_key_value_lines_in_order(self):
        assert serialize_env({"B": "2", "A": "1"}) == "B=2\nA=1\n"

    def test_empty_mapping(self):
        assert serialize_env({}) == ""

    def test_values_written_verbatim(self):
        assert serialize_env({"A": "has spaces", "B": "x=y"}) == "A=has spaces\nB=x=y\n"

    def test_round_trip(self):
        values = {"API_KEY": "abc123", "URL": "http://h/p?a=b", "EMPTY": "", "PORT": "8080"}
        assert parse_env_text(serialize_env(values)) == values

    def test_round_trip_with_unicode_separators(self):
        values = {"A": "x\u2028EVIL=1", "B": "tab\x0bbed"}
        assert parse_env_text(serialize_env(values)) == values

    def test_round_trip_is_lossy_for_padded_values(self):
        # Values needing quotes are not re-quoted on write
        assert parse_env_text(serialize_env({"A": " padded "})) == {"A": "padded"}
