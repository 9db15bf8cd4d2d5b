#!/usr/bin/env python3
import locale

import pytest

from svgpath_errors import (
    ExponentNotSupported,
    InvalidFlag,
    MalformedNumber,
    MissingSeparator,
)
from svgpath_scanner import NumberLexer, Scanner


def lexer(text):
    return NumberLexer(Scanner(text))


class TestScanner:
    def test_cursor_primitives(self):
        s = Scanner("ab")
        assert not s.done()
        assert s.peek() == "a"
        assert s.match("a")
        assert not s.match("b")
        assert s.consume() == "a"
        assert s.consume() == "b"
        assert s.done()
        assert not s.match("b")

    def test_reading_past_end_is_a_programming_error(self):
        s = Scanner("")
        with pytest.raises(IndexError):
            s.peek()
        with pytest.raises(IndexError):
            s.consume()

    def test_match_helpers(self):
        assert Scanner("\t").match_whitespace()
        assert Scanner(",").match_comma_whitespace()
        assert Scanner("-").match_number()
        assert Scanner("+").match_number()
        assert Scanner("7").match_number()
        assert not Scanner(".5").match_number()
        assert not Scanner("").match_number()


class TestNumberLexer:
    @pytest.mark.parametrize("text, expected", [
        ("0", 0.0),
        ("42", 42.0),
        ("-12.5", -12.5),
        ("+3", 3.0),
        ("7.", 7.0),
        ("3.25", 3.25),
    ])
    def test_numbers(self, text, expected):
        assert lexer(text).parse_number() == expected

    def test_sign_delimits_numbers(self):
        lx = lexer("10-5")
        assert lx.parse_number() == 10
        assert lx.parse_number() == -5
        assert lx.scanner.done()

    def test_number_stops_at_second_decimal_point(self):
        lx = lexer("1.5.5")
        assert lx.parse_number() == 1.5
        with pytest.raises(MalformedNumber):
            lx.parse_number()

    @pytest.mark.parametrize("text", [".5", "-.5", "-", "x", ""])
    def test_leading_digit_required(self, text):
        with pytest.raises(MalformedNumber):
            lexer(text).parse_number()

    def test_exponent_rejected(self):
        with pytest.raises(ExponentNotSupported) as excinfo:
            lexer("1e5").parse_number()
        assert isinstance(excinfo.value, MalformedNumber)
        assert excinfo.value.position == 1

    def test_overflowing_number_rejected(self):
        with pytest.raises(MalformedNumber) as excinfo:
            lexer("-" + "9" * 400).parse_number()
        assert excinfo.value.position == 1

    def test_large_finite_number(self):
        assert lexer("9" * 300).parse_number() == float("9" * 300)

    def test_decimal_point_ignores_locale(self):
        saved = locale.setlocale(locale.LC_NUMERIC)
        for name in ("de_DE.UTF-8", "de_DE.utf8", "fr_FR.UTF-8", "fr_FR.utf8", "nl_NL.UTF-8"):
            try:
                locale.setlocale(locale.LC_NUMERIC, name)
                break
            except locale.Error:
                continue
        else:
            pytest.skip("no comma-decimal locale installed")
        try:
            assert locale.localeconv()["decimal_point"] == ","
            assert lexer("3.25").parse_number() == 3.25
            assert lexer("3,25").parse_number() == 3
        finally:
            locale.setlocale(locale.LC_NUMERIC, saved)

    def test_flags(self):
        assert lexer("0").parse_flag() == 0
        assert lexer("1").parse_flag() == 1
        with pytest.raises(InvalidFlag):
            lexer("2").parse_flag()
        with pytest.raises(InvalidFlag):
            lexer("0.5").parse_flag()

    @pytest.mark.parametrize("text", [",7", ", 7", " 7", "  ,  7", "\n,\t7"])
    def test_comma_whitespace(self, text):
        lx = lexer(text)
        lx.parse_comma_whitespace()
        assert lx.scanner.peek() == "7"

    def test_comma_whitespace_requires_something(self):
        with pytest.raises(MissingSeparator):
            lexer("7").parse_comma_whitespace()

    def test_optional_comma_whitespace(self):
        lx = lexer("7")
        lx.parse_optional_comma_whitespace()
        assert lx.scanner.position == 0
