#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Character scanner and number lexer for SVG path data.

The Scanner is a bare cursor over the text. The NumberLexer sits on top of it
and decodes the numeric part of the grammar:

    number              := sign? fractional_constant
    sign                := '+' | '-'
    fractional_constant := digit+ ('.' digit*)?
    flag                := number equal to 0 or 1

Exponents ('1e5') are recognized only to be rejected. Numbers are converted
with float() on the collected characters, so '.' is the decimal separator no
matter what locale the process runs under.
"""

import math

from svgpath_errors import ExponentNotSupported, InvalidFlag, MalformedNumber, MissingSeparator

WHITESPACE = frozenset('\t\n\x0c\r ')
DIGITS = frozenset('0123456789')
SIGNS = frozenset('+-')


class Scanner:
    def __init__(self, source):
        self.source = source
        self.position = 0

    def done(self):
        return self.position >= len(self.source)

    def peek(self):
        # Callers check done() first; reading past the end is a bug, not bad input.
        if self.done():
            raise IndexError("peek() past end of path data")
        return self.source[self.position]

    def consume(self):
        ch = self.peek()
        self.position += 1
        return ch

    def match(self, ch):
        return not self.done() and self.source[self.position] == ch

    def match_any(self, chars):
        return not self.done() and self.source[self.position] in chars

    def match_whitespace(self):
        return self.match_any(WHITESPACE)

    def match_comma_whitespace(self):
        return self.match_whitespace() or self.match(',')

    def match_number(self):
        return self.match_any(DIGITS) or self.match_any(SIGNS)


class NumberLexer:
    """Decodes numbers, flags and separators from a Scanner."""

    def __init__(self, scanner):
        self.scanner = scanner

    def parse_whitespace(self, required=False):
        matched = False
        while self.scanner.match_whitespace():
            self.scanner.consume()
            matched = True
        if required and not matched:
            raise MissingSeparator("expected whitespace or ','", self.scanner.position)

    def parse_comma_whitespace(self):
        if self.scanner.match(','):
            self.scanner.consume()
            self.parse_whitespace()
        else:
            self.parse_whitespace(required=True)
            if self.scanner.match(','):
                self.scanner.consume()
            self.parse_whitespace()

    def parse_optional_comma_whitespace(self):
        if self.scanner.match_comma_whitespace():
            self.parse_comma_whitespace()

    def _parse_digits(self):
        digits = []
        while self.scanner.match_any(DIGITS):
            digits.append(self.scanner.consume())
        return ''.join(digits)

    def parse_fractional_constant(self):
        start = self.scanner.position
        text = self._parse_digits()
        if not text:
            if self.scanner.done():
                raise MalformedNumber("expected a number, found end of input", start)
            raise MalformedNumber(
                "expected a digit, found {!r}".format(self.scanner.peek()), start)
        if self.scanner.match('.'):
            self.scanner.consume()
            text += '.' + self._parse_digits()
        value = float(text)
        if not math.isfinite(value):
            raise MalformedNumber("number {} is out of range".format(text), start)
        return value

    def parse_number(self):
        negative = False
        if self.scanner.match('-'):
            self.scanner.consume()
            negative = True
        elif self.scanner.match('+'):
            self.scanner.consume()
        value = self.parse_fractional_constant()
        if self.scanner.match('e') or self.scanner.match('E'):
            raise ExponentNotSupported("exponents are not supported", self.scanner.position)
        return -value if negative else value

    def parse_flag(self):
        start = self.scanner.position
        value = self.parse_number()
        if value not in (0, 1):
            raise InvalidFlag("flag must be 0 or 1, got {:g}".format(value), start)
        return value
