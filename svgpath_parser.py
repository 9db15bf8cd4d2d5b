#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Recursive-descent parser for SVG path data (the d attribute of <path>).

Commands are described by a dispatch table instead of one routine per letter.
Each entry gives the instruction type, the shape of one argument group and how
the command repeats when its letter is not written again:

    sequence  every coordinate (pair) becomes its own instruction  (M L H V)
    grouped   every fixed-size group becomes one instruction       (C S Q T A)
    single    no arguments                                          (Z)

Both repeating strategies accept an optional comma-wsp between repetitions,
so "M0,0 L5,5,10,10" gives one Move and two Line instructions.
"""

import enum
import logging
from collections import namedtuple

from svgpath_errors import InvalidLeadingInstruction, UnknownCommand
from svgpath_instructions import Instruction, InstructionType
from svgpath_scanner import NumberLexer, Scanner

logger = logging.getLogger(__name__)


class Arg(enum.Enum):
    NUMBER = 'number'
    FLAG = 'flag'
    # A comma/whitespace that must be present (before the arc flags).
    SEPARATOR = 'separator'


class Repeat(enum.Enum):
    SINGLE = 'single'
    SEQUENCE = 'sequence'
    GROUPED = 'grouped'


CommandSpec = namedtuple('CommandSpec', ['type', 'shape', 'repeat'])

_N = Arg.NUMBER
_PAIR = (_N, _N)

COMMANDS = {
    'M': CommandSpec(InstructionType.Move, _PAIR, Repeat.SEQUENCE),
    'Z': CommandSpec(InstructionType.ClosePath, (), Repeat.SINGLE),
    'L': CommandSpec(InstructionType.Line, _PAIR, Repeat.SEQUENCE),
    'H': CommandSpec(InstructionType.HorizontalLine, (_N,), Repeat.SEQUENCE),
    'V': CommandSpec(InstructionType.VerticalLine, (_N,), Repeat.SEQUENCE),
    'C': CommandSpec(InstructionType.Curve, _PAIR * 3, Repeat.GROUPED),
    'S': CommandSpec(InstructionType.SmoothCurve, _PAIR * 2, Repeat.GROUPED),
    'Q': CommandSpec(InstructionType.QuadraticBezierCurve, _PAIR * 2, Repeat.GROUPED),
    'T': CommandSpec(InstructionType.SmoothQuadraticBezierCurve, _PAIR, Repeat.GROUPED),
    'A': CommandSpec(InstructionType.EllipticalArc,
                     (_N, _N, _N, Arg.SEPARATOR, Arg.FLAG, Arg.FLAG, _N, _N),
                     Repeat.GROUPED),
}


class PathDataParser:
    def __init__(self, source):
        self.scanner = Scanner(source)
        self.lexer = NumberLexer(self.scanner)
        self.instructions = []

    def parse(self):
        self.lexer.parse_whitespace()
        while not self.scanner.done():
            self.parse_drawto()
            self.lexer.parse_whitespace()

        if self.instructions and self.instructions[0].type is not InstructionType.Move:
            raise InvalidLeadingInstruction(
                "path data must begin with a moveto, not {}".format(self.instructions[0].letter))
        logger.debug("Parsed %d path instructions", len(self.instructions))
        return tuple(self.instructions)

    def parse_drawto(self):
        position = self.scanner.position
        letter = self.scanner.consume()
        entry = COMMANDS.get(letter.upper())
        if entry is None:
            raise UnknownCommand("unknown path command {!r}".format(letter), position)
        absolute = letter.isupper()

        if entry.repeat is Repeat.SINGLE:
            self._append(entry, absolute, ())
            return

        self.lexer.parse_whitespace()
        while True:
            self._append(entry, absolute, self.parse_group(entry.shape))
            self.lexer.parse_optional_comma_whitespace()
            if not self.scanner.match_number():
                break

    def parse_group(self, shape):
        values = []
        for index, arg in enumerate(shape):
            if arg is Arg.SEPARATOR:
                self.lexer.parse_comma_whitespace()
                continue
            if index > 0 and shape[index - 1] is not Arg.SEPARATOR:
                self.lexer.parse_optional_comma_whitespace()
            if arg is Arg.FLAG:
                values.append(self.lexer.parse_flag())
            else:
                values.append(self.lexer.parse_number())
        return tuple(values)

    def _append(self, entry, absolute, data):
        self.instructions.append(Instruction(entry.type, absolute, data))


def parse_path_data(source):
    """Parse path data into an immutable tuple of Instructions.

    Raises a PathSyntaxError subclass on malformed input; nothing partial is
    returned.
    """
    return PathDataParser(source).parse()
