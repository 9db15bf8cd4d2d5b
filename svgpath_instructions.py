#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Decoded path-data instructions.

An Instruction is one command occurrence with its absolute/relative flag and
its raw numbers, before any coordinate is resolved. A parse produces a tuple
of them (the instruction list), which is never modified afterwards.
"""

import enum
from dataclasses import dataclass

import numpy as np


class InstructionType(enum.Enum):
    Move = 'M'
    ClosePath = 'Z'
    Line = 'L'
    HorizontalLine = 'H'
    VerticalLine = 'V'
    Curve = 'C'
    SmoothCurve = 'S'
    QuadraticBezierCurve = 'Q'
    SmoothQuadraticBezierCurve = 'T'
    EllipticalArc = 'A'
    Invalid = '?'

    @property
    def letter(self):
        return self.value


# Number of values carried by one instruction of each type.
DATA_LENGTH = {
    InstructionType.Move: 2,
    InstructionType.ClosePath: 0,
    InstructionType.Line: 2,
    InstructionType.HorizontalLine: 1,
    InstructionType.VerticalLine: 1,
    InstructionType.Curve: 6,
    InstructionType.SmoothCurve: 4,
    InstructionType.QuadraticBezierCurve: 4,
    InstructionType.SmoothQuadraticBezierCurve: 2,
    InstructionType.EllipticalArc: 7,
}

# Labels used by Instruction.describe(), grouped the way the values are read.
_LABELS = {
    InstructionType.Move: ("x", "y"),
    InstructionType.Line: ("x", "y"),
    InstructionType.HorizontalLine: ("x",),
    InstructionType.VerticalLine: ("y",),
    InstructionType.Curve: ("x1", "y1", "x2", "y2", "x", "y"),
    InstructionType.SmoothCurve: ("x2", "y2", "x", "y"),
    InstructionType.QuadraticBezierCurve: ("x1", "y1", "x", "y"),
    InstructionType.SmoothQuadraticBezierCurve: ("x", "y"),
    InstructionType.EllipticalArc: ("rx", "ry", "x-axis-rotation", "large-arc-flag",
                                    "sweep-flag", "x", "y"),
}


def format_number(value):
    """Render a number the lexer accepts back: positional, no exponent, no '.5'."""
    return np.format_float_positional(value, trim='-')


@dataclass(frozen=True)
class Instruction:
    type: InstructionType
    absolute: bool
    data: tuple = ()

    @property
    def letter(self):
        letter = self.type.letter
        return letter if self.absolute else letter.lower()

    def points(self):
        """Group the data into (x, y) complex points, for pair-based types."""
        return [complex(x, y) for x, y in zip(self.data[0::2], self.data[1::2])]

    def to_path_data(self):
        if self.type is InstructionType.Invalid:
            raise ValueError("an Invalid instruction has no textual form")
        return ' '.join([self.letter] + [format_number(v) for v in self.data])

    def describe(self):
        labels = _LABELS.get(self.type, ())
        fields = ", ".join("{}={}".format(label, format_number(value))
                           for label, value in zip(labels, self.data))
        text = "{} (absolute: {})".format(self.type.name, self.absolute)
        return "{}: {}".format(text, fields) if fields else text


def format_path_data(instructions):
    """
    Re-derive canonical path data from an instruction list.

    Every instruction gets its own command letter, so parsing the result gives
    back an identical instruction list.
    """
    return ' '.join(instruction.to_path_data() for instruction in instructions)
