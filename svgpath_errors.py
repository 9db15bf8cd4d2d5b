#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Typed errors raised while parsing and building SVG path data.

Everything derives from PathDataError (itself a ValueError), so a caller that
only wants "render nothing on bad input" can catch a single class.
"""


class PathDataError(ValueError):
    """Base error for malformed or unrenderable path data."""

    def __init__(self, message, position=None):
        if position is not None:
            message = "{} (at position {})".format(message, position)
        super().__init__(message)
        self.position = position


# -----------------------------------------------------------
# Parse stage
# -----------------------------------------------------------
class PathSyntaxError(PathDataError):
    pass


class MalformedNumber(PathSyntaxError):
    pass


class ExponentNotSupported(MalformedNumber):
    pass


class InvalidFlag(PathSyntaxError):
    pass


class MissingSeparator(PathSyntaxError):
    pass


class UnknownCommand(PathSyntaxError):
    pass


class InvalidLeadingInstruction(PathSyntaxError):
    """The first instruction of a non-empty path is not a moveto."""


# -----------------------------------------------------------
# Build stage
# -----------------------------------------------------------
class PathBuildError(PathDataError):
    pass


class MissingCurrentPoint(PathBuildError):
    """A relative or drawing instruction was reached before any moveto."""


class UnsupportedInstruction(PathBuildError):
    pass
