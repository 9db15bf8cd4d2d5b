#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Path builder: resolves an instruction list into absolute geometry.

The builder is a left-to-right fold. A Cursor (current point, subpath start,
last trailing control point) is threaded through a pure step function

    step(cursor, instruction) -> (cursor, segments)

and the emitted segments are collected into a GeometricPath. Points are
complex numbers, x + y*1j.

A GeometricPath is handed to a renderer through the PathSink interface
(move_to, line_to, quadratic_curve_to, cubic_curve_to, arc_to, close).
"""

import logging
import math
from dataclasses import dataclass, replace
from math import acos, cos, degrees, radians, sin, sqrt

import numpy as np

from svgpath_errors import (
    InvalidLeadingInstruction,
    MissingCurrentPoint,
    PathBuildError,
    UnsupportedInstruction,
)
from svgpath_instructions import DATA_LENGTH, InstructionType

logger = logging.getLogger(__name__)

# Largest sweep covered by one cubic when approximating arcs.
ARC_SEGMENT_MAX_ANGLE = 90.0


# -----------------------------------------------------------
# Arc conversion (endpoint to center parameterization)
# -----------------------------------------------------------
def endpoint_to_center(start, radius, rotation, large, sweep, end):
    """
    Return (radius, center, theta1, theta2) for an SVG arc, angles in degrees.

    Radii too small to reach from start to end are scaled up uniformly. The two
    flags pick one of the four candidate arcs: large selects the side of the
    center, sweep the direction (theta2 > theta1 for a positive sweep).
    """
    cosr = cos(radians(rotation))
    sinr = sin(radians(rotation))
    dx = (start.real - end.real) / 2
    dy = (start.imag - end.imag) / 2
    x1prim = cosr * dx + sinr * dy
    y1prim = -sinr * dx + cosr * dy
    x1prim_sq = x1prim * x1prim
    y1prim_sq = y1prim * y1prim

    rx = abs(radius.real)
    ry = abs(radius.imag)
    rx_sq = rx * rx
    ry_sq = ry * ry

    radius_scale = (x1prim_sq / rx_sq) + (y1prim_sq / ry_sq)
    if radius_scale > 1:
        radius_scale = sqrt(radius_scale)
        rx *= radius_scale
        ry *= radius_scale
        rx_sq = rx * rx
        ry_sq = ry * ry
    radius = rx + ry * 1j

    t1 = rx_sq * y1prim_sq
    t2 = ry_sq * x1prim_sq
    c = sqrt(abs((rx_sq * ry_sq - t1 - t2) / (t1 + t2)))
    if large == sweep:
        c = -c
    cxprim = c * rx * y1prim / ry
    cyprim = -c * ry * x1prim / rx

    center = complex(
        (cosr * cxprim - sinr * cyprim) + ((start.real + end.real) / 2),
        (sinr * cxprim + cosr * cyprim) + ((start.imag + end.imag) / 2)
    )

    ux = (x1prim - cxprim) / rx
    uy = (y1prim - cyprim) / ry
    vx = (-x1prim - cxprim) / rx
    vy = (-y1prim - cyprim) / ry
    n = sqrt(ux * ux + uy * uy)
    theta = degrees(acos(float(np.clip(ux / n, -1.0, 1.0))))
    if uy < 0:
        theta = -theta
    theta = theta % 360

    n = sqrt((ux * ux + uy * uy) * (vx * vx + vy * vy))
    p = ux * vx + uy * vy
    d = float(np.clip(p / n, -1.0, 1.0))
    delta = degrees(acos(d))
    if (ux * vy - uy * vx) < 0:
        delta = -delta
    delta = delta % 360
    if not sweep:
        if delta > 0:
            delta -= 360

    return radius, center, theta, theta + delta


def arc_point(center, radius, rotation, theta):
    """Point on the rotated ellipse at parameter angle theta (degrees)."""
    rot = radians(rotation)
    t = radians(theta)
    x_prim = radius.real * cos(t)
    y_prim = radius.imag * sin(t)
    return center + complex(cos(rot) * x_prim - sin(rot) * y_prim,
                            sin(rot) * x_prim + cos(rot) * y_prim)


def arc_derivative(radius, rotation, theta):
    rot = radians(rotation)
    t = radians(theta)
    dx_prim = -radius.real * sin(t)
    dy_prim = radius.imag * cos(t)
    return complex(cos(rot) * dx_prim - sin(rot) * dy_prim,
                   sin(rot) * dx_prim + cos(rot) * dy_prim)


def arc_to_cubics(start, radius, rotation, large, sweep, end):
    """
    Approximate an SVG arc with cubic Bezier curves.

    Returns a list of (control1, control2, end) tuples. Each piece spans at
    most ARC_SEGMENT_MAX_ANGLE degrees and uses the tangent-length factor
    alpha = 4/3 * tan(eta / 4).
    """
    radius, center, theta1, theta2 = endpoint_to_center(start, radius, rotation, large, sweep, end)
    count = max(1, int(math.ceil(abs(theta2 - theta1) / ARC_SEGMENT_MAX_ANGLE - 1e-9)))
    etas = np.linspace(theta1, theta2, count + 1)

    cubics = []
    p0 = start
    for eta1, eta2 in zip(etas, etas[1:]):
        alpha = 4.0 / 3.0 * math.tan(radians(eta2 - eta1) / 4)
        p3 = arc_point(center, radius, rotation, eta2)
        p1 = p0 + alpha * arc_derivative(radius, rotation, eta1)
        p2 = p3 - alpha * arc_derivative(radius, rotation, eta2)
        cubics.append((p1, p2, p3))
        p0 = p3
    # Land exactly on the requested endpoint.
    c1, c2, _ = cubics[-1]
    cubics[-1] = (c1, c2, end)
    return cubics


# -----------------------------------------------------------
# Segments
# -----------------------------------------------------------
@dataclass(frozen=True)
class MoveTo:
    end: complex

    def emit(self, sink):
        sink.move_to(self.end)


@dataclass(frozen=True)
class LineTo:
    end: complex

    def emit(self, sink):
        sink.line_to(self.end)


@dataclass(frozen=True)
class QuadraticTo:
    control: complex
    end: complex

    def emit(self, sink):
        sink.quadratic_curve_to(self.control, self.end)


@dataclass(frozen=True)
class CubicTo:
    control1: complex
    control2: complex
    end: complex

    def emit(self, sink):
        sink.cubic_curve_to(self.control1, self.control2, self.end)


@dataclass(frozen=True)
class ArcTo:
    start: complex
    radius: complex
    rotation: float
    large: bool
    sweep: bool
    end: complex

    def center_parameterization(self):
        return endpoint_to_center(self.start, self.radius, self.rotation,
                                  self.large, self.sweep, self.end)

    def to_cubics(self):
        return arc_to_cubics(self.start, self.radius, self.rotation,
                             self.large, self.sweep, self.end)

    def emit(self, sink):
        sink.arc_to(self)


@dataclass(frozen=True)
class Close:
    # The subpath start the close returns to.
    end: complex

    def emit(self, sink):
        sink.close()


class PathSink:
    """Interface a renderer implements to receive a GeometricPath."""

    def move_to(self, point):
        raise NotImplementedError

    def line_to(self, point):
        raise NotImplementedError

    def quadratic_curve_to(self, control, end):
        raise NotImplementedError

    def cubic_curve_to(self, control1, control2, end):
        raise NotImplementedError

    def arc_to(self, arc):
        raise NotImplementedError

    def close(self):
        raise NotImplementedError


class CubicArcSink(PathSink):
    """A sink that draws arcs through their cubic Bezier approximation."""

    def arc_to(self, arc):
        for control1, control2, end in arc.to_cubics():
            self.cubic_curve_to(control1, control2, end)


@dataclass(frozen=True)
class GeometricPath:
    segments: tuple = ()

    @property
    def is_empty(self):
        return not self.segments

    @property
    def current_point(self):
        return self.segments[-1].end if self.segments else None

    def replay(self, sink):
        for segment in self.segments:
            segment.emit(sink)
        return sink

    def __len__(self):
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)


# -----------------------------------------------------------
# Builder
# -----------------------------------------------------------
@dataclass(frozen=True)
class Cursor:
    current: complex = None
    start: complex = None
    # Trailing control point of the previous segment and its family
    # ('cubic', 'quadratic' or None), for S and T reflection.
    control: complex = None
    family: str = None


def _require_current(cursor, instruction):
    if cursor.current is None:
        raise MissingCurrentPoint(
            "{} instruction has no current point; path data must start with an "
            "absolute moveto".format(instruction.type.name))
    return cursor.current


def _resolve(cursor, instruction, point):
    if instruction.absolute:
        return point
    return point + _require_current(cursor, instruction)


def _reflect(cursor, family):
    if cursor.family == family:
        return 2 * cursor.current - cursor.control
    return cursor.current


def _move(cursor, instruction):
    point = _resolve(cursor, instruction, instruction.points()[0])
    return Cursor(current=point, start=point), [MoveTo(point)]


def _close(cursor, instruction):
    _require_current(cursor, instruction)
    return Cursor(current=cursor.start, start=cursor.start), [Close(cursor.start)]


def _line(cursor, instruction):
    _require_current(cursor, instruction)
    point = _resolve(cursor, instruction, instruction.points()[0])
    return replace(cursor, current=point, control=None, family=None), [LineTo(point)]


def _horizontal_line(cursor, instruction):
    current = _require_current(cursor, instruction)
    x = instruction.data[0] if instruction.absolute else current.real + instruction.data[0]
    point = complex(x, current.imag)
    return replace(cursor, current=point, control=None, family=None), [LineTo(point)]


def _vertical_line(cursor, instruction):
    current = _require_current(cursor, instruction)
    y = instruction.data[0] if instruction.absolute else current.imag + instruction.data[0]
    point = complex(current.real, y)
    return replace(cursor, current=point, control=None, family=None), [LineTo(point)]


def _curve(cursor, instruction):
    _require_current(cursor, instruction)
    control1, control2, end = [_resolve(cursor, instruction, p) for p in instruction.points()]
    cursor = replace(cursor, current=end, control=control2, family='cubic')
    return cursor, [CubicTo(control1, control2, end)]


def _smooth_curve(cursor, instruction):
    _require_current(cursor, instruction)
    control1 = _reflect(cursor, 'cubic')
    control2, end = [_resolve(cursor, instruction, p) for p in instruction.points()]
    cursor = replace(cursor, current=end, control=control2, family='cubic')
    return cursor, [CubicTo(control1, control2, end)]


def _quadratic(cursor, instruction):
    _require_current(cursor, instruction)
    control, end = [_resolve(cursor, instruction, p) for p in instruction.points()]
    cursor = replace(cursor, current=end, control=control, family='quadratic')
    return cursor, [QuadraticTo(control, end)]


def _smooth_quadratic(cursor, instruction):
    _require_current(cursor, instruction)
    control = _reflect(cursor, 'quadratic')
    end = _resolve(cursor, instruction, instruction.points()[0])
    cursor = replace(cursor, current=end, control=control, family='quadratic')
    return cursor, [QuadraticTo(control, end)]


def _elliptical_arc(cursor, instruction):
    current = _require_current(cursor, instruction)
    rx, ry, rotation, large, sweep, x, y = instruction.data
    end = _resolve(cursor, instruction, complex(x, y))
    cursor = replace(cursor, current=end, control=None, family=None)
    if end == current:
        return cursor, []
    if rx == 0 or ry == 0:
        return cursor, [LineTo(end)]
    arc = ArcTo(current, complex(abs(rx), abs(ry)), rotation, bool(large), bool(sweep), end)
    if not _has_center(arc):
        # Radii or chord too small (or too large) to place a center in floats.
        logger.debug("Arc from %s to %s is degenerate; drawing a line", current, end)
        return cursor, [LineTo(end)]
    return cursor, [arc]


def _has_center(arc):
    try:
        radius, center, theta1, theta2 = arc.center_parameterization()
    except ArithmeticError:
        return False
    return all(math.isfinite(v) for v in
               (radius.real, radius.imag, center.real, center.imag, theta1, theta2))


STEPS = {
    InstructionType.Move: _move,
    InstructionType.ClosePath: _close,
    InstructionType.Line: _line,
    InstructionType.HorizontalLine: _horizontal_line,
    InstructionType.VerticalLine: _vertical_line,
    InstructionType.Curve: _curve,
    InstructionType.SmoothCurve: _smooth_curve,
    InstructionType.QuadraticBezierCurve: _quadratic,
    InstructionType.SmoothQuadraticBezierCurve: _smooth_quadratic,
    InstructionType.EllipticalArc: _elliptical_arc,
}


def step(cursor, instruction):
    """Apply one instruction: (cursor, instruction) -> (cursor, segments)."""
    handler = STEPS.get(instruction.type)
    if handler is None:
        raise UnsupportedInstruction(
            "cannot build geometry for {} instruction".format(instruction.type.name))
    expected = DATA_LENGTH[instruction.type]
    if len(instruction.data) != expected:
        raise PathBuildError("{} instruction needs {} values, got {}".format(
            instruction.type.name, expected, len(instruction.data)))
    return handler(cursor, instruction)


def build_path(instructions):
    """Fold an instruction list into a GeometricPath."""
    if instructions and instructions[0].type is not InstructionType.Move:
        raise InvalidLeadingInstruction(
            "path must begin with a moveto, not {}".format(instructions[0].letter))

    cursor = Cursor()
    segments = []
    for instruction in instructions:
        cursor, emitted = step(cursor, instruction)
        segments.extend(emitted)
    logger.debug("Built %d segments from %d instructions", len(segments), len(instructions))
    return GeometricPath(tuple(segments))
