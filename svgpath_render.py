#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Matplotlib renderer for built SVG paths.

The GeometricPath is replayed into a sink that produces a matplotlib Path
(arcs go through their cubic approximation), which is then filled and stroked
as a PathPatch with the caller's render parameters.
"""

import logging
from dataclasses import dataclass

import numpy as np
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from svgpath_builder import CubicArcSink, build_path
from svgpath_errors import PathDataError
from svgpath_parser import parse_path_data

logger = logging.getLogger(__name__)

FILL_RULES = ('evenodd', 'nonzero')


def parse_style(style_str):
    style = {}
    for item in style_str.split(';'):
        if ':' in item:
            key, value = item.split(':', 1)
            style[key.strip()] = value.strip()
    return style


def parse_float(value, default=0.0):
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _color(value):
    if value is None or value == 'none':
        return 'none'
    if value == 'currentColor':
        return 'black'
    return value


@dataclass(frozen=True)
class RenderParams:
    fill: str = 'black'
    stroke: str = 'none'
    stroke_width: float = 1.0
    fill_rule: str = 'evenodd'

    def __post_init__(self):
        if self.stroke_width < 0:
            raise ValueError("stroke_width must be >= 0, got {}".format(self.stroke_width))
        if self.fill_rule not in FILL_RULES:
            raise ValueError("fill_rule must be one of {}, got {!r}".format(FILL_RULES, self.fill_rule))

    @classmethod
    def from_style(cls, attributes, inherited=None):
        """
        Build render parameters from SVG presentation attributes.

        attributes is a mapping such as an element's attrib; its 'style' text,
        when present, overrides the plain attributes. Missing values fall back
        to `inherited` (or the SVG defaults).
        """
        base = inherited or cls()
        merged = dict(attributes)
        merged.update(parse_style(attributes.get('style', '')))
        fill_rule = merged.get('fill-rule')
        if fill_rule not in FILL_RULES:
            fill_rule = base.fill_rule
        return cls(
            fill=_color(merged['fill']) if 'fill' in merged else base.fill,
            stroke=_color(merged['stroke']) if 'stroke' in merged else base.stroke,
            stroke_width=parse_float(merged.get('stroke-width'), base.stroke_width),
            fill_rule=fill_rule,
        )


class MatplotlibPathSink(CubicArcSink):
    def __init__(self):
        self.vertices = []
        self.codes = []
        self.subpath_start = None

    def _add(self, code, *points):
        for point in points:
            self.vertices.append((point.real, point.imag))
            self.codes.append(code)

    def move_to(self, point):
        self.subpath_start = point
        self._add(MplPath.MOVETO, point)

    def line_to(self, point):
        self._add(MplPath.LINETO, point)

    def quadratic_curve_to(self, control, end):
        self._add(MplPath.CURVE3, control, end)

    def cubic_curve_to(self, control1, control2, end):
        self._add(MplPath.CURVE4, control1, control2, end)

    def close(self):
        self._add(MplPath.CLOSEPOLY, self.subpath_start)

    def to_path(self):
        if not self.vertices:
            return MplPath(np.empty((0, 2)))
        return MplPath(np.array(self.vertices, dtype=float), self.codes)


def to_mpl_path(path):
    return path.replay(MatplotlibPathSink()).to_path()


def paint(ax, path, params=None):
    """Fill and stroke a GeometricPath on a matplotlib Axes; returns the patch."""
    params = params or RenderParams()
    # matplotlib has no fill-rule switch; the backend's own rule applies.
    patch = PathPatch(
        to_mpl_path(path),
        facecolor=params.fill,
        edgecolor=params.stroke,
        linewidth=params.stroke_width,
    )
    ax.add_patch(patch)
    return patch


def paint_path_data(ax, d, params=None):
    """
    Parse, build and paint path data. Malformed data draws nothing.

    Returns True when something was painted.
    """
    try:
        path = build_path(parse_path_data(d))
    except PathDataError as e:
        logger.warning("Not rendering path %r: %s", d, e)
        return False
    if path.is_empty:
        return False
    paint(ax, path, params)
    return True
