#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
SVG Path Sampler

This module takes an SVG path definition (the d attribute of a <path> element)
and returns a dense list of (x, y, z) coordinates along the drawn path.
The third coordinate (z) is used as a pen flag: 0 means "pen down" (draw)
and 1 means "pen up" (lift, do not draw). The sampling density (i.e. the number
of sample points per segment) is configurable via the class constructor.

The path data is parsed and resolved by svgpath_parser / svgpath_builder; this
module is one of the renderers fed through the PathSink interface.
"""

from math import cos, radians, sin

import numpy as np

from svgpath_builder import PathSink, build_path, endpoint_to_center
from svgpath_parser import parse_path_data

PEN_DOWN = 0
PEN_UP = 1


# -----------------------------------------------------------
# Sampling functions for line, Bezier and arc segments
# -----------------------------------------------------------
def sample_line(p0, p1, density):
    return [p0 + (p1 - p0) * t for t in np.linspace(0, 1, density)]


def sample_quadratic_bezier(p0, p1, p2, density):
    return [((1-t)**2) * p0 + 2 * (1-t) * t * p1 + (t**2) * p2 for t in np.linspace(0, 1, density)]


def sample_cubic_bezier(p0, p1, p2, p3, density):
    return [((1-t)**3) * p0 + 3 * ((1-t)**2) * t * p1 + 3 * (1-t) * (t**2) * p2 + (t**3) * p3
            for t in np.linspace(0, 1, density)]


def sample_arc(start, radius, rotation, large, sweep, end, density):
    r_complex, center, theta1, theta2 = endpoint_to_center(start, radius, rotation, large, sweep, end)
    theta_values = np.linspace(radians(theta1), radians(theta2), density)
    rx = abs(r_complex.real)
    ry = abs(r_complex.imag)
    rot_rad = radians(rotation)
    points = []
    for t in theta_values:
        x_prim = rx * cos(t)
        y_prim = ry * sin(t)
        x = cos(rot_rad) * x_prim - sin(rot_rad) * y_prim
        y = sin(rot_rad) * x_prim + cos(rot_rad) * y_prim
        points.append(center + complex(x, y))
    # Pin the last sample to the exact endpoint.
    points[-1] = end
    return points


# -----------------------------------------------------------
# Sink collecting (point, pen) samples
# -----------------------------------------------------------
class PointSamplerSink(PathSink):
    def __init__(self, density=20):
        if density < 2:
            raise ValueError("density must be at least 2 samples per segment")
        self.density = density
        self.sampled = []  # list of tuples: (complex_point, pen_state)
        self.last_point = None
        self.subpath_start = None

    def _draw(self, pts):
        # The first sample repeats the previous point; skip it.
        for p in pts[1:]:
            self.sampled.append((p, PEN_DOWN))
        self.last_point = pts[-1]

    def move_to(self, point):
        # MOVETO: start a new subpath with pen lifted.
        self.sampled.append((point, PEN_UP))
        self.last_point = point
        self.subpath_start = point

    def line_to(self, point):
        self._draw(sample_line(self.last_point, point, self.density))

    def quadratic_curve_to(self, control, end):
        self._draw(sample_quadratic_bezier(self.last_point, control, end, self.density))

    def cubic_curve_to(self, control1, control2, end):
        self._draw(sample_cubic_bezier(self.last_point, control1, control2, end, self.density))

    def arc_to(self, arc):
        self._draw(sample_arc(arc.start, arc.radius, arc.rotation, arc.large, arc.sweep,
                              arc.end, self.density))

    def close(self):
        if self.last_point != self.subpath_start:
            self.line_to(self.subpath_start)
        self.last_point = self.subpath_start

    def points(self):
        return [(pt.real, pt.imag, pen) for pt, pen in self.sampled]


def sample_geometric_path(path, density=20):
    return path.replay(PointSamplerSink(density)).points()


def sample_path(pathdef, density=20):
    """
    Parse the SVG path string and return a list of (x, y, z) tuples.
    z is 0 when the pen is down (draw) and 1 when the pen is up (lift).

    Raises PathDataError for malformed path data.
    """
    return sample_geometric_path(build_path(parse_path_data(pathdef)), density)


def write_points(points, f):
    for x, y, z in points:
        f.write("{:.2f} {:.2f} {:.0f}\n".format(x, y, z))


# -----------------------------------------------------------
# The SVGPathSampler class (wrapper around sample_path)
# -----------------------------------------------------------
class SVGPathSampler:
    def __init__(self, density=20):
        """
        density: number of sample points per segment.
        """
        self.density = density

    def sample_path(self, pathdef):
        return sample_path(pathdef, self.density)


# -----------------------------------------------------------
# Example usage (for testing the module directly)
# -----------------------------------------------------------
if __name__ == '__main__':
    example_path = (
        "M 100 100 L 200 100 C 250 100 250 200 200 200 "
        "L 100 200 Z "
        "M 300 300 A 50 50 0 0 1 350 350"
    )
    sampler = SVGPathSampler(density=30)
    pts = sampler.sample_path(example_path)
    with open("sampled_points.txt", "w") as f:
        write_points(pts, f)
    print("Sampled", len(pts), "points along the SVG path.")
