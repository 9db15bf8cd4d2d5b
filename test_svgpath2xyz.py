#!/usr/bin/env python3
import io

import pytest

from svgpath2xyz import PEN_DOWN, PEN_UP, SVGPathSampler, sample_path, write_points
from svgpath_errors import PathDataError


def assert_points(actual, expected):
    assert len(actual) == len(expected)
    for (x, y, z), (ex, ey, ez) in zip(actual, expected):
        assert x == pytest.approx(ex, abs=1e-9)
        assert y == pytest.approx(ey, abs=1e-9)
        assert z == ez


class TestSampling:
    def test_line_density(self):
        pts = sample_path("M0,0 L10,0", density=5)
        assert_points(pts, [(0, 0, 1), (2.5, 0, 0), (5, 0, 0), (7.5, 0, 0), (10, 0, 0)])

    def test_close_draws_back_to_start(self):
        pts = sample_path("M0,0 L10,0 L10,10 Z", density=2)
        assert_points(pts, [(0, 0, 1), (10, 0, 0), (10, 10, 0), (0, 0, 0)])

    def test_close_at_start_adds_nothing(self):
        pts = sample_path("M0 0 L10 0 L0 0 Z", density=2)
        assert len(pts) == 3

    def test_each_subpath_starts_pen_up(self):
        pts = sample_path("M0 0 L1 1 M5 5 L6 6", density=3)
        assert [z for _, _, z in pts].count(PEN_UP) == 2
        assert pts[0][2] == PEN_UP
        assert pts[3][:2] == pytest.approx((5, 5))

    def test_curves_end_on_endpoint(self):
        pts = sample_path("M0 0 C0 10 10 10 10 0 Q15 -5 20 0", density=10)
        assert pts[-1][:2] == pytest.approx((20, 0))
        assert all(z == PEN_DOWN for _, _, z in pts[1:])

    def test_arc_samples_lie_on_circle(self):
        pts = sample_path("M0,0 A5,5 0 0 1 10,0", density=3)
        assert_points(pts, [(0, 0, 1), (5, -5, 0), (10, 0, 0)])

    def test_empty_path(self):
        assert sample_path("") == []

    def test_malformed_path_raises(self):
        with pytest.raises(PathDataError):
            sample_path("M0,0 L1e3,0")

    @pytest.mark.parametrize("d", [
        "M0,0 A{0},{0} 0 0 1 10,0".format("0." + "0" * 200 + "1"),
        "M0,0 A1,1 0 0 1 {},0".format("0." + "0" * 200 + "1"),
    ])
    def test_degenerate_arcs_sample_as_lines(self, d):
        pts = sample_path(d, density=3)
        assert len(pts) == 3
        assert pts[0][2] == PEN_UP
        assert all(z == PEN_DOWN for _, _, z in pts[1:])

    def test_density_must_allow_two_samples(self):
        with pytest.raises(ValueError):
            sample_path("M0 0 L1 1", density=1)


class TestSampler:
    def test_class_wrapper_uses_density(self):
        sampler = SVGPathSampler(density=3)
        assert sampler.sample_path("M0 0 L4 0") == sample_path("M0 0 L4 0", density=3)
        assert len(sampler.sample_path("M0 0 L4 0")) == 3

    def test_write_points(self):
        out = io.StringIO()
        write_points([(0, 0, 1), (2.5, 1.125, 0)], out)
        assert out.getvalue() == "0.00 0.00 1\n2.50 1.12 0\n"
