#!/usr/bin/env python3
import logging

import pytest
from matplotlib.figure import Figure
from matplotlib.path import Path as MplPath

from svgpath_builder import build_path
from svgpath_parser import parse_path_data
from svgpath_render import RenderParams, paint, paint_path_data, parse_style, to_mpl_path


def mpl(d):
    return to_mpl_path(build_path(parse_path_data(d)))


@pytest.fixture
def ax():
    return Figure().add_subplot()


class TestMatplotlibPath:
    def test_triangle_codes(self):
        path = mpl("M0,0 L10,10 L20,0 Z")
        assert list(path.codes) == [MplPath.MOVETO, MplPath.LINETO, MplPath.LINETO, MplPath.CLOSEPOLY]
        assert path.vertices.tolist() == [[0, 0], [10, 10], [20, 0], [0, 0]]

    def test_curve_codes(self):
        path = mpl("M0 0 Q1 1 2 0 C3 1 4 1 5 0")
        assert list(path.codes) == [MplPath.MOVETO] + [MplPath.CURVE3] * 2 + [MplPath.CURVE4] * 3

    def test_arc_becomes_cubics(self):
        path = mpl("M0,0 A5,5 0 0 1 10,0")
        assert list(path.codes) == [MplPath.MOVETO] + [MplPath.CURVE4] * 6
        assert path.vertices[-1].tolist() == [10, 0]

    def test_empty(self):
        assert len(mpl("").vertices) == 0


class TestRenderParams:
    def test_defaults(self):
        params = RenderParams()
        assert params.fill == "black"
        assert params.stroke == "none"
        assert params.fill_rule == "evenodd"

    def test_validation(self):
        with pytest.raises(ValueError):
            RenderParams(stroke_width=-1)
        with pytest.raises(ValueError):
            RenderParams(fill_rule="winding")

    def test_from_attributes(self):
        params = RenderParams.from_style({"fill": "none", "stroke": "currentColor", "stroke-width": "2"})
        assert params == RenderParams(fill="none", stroke="black", stroke_width=2.0)

    def test_style_overrides_attributes(self):
        params = RenderParams.from_style({"fill": "red", "style": "fill: blue; stroke-width: 3"})
        assert params.fill == "blue"
        assert params.stroke_width == 3.0

    def test_inheritance(self):
        inherited = RenderParams(fill="none", stroke="red", stroke_width=2.0)
        params = RenderParams.from_style({"stroke": "green"}, inherited)
        assert params == RenderParams(fill="none", stroke="green", stroke_width=2.0)

    def test_unknown_fill_rule_falls_back(self):
        assert RenderParams.from_style({"fill-rule": "inherit"}).fill_rule == "evenodd"

    def test_parse_style(self):
        assert parse_style("fill:red; stroke : blue;;") == {"fill": "red", "stroke": "blue"}


class TestPaint:
    def test_paint_adds_patch(self, ax):
        patch = paint(ax, build_path(parse_path_data("M0 0 L10 0 L10 10 Z")),
                      RenderParams(fill="red", stroke="blue", stroke_width=2))
        assert ax.patches[0] is patch
        assert patch.get_linewidth() == 2

    def test_paint_path_data(self, ax):
        assert paint_path_data(ax, "M0 0 L10 0 L10 10 Z")
        assert len(ax.patches) == 1

    def test_malformed_data_paints_nothing(self, ax, caplog):
        with caplog.at_level(logging.WARNING, logger="svgpath_render"):
            assert not paint_path_data(ax, "h5v5h-5z")
        assert len(ax.patches) == 0
        assert "Not rendering path" in caplog.text

    @pytest.mark.parametrize("d", [
        "M0,0 A{0},{0} 0 0 1 10,0".format("0." + "0" * 200 + "1"),
        "M0,0 A1,1 0 0 1 {},0".format("0." + "0" * 200 + "1"),
    ])
    def test_degenerate_arcs_paint_as_lines(self, ax, d):
        assert paint_path_data(ax, d)
        assert list(ax.patches[0].get_path().codes) == [MplPath.MOVETO, MplPath.LINETO]

    def test_empty_data_paints_nothing(self, ax):
        assert not paint_path_data(ax, "")
        assert len(ax.patches) == 0
