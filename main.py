#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
main.py

Command-line front end for the SVG path-data tools.

  svgpath parse "M0,0 L10,10"            one line per decoded instruction
  svgpath format "M0 0 5 5"              canonical path data
  svgpath sample "M0,0 L10,10" -o pts.txt [--plot]
  svgpath plot input.svg [-o out.png]    fill/stroke every <path> in a file

For `sample --plot` the drawn segments (z = 0) are plotted with a viridis
gradient and pen lifts (z = 1) are marked in red.
"""

import argparse
import logging
import sys
import xml.etree.ElementTree as ET

from svgpath2xyz import PEN_UP, SVGPathSampler, write_points
from svgpath_errors import PathDataError
from svgpath_instructions import format_path_data
from svgpath_parser import parse_path_data
from svgpath_render import RenderParams, paint_path_data

logger = logging.getLogger(__name__)

SVG_NAMESPACE = {'svg': 'http://www.w3.org/2000/svg'}

_LOGGING_CONFIGURED = False


def setup_logging(level=logging.INFO):
    """Configure console logging once."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(fmt)
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
    _LOGGING_CONFIGURED = True


def load_svg_paths(svg_file):
    """
    Load every <path> of an SVG file.

    Returns a list of (d, RenderParams); the root <svg> presentation attributes
    are inherited by each path.
    """
    root = ET.parse(svg_file).getroot()
    inherited = RenderParams.from_style(root.attrib)
    paths = []
    for path in root.findall(".//svg:path", SVG_NAMESPACE):
        d = path.get("d", "")
        paths.append((d, RenderParams.from_style(path.attrib, inherited)))
    logger.info("Loaded %d paths from %s", len(paths), svg_file)
    return paths


def split_pen_segments(pts):
    """Split (x, y, z) samples into drawn runs and pen-lift positions."""
    segments = []
    current_segment = []
    pen_up_positions = []
    for (x, y, pen) in pts:
        if pen == PEN_UP:
            if current_segment:
                segments.append(current_segment)
            # A drawn run starts from the point the pen was lifted to.
            current_segment = [(x, y)]
            pen_up_positions.append((x, y))
        else:
            current_segment.append((x, y))
    if current_segment:
        segments.append(current_segment)
    return [seg for seg in segments if len(seg) > 1], pen_up_positions


# -----------------------------------------------------------
# Subcommands
# -----------------------------------------------------------
def cmd_parse(d):
    for instruction in parse_path_data(d):
        print(instruction.describe())


def cmd_format(d):
    print(format_path_data(parse_path_data(d)))


def cmd_sample(d, density, output, plot):
    sampler = SVGPathSampler(density=density)
    pts = sampler.sample_path(d)
    with open(output, "w") as f:
        write_points(pts, f)
    print("Sampled", len(pts), "points along the SVG path.")
    if plot:
        plot_samples(pts)


def plot_samples(pts):
    import matplotlib.pyplot as plt

    segments, pen_up_positions = split_pen_segments(pts)
    fig, ax = plt.subplots(figsize=(10, 10))
    total_segments = len(segments)
    for idx, seg in enumerate(segments):
        xs, ys = zip(*seg)
        # normalize the index to get a color gradient.
        color_factor = idx / max(total_segments - 1, 1)
        color = plt.cm.viridis(color_factor)
        ax.plot(xs, ys, linestyle='-', color=color, linewidth=2,
                label=f"Segment {idx+1}" if total_segments > 1 else "Path")
    if pen_up_positions:
        pen_x, pen_y = zip(*pen_up_positions)
        ax.scatter(pen_x, pen_y, color='red', marker='o', s=50, zorder=5, label="Pen Lift")

    ax.set_aspect('equal')
    ax.set_title("Visualization of Sampled SVG Paths")
    ax.set_xlabel("X Coordinate")
    ax.set_ylabel("Y Coordinate")
    ax.grid(True)
    ax.invert_yaxis()  # invert y-axis to match SVG coordinate system
    handles, labels = ax.get_legend_handles_labels()
    unique = dict(zip(labels, handles))
    ax.legend(unique.values(), unique.keys())
    plt.show()


def cmd_plot(svg_file, output):
    import matplotlib
    if output:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    paths = load_svg_paths(svg_file)
    fig, ax = plt.subplots(figsize=(10, 10))
    painted = sum(paint_path_data(ax, d, params) for d, params in paths)
    logger.info("Painted %d of %d paths", painted, len(paths))

    ax.autoscale_view()
    ax.set_aspect('equal')
    ax.invert_yaxis()  # Match the SVG coordinate system
    if output:
        fig.savefig(output)
        print("Saved", painted, "paths to", output)
    else:
        plt.show()
    plt.close(fig)


def build_argparser():
    ap = argparse.ArgumentParser(prog="svgpath", description="SVG path-data parser and sampler.")
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("parse", help="print the decoded instruction list")
    p.add_argument("d", help="path data")

    p = sub.add_parser("format", help="print canonical path data")
    p.add_argument("d", help="path data")

    p = sub.add_parser("sample", help="sample a path into (x, y, z) points")
    p.add_argument("d", help="path data")
    p.add_argument("--density", type=int, default=20, help="samples per segment (default: 20)")
    p.add_argument("-o", "--output", default="sampled_points.txt")
    p.add_argument("--plot", action="store_true", help="show the sampled points")

    p = sub.add_parser("plot", help="render every <path> of an SVG file")
    p.add_argument("svg_file")
    p.add_argument("-o", "--output", default=None, help="save to an image instead of showing")
    return ap


def main(argv=None):
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.cmd == "parse":
            cmd_parse(args.d)
        elif args.cmd == "format":
            cmd_format(args.d)
        elif args.cmd == "sample":
            cmd_sample(args.d, args.density, args.output, args.plot)
        elif args.cmd == "plot":
            cmd_plot(args.svg_file, args.output)
    except PathDataError as e:
        print(f"Path data error: {e}", file=sys.stderr)
        return 1
    except ET.ParseError as e:
        print(f"SVG error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
