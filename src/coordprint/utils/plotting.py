import logging

from ..core.constants import WKT_PRECISION
from ..core.models import Geometry
from .formatting import format_ordinates

logger = logging.getLogger(__name__)

def _ensure_matplotlib():
    """
    Attempts to import matplotlib. Raises ImportError if not found.
    """
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError:
        logger.error("Matplotlib not found.")
        raise ImportError("matplotlib is required for plotting.\nInstall it with: pip install matplotlib")

def plot_geometry(geom: Geometry, title: str = "Geometry", precision: int = WKT_PRECISION,
                  label_vertices: bool = False, show: bool = True):
    """
    Plots the x/y footprint of a geometry.
    Points as markers, linestrings as lines, polygon rings closed.
    With label_vertices, each vertex is annotated with its coordinates as
    they print at the given precision.
    """
    if geom.is_empty:
        logger.warning("Nothing to plot: %s is empty", geom.kind)
        return None

    plt = _ensure_matplotlib()

    fig, ax = plt.subplots(figsize=(8, 8))

    line_colors = ['#1f77b4', '#2ca02c', '#9467bd', '#8c564b']

    for p_idx, part in enumerate(geom.simple_parts()):
        if part.is_empty:
            continue
        color = line_colors[p_idx % len(line_colors)]

        if part.kind == 'point':
            xs = [c[0] for c in part.coords]
            ys = [c[1] for c in part.coords]
            ax.plot(xs, ys, marker='o', linestyle='', markersize=6, color=color)
            vertices = part.coords
        elif part.kind == 'linestring':
            xs = [c[0] for c in part.coords]
            ys = [c[1] for c in part.coords]
            ax.plot(xs, ys, marker='o', linewidth=2, markersize=4, color=color)
            vertices = part.coords
        else:
            vertices = []
            for ring in part.rings:
                # close the ring for display even if the data leaves it open
                pts = list(ring) + ([ring[0]] if ring and ring[0] != ring[-1] else [])
                xs = [c[0] for c in pts]
                ys = [c[1] for c in pts]
                ax.plot(xs, ys, marker='o', linewidth=2, markersize=4, color=color)
                vertices.extend(ring)

        if label_vertices:
            for c in vertices:
                ax.annotate(format_ordinates(c[:2], precision), (c[0], c[1]),
                            textcoords='offset points', xytext=(4, 4), fontsize=8)

    ax.set_xlabel('X', fontsize=12)
    ax.set_ylabel('Y', fontsize=12)
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)

    srid = f' (SRID {geom.srid})' if geom.srid is not None else ''
    ax.set_title(f'{title}: {geom.kind}{srid}', fontsize=13)
    plt.tight_layout()
    if show:
        plt.show()
    return fig
