"""
File export for static and interactive charts.

Functions:
    export_static: Save a matplotlib figure as PNG/PDF/SVG
    export_interactive: Save a plotly figure as a standalone HTML page
    figure_fragment: Plotly figure as an embeddable HTML <div>
"""

import os

import matplotlib.pyplot as plt

STATIC_FORMATS = ('.png', '.pdf', '.svg')
STATIC_DPI = 150

# Published charts have no mode bar
INTERACTIVE_CONFIG = {'displayModeBar': False}


def _ensure_parent(path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def export_static(fig, path, dpi=STATIC_DPI):
    """
    Save a matplotlib figure; the format follows the file extension.

    The figure is closed after saving.

    Raises:
        ValueError: Unsupported extension
    """
    ext = os.path.splitext(path)[1].lower()
    if ext not in STATIC_FORMATS:
        raise ValueError(f"Unsupported static chart format '{ext}'; use one of {STATIC_FORMATS}")

    _ensure_parent(path)
    try:
        fig.savefig(path, dpi=dpi, bbox_inches='tight', facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    print(f"  Saved {path}")
    return path


def export_interactive(fig, path, include_plotlyjs='cdn'):
    """Save a plotly figure as a standalone HTML file."""
    _ensure_parent(path)
    fig.write_html(path, include_plotlyjs=include_plotlyjs, config=INTERACTIVE_CONFIG, full_html=True)
    print(f"  Saved {path}")
    return path


def figure_fragment(fig):
    return fig.to_html(full_html=False, include_plotlyjs='cdn', config=INTERACTIVE_CONFIG)
