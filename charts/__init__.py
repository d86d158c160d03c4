"""
Stacked bar charts for the reshaped HES outpatient tables.

Architecture:
    long DataFrame + ChartStyle → static (matplotlib) / interactive (plotly) → export

Modules:
    style: Immutable chart style configuration (palette, order, tooltip, theme)
    static: matplotlib renderer
    interactive: plotly renderer
    export: PNG/PDF and HTML export
"""

from . import static, interactive
from .style import ChartStyle, Theme, ATTENDANCE_STYLE, AGE_SEX_STYLE, STYLES
from .export import export_static, export_interactive, figure_fragment

__all__ = [
    'ChartStyle', 'Theme', 'ATTENDANCE_STYLE', 'AGE_SEX_STYLE', 'STYLES',
    'export_static', 'export_interactive', 'figure_fragment',
    'static', 'interactive',
]
