"""
Chart style configuration for the HES outpatient stacked bar charts.

A ChartStyle is an immutable description of one chart: which columns to plot,
the colour of each category, the stacking order, the tooltip template and the
theme colours. Both the static (matplotlib) and interactive (plotly)
renderers take a ChartStyle, so the two outputs always agree.

Stacking order: the first palette entry is drawn at the top of each bar and
listed first in the legend (same convention as the reshaped tables).
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import pandas as pd

from loaders.config import ATTENDANCE_ORDER, MATERNITY_TYPES
from reshape.errors import SchemaError

SOURCE_CAPTION = 'Source: NHS Digital, Hospital Outpatient Activity 2017-18'

# Colours
DARK_GREY = '#524c48'
LIGHT_GREY = '#e2dfd8'
LIGHTER_GREY = '#eeede8'
BLUE = '#005078'
LIGHTER_BLUE = '#AAD4E6'
RED = '#dd0031'


@dataclass(frozen=True)
class Theme:
    text: str = DARK_GREY
    grid: str = LIGHTER_GREY
    title: str = BLUE
    caption: str = LIGHTER_BLUE
    background: str = 'white'


@dataclass(frozen=True)
class ChartStyle:
    x_column: str
    category_column: str
    palette: Tuple[Tuple[str, str], ...]
    tooltip_template: str
    facet_column: Optional[str] = None
    count_column: str = 'count'
    pct_column: str = 'pct'
    title: str = ''
    caption: str = SOURCE_CAPTION
    x_label: str = ''
    y_label: str = 'Number of appointments [millions]'
    value_scale: float = 1e6
    legend_columns: int = 3
    x_tick_angle: int = -45
    width_in: float = 7
    height_in: float = 5
    theme: Theme = field(default_factory=Theme)

    @property
    def stacking_order(self):
        """Category levels, top of the stack first."""
        return [level for level, _ in self.palette]

    def color_for(self, level):
        for name, color in self.palette:
            if name == level:
                return color
        raise SchemaError(f"no colour for category '{level}'", rule='color_for', names=[level])

    def format_tooltip(self, category, x, count, pct, facet=None):
        """
        Render the hover text for one bar segment.

        Examples:
            >>> ATTENDANCE_STYLE.format_tooltip('Attended', '2017-18', 80, 80.0)
            'Attended<br>Year: 2017-18<br>Appointments: 80<br>Percent: 80.0 %'
        """
        return self.tooltip_template.format(category=category, x=x, count=count, pct=pct, facet=facet)


ATTENDANCE_STYLE = ChartStyle(
    x_column='Year',
    category_column='attendance_type',
    palette=tuple(zip(ATTENDANCE_ORDER, [LIGHT_GREY, RED, LIGHTER_BLUE, BLUE])),
    tooltip_template='{category}<br>Year: {x}<br>Appointments: {count:.0f}<br>Percent: {pct:.1f} %',
    title='NHS hospital outpatient appointments',
)

AGE_SEX_STYLE = ChartStyle(
    x_column='age_band',
    category_column='type',
    facet_column='sex',
    palette=tuple(zip(MATERNITY_TYPES, [LIGHTER_BLUE, RED])),
    tooltip_template='<br>Appointments: {count:.0f}<br>Percent: {pct:.2f} %',
    x_label='Age',
    legend_columns=1,
)

STYLES = {
    'attendance_types': ATTENDANCE_STYLE,
    'age_sex': AGE_SEX_STYLE,
}


def ordered_values(series):
    """Distinct values in display order: category order if categorical, else first appearance."""
    present = set(series.dropna().astype(object))
    if isinstance(series.dtype, pd.CategoricalDtype):
        return [value for value in series.cat.categories if value in present]
    return [value for value in pd.unique(series.dropna().astype(object))]


def chart_frame(long, style):
    """
    Rows of a long table that can be drawn with style.

    Rows with a missing count are left out. Every category must have a
    colour in the palette.

    Raises:
        SchemaError: A plotted column is missing or a category has no colour.
    """
    rule = 'chart_frame'
    columns = [style.x_column, style.category_column, style.count_column, style.pct_column]
    if style.facet_column:
        columns.append(style.facet_column)
    missing = [col for col in columns if col not in long.columns]
    if missing:
        raise SchemaError(f"missing column(s) {missing}", rule=rule, names=missing)

    data = long.dropna(subset=[style.count_column])
    unknown = [value for value in ordered_values(data[style.category_column]) if value not in style.stacking_order]
    if unknown:
        raise SchemaError(f"categories {unknown} have no colour in the palette", rule=rule, names=unknown)
    return data
