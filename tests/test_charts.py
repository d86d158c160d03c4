"""Tests for chart styles, renderers and export."""

import dataclasses
import pytest
import sys
import os

import matplotlib.pyplot as plt
import pandas as pd

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from charts import (
    ATTENDANCE_STYLE,
    AGE_SEX_STYLE,
    static,
    interactive,
    export_static,
    export_interactive,
    figure_fragment,
)
from charts.style import SOURCE_CAPTION, chart_frame, ordered_values
from loaders.config import ATTENDANCE_ORDER
from reshape import SchemaError, attendance_types_long, age_sex_long


@pytest.fixture
def attendance_long(attendance_wide):
    return attendance_types_long(attendance_wide)


@pytest.fixture
def age_sex_table(age_sex_wide):
    return age_sex_long(age_sex_wide)


class TestChartStyle:
    """Test ChartStyle configuration."""

    def test_stacking_order_matches_categories(self):
        assert ATTENDANCE_STYLE.stacking_order == ATTENDANCE_ORDER
        assert AGE_SEX_STYLE.stacking_order == ['maternity', 'other']

    def test_palette(self):
        assert ATTENDANCE_STYLE.color_for('Attended') == '#005078'
        assert ATTENDANCE_STYLE.color_for('Cancelled') == '#AAD4E6'
        assert ATTENDANCE_STYLE.color_for('Missed') == '#dd0031'
        assert ATTENDANCE_STYLE.color_for('Unknown') == '#e2dfd8'

    def test_unknown_colour_raises(self):
        with pytest.raises(SchemaError):
            ATTENDANCE_STYLE.color_for('Other')

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ATTENDANCE_STYLE.title = 'Changed'

    def test_tooltip(self):
        text = ATTENDANCE_STYLE.format_tooltip('Attended', '2017-18', 80, 80.04)
        assert text == 'Attended<br>Year: 2017-18<br>Appointments: 80<br>Percent: 80.0 %'

    def test_age_sex_tooltip_two_decimals(self):
        text = AGE_SEX_STYLE.format_tooltip('other', '0 - 4 years', 1000, 1.23456, 'Male')
        assert text == '<br>Appointments: 1000<br>Percent: 1.23 %'


class TestChartFrame:
    """Test chart_frame and ordered_values helpers."""

    def test_missing_counts_dropped(self, age_sex_table):
        data = chart_frame(age_sex_table, AGE_SEX_STYLE)
        assert len(data) == 76 - 19
        assert data['count'].notna().all()

    def test_uncoloured_category_raises(self):
        long = pd.DataFrame({
            'Year': ['2017-18'], 'attendance_type': ['Other'], 'count': [1], 'pct': [100.0],
        })
        with pytest.raises(SchemaError):
            chart_frame(long, ATTENDANCE_STYLE)

    def test_missing_column_raises(self, attendance_long):
        with pytest.raises(SchemaError):
            chart_frame(attendance_long.drop(columns=['pct']), ATTENDANCE_STYLE)

    def test_ordered_values_uses_categories(self, age_sex_table):
        assert ordered_values(age_sex_table['sex']) == ['Female', 'Male']

    def test_ordered_values_first_appearance(self):
        assert ordered_values(pd.Series(['b', 'a', 'b', None])) == ['b', 'a']


class TestInteractiveChart:
    """Test the plotly renderer."""

    def test_one_trace_per_category_bottom_first(self, attendance_long):
        fig = interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        assert [trace.name for trace in fig.data] == list(reversed(ATTENDANCE_ORDER))
        assert fig.layout.barmode == 'stack'
        assert fig.layout.legend.traceorder == 'reversed'

    def test_trace_colours(self, attendance_long):
        fig = interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        colours = {trace.name: trace.marker.color for trace in fig.data}
        assert colours == dict(ATTENDANCE_STYLE.palette)

    def test_values_in_millions(self, attendance_long):
        fig = interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        attended = fig.data[0]
        assert attended.x[0] == '2007-08'
        assert attended.y[0] == pytest.approx(0.07)

    def test_tooltip(self, attendance_long):
        fig = interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        attended = fig.data[0]
        assert attended.hovertext[0] == 'Attended<br>Year: 2007-08<br>Appointments: 70000<br>Percent: 79.5 %'
        assert attended.hovertemplate == '%{hovertext}<extra></extra>'

    def test_axes_fixed(self, attendance_long):
        fig = interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        assert fig.layout.xaxis.fixedrange is True
        assert fig.layout.yaxis.fixedrange is True
        assert list(fig.layout.xaxis.categoryarray)[0] == '2007-08'
        assert fig.layout.title.text == 'NHS hospital outpatient appointments'

    def test_faceted_by_sex(self, age_sex_table):
        fig = interactive.build_stacked_bar(age_sex_table, AGE_SEX_STYLE)
        assert [trace.name for trace in fig.data] == ['other', 'maternity', 'other', 'maternity']
        assert [trace.showlegend for trace in fig.data] == [True, True, False, False]
        assert [a.text for a in fig.layout.annotations][:2] == ['Female', 'Male']

    def test_source_caption(self, attendance_long):
        fig = interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        captions = [a for a in fig.layout.annotations if a.text == SOURCE_CAPTION]
        assert len(captions) == 1
        assert captions[0].font.color == ATTENDANCE_STYLE.theme.caption

    def test_no_caption_when_empty(self, attendance_long):
        style = dataclasses.replace(ATTENDANCE_STYLE, caption='')
        fig = interactive.build_stacked_bar(attendance_long, style)
        assert len(fig.layout.annotations) == 0

    def test_missing_counts_not_drawn(self, age_sex_table):
        fig = interactive.build_stacked_bar(age_sex_table, AGE_SEX_STYLE)
        male_maternity = fig.data[3]
        female_maternity = fig.data[1]
        assert len(male_maternity.x) == 0
        assert len(female_maternity.x) == 19


class TestStaticChart:
    """Test the matplotlib renderer."""

    def test_bars_per_category_and_year(self, attendance_long):
        fig = static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        try:
            ax = fig.axes[0]
            assert len(ax.patches) == 4 * 11
        finally:
            plt.close(fig)

    def test_legend_lists_top_first(self, attendance_long):
        fig = static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        try:
            labels = [text.get_text() for text in fig.legends[0].get_texts()]
            assert labels == ATTENDANCE_ORDER
        finally:
            plt.close(fig)

    def test_stack_heights(self, attendance_long):
        """Test the top of each bar is the year total in millions."""
        fig = static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        try:
            ax = fig.axes[0]
            first_year = [p for p in ax.patches if p.get_x() < 0.5]
            top = max(p.get_y() + p.get_height() for p in first_year)
            assert top == pytest.approx(88_000 / 1e6)
        finally:
            plt.close(fig)

    def test_source_caption(self, attendance_long):
        fig = static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        try:
            captions = [t for t in fig.texts if t.get_text() == SOURCE_CAPTION]
            assert len(captions) == 1
        finally:
            plt.close(fig)

    def test_one_axes_per_facet(self, age_sex_table):
        fig = static.build_stacked_bar(age_sex_table, AGE_SEX_STYLE)
        try:
            assert len(fig.axes) == 2
        finally:
            plt.close(fig)


class TestExport:
    """Test static and interactive export."""

    def test_export_static_png(self, attendance_long, tmp_path):
        path = str(tmp_path / "charts" / "attendance.png")
        fig = static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        assert export_static(fig, path) == path
        assert os.path.getsize(path) > 0

    def test_export_static_pdf(self, attendance_long, tmp_path):
        path = str(tmp_path / "attendance.pdf")
        export_static(static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE), path)
        with open(path, 'rb') as f:
            assert f.read(4) == b'%PDF'

    def test_export_static_bad_format(self, attendance_long, tmp_path):
        fig = static.build_stacked_bar(attendance_long, ATTENDANCE_STYLE)
        try:
            with pytest.raises(ValueError):
                export_static(fig, str(tmp_path / "attendance.jpg"))
        finally:
            plt.close(fig)

    def test_export_interactive_html(self, attendance_long, tmp_path):
        path = str(tmp_path / "attendance.html")
        export_interactive(interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE), path)
        with open(path, encoding='utf-8') as f:
            html = f.read()
        assert '<html>' in html
        assert 'displayModeBar' in html

    def test_figure_fragment(self, attendance_long):
        fragment = figure_fragment(interactive.build_stacked_bar(attendance_long, ATTENDANCE_STYLE))
        assert fragment.startswith('<div')
        assert '<html>' not in fragment


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
