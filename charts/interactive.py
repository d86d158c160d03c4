"""
Interactive (plotly) stacked bar charts.

One go.Bar trace per category, added bottom-first so the first palette level
ends up on top of the stack. Hover shows only the custom tooltip and both axes
are fixed (no zoom/pan), matching the published charts.
"""

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from .style import chart_frame, ordered_values


def build_stacked_bar(long, style):
    """
    Build a plotly stacked bar chart from a long table.

    Args:
        long: Long DataFrame with the columns named in style
        style: ChartStyle

    Returns:
        go.Figure; faceted into shared-x rows when style.facet_column is set
    """
    data = chart_frame(long, style)
    x_order = [str(value) for value in ordered_values(data[style.x_column])]
    facets = ordered_values(data[style.facet_column]) if style.facet_column else [None]

    if style.facet_column:
        fig = make_subplots(
            rows=len(facets),
            cols=1,
            shared_xaxes=True,
            vertical_spacing=0.08,
            subplot_titles=[str(value) for value in facets],
        )
    else:
        fig = go.Figure()

    for row_idx, facet_value in enumerate(facets, 1):
        subset = data if facet_value is None else data[data[style.facet_column] == facet_value]
        placement = {'row': row_idx, 'col': 1} if style.facet_column else {}

        for level in reversed(style.stacking_order):
            rows = subset[subset[style.category_column] == level]
            tooltips = [
                style.format_tooltip(level, row[style.x_column], row[style.count_column],
                                     row[style.pct_column], facet_value)
                for _, row in rows.iterrows()
            ]
            fig.add_trace(
                go.Bar(
                    x=[str(value) for value in rows[style.x_column]],
                    y=(rows[style.count_column] / style.value_scale).tolist(),
                    name=level,
                    legendgroup=level,
                    showlegend=row_idx == 1,
                    marker_color=style.color_for(level),
                    hovertext=tooltips,
                    hovertemplate='%{hovertext}<extra></extra>',
                ),
                **placement,
            )

    theme = style.theme
    if style.title:
        fig.update_layout(title={'text': style.title, 'font': {'color': theme.title}})
    fig.update_layout(
        barmode='stack',
        plot_bgcolor=theme.background,
        paper_bgcolor=theme.background,
        font={'color': theme.text},
        legend={
            'traceorder': 'reversed',
            'orientation': 'h',
            'yanchor': 'bottom',
            'y': 1.02,
            'xanchor': 'right',
            'x': 1,
            'title': {'text': ''},
        },
        hovermode='closest',
    )
    fig.update_xaxes(
        fixedrange=True,
        categoryorder='array',
        categoryarray=x_order,
        tickangle=style.x_tick_angle,
        showline=False,
        ticks='',
    )
    fig.update_yaxes(
        fixedrange=True,
        gridcolor=theme.grid,
        showline=False,
        ticks='',
        zeroline=False,
    )

    if style.caption:
        fig.add_annotation(
            text=style.caption,
            xref='paper',
            yref='paper',
            x=0,
            y=0,
            yshift=-90,
            xanchor='left',
            yanchor='top',
            showarrow=False,
            font={'color': theme.caption, 'size': 11},
        )
        fig.update_layout(margin={'b': 120})

    # Axis titles go on the outer axes only
    n_rows = len(facets)
    if style.facet_column:
        fig.update_yaxes(title_text=style.y_label, row=(n_rows + 1) // 2, col=1)
        fig.update_xaxes(title_text=style.x_label, row=n_rows, col=1)
    else:
        fig.update_yaxes(title_text=style.y_label)
        fig.update_xaxes(title_text=style.x_label)

    return fig
