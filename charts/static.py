"""
Static (matplotlib) stacked bar charts for PNG/PDF export.

Mirrors charts.interactive: same ChartStyle, same stacking order (first
palette level on top) and same legend order (top level first).
"""

import matplotlib

# Non-interactive backend: figures are only written to files
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .style import chart_frame, ordered_values


def _style_axes(ax, style):
    theme = style.theme
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_facecolor(theme.background)
    ax.tick_params(axis='both', length=0, colors=theme.text)
    ax.yaxis.grid(True, color=theme.grid)
    ax.xaxis.grid(False)
    ax.set_axisbelow(True)


def build_stacked_bar(long, style):
    """
    Build a matplotlib stacked bar chart from a long table.

    Args:
        long: Long DataFrame with the columns named in style
        style: ChartStyle

    Returns:
        matplotlib Figure (one row of axes per facet value)
    """
    data = chart_frame(long, style)
    x_order = [str(value) for value in ordered_values(data[style.x_column])]
    facets = ordered_values(data[style.facet_column]) if style.facet_column else [None]
    positions = list(range(len(x_order)))
    theme = style.theme

    fig, axes = plt.subplots(
        nrows=len(facets),
        ncols=1,
        sharex=True,
        squeeze=False,
        figsize=(style.width_in, style.height_in),
    )
    fig.patch.set_facecolor(theme.background)

    for ax, facet_value in zip(axes[:, 0], facets):
        subset = data if facet_value is None else data[data[style.facet_column] == facet_value]
        counts = {
            (str(row[style.x_column]), row[style.category_column]): row[style.count_column]
            for _, row in subset.iterrows()
        }

        bottom = [0.0] * len(x_order)
        for level in reversed(style.stacking_order):
            heights = [counts.get((label, level), 0.0) / style.value_scale for label in x_order]
            ax.bar(positions, heights, bottom=bottom, width=0.9,
                   color=style.color_for(level), label=level)
            bottom = [b + h for b, h in zip(bottom, heights)]

        _style_axes(ax, style)
        if facet_value is not None:
            ax.set_title(str(facet_value), color=theme.text, fontsize='small', loc='right')

    last_ax = axes[-1, 0]
    last_ax.set_xticks(positions)
    last_ax.set_xticklabels(x_order, rotation=style.x_tick_angle, ha='left', color=theme.text)
    if style.x_label:
        last_ax.set_xlabel(style.x_label, color=theme.text)

    fig.supylabel(style.y_label, color=theme.text, fontsize='medium')
    if style.title:
        fig.suptitle(style.title, color=theme.title, x=0.02, ha='left')

    # Bars were added bottom-first; the legend lists the top level first
    handles, labels = axes[0, 0].get_legend_handles_labels()
    fig.legend(
        handles[::-1],
        labels[::-1],
        loc='upper right',
        ncol=style.legend_columns,
        frameon=False,
        labelcolor=theme.text,
    )
    caption_space = 0
    if style.caption:
        fig.text(0.02, 0.01, style.caption, color=theme.caption, ha='left', va='bottom', fontsize='small')
        caption_space = 0.04
    fig.tight_layout(rect=(0, caption_space, 1, 0.9))
    return fig
