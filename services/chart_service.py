from charts import STYLES, interactive, static
from models import long_records, age_sex_records


class ChartService:
    def __init__(self, tables):
        """
        Args:
            tables: {chart name: long DataFrame}, as returned by reshape_all
        """
        self.tables = tables

    def chart_names(self):
        """Names of charts that have both a table and a style, in style order."""
        return [name for name in STYLES if name in self.tables]

    def has_chart(self, name):
        return name in self.tables and name in STYLES

    def get_table(self, name):
        """Returns the long table for a chart (KeyError if unknown)."""
        if not self.has_chart(name):
            raise KeyError(name)
        return self.tables[name]

    def get_records(self, name):
        """Returns the long table as a list of JSON-ready dicts."""
        table = self.get_table(name)
        style = STYLES[name]
        if style.facet_column:
            records = age_sex_records(table, style.count_column, style.pct_column)
        else:
            records = long_records(table, style.x_column, style.category_column,
                                   style.count_column, style.pct_column)
        return [r.to_dict() for r in records]

    def get_figure(self, name):
        """Builds the interactive (plotly) figure for a chart."""
        return interactive.build_stacked_bar(self.get_table(name), STYLES[name])

    def get_static_figure(self, name):
        """Builds the static (matplotlib) figure for a chart."""
        return static.build_stacked_bar(self.get_table(name), STYLES[name])
