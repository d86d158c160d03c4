"""
Table transformations for wide summary tables.

Every function takes a pandas DataFrame and returns a new one; inputs are
never modified. Failures raise SchemaError (bad columns/categories) or
ComputationError (undefined percentages) and no partial table is returned.

Functions:
    combine_categories: Sum groups of columns into a derived column
    rename_categories: Rename columns with an explicit mapping
    to_long / to_wide: Melt wide columns into (id, category, count) rows and back
    drop_category: Remove all rows of one category
    with_group_percentage: Percentage of a per-group denominator row (e.g. 'Total')
    with_global_percentage: Percentage of the grand total over all rows
    assign_category_order: Attach a display order to the category column

Stacking convention for ordered categories: the first level is drawn at the
top of the stack, and legends list levels in level order (top first).
"""

import pandas as pd
from pandas.api.types import is_integer_dtype, is_numeric_dtype

from .errors import SchemaError, ComputationError

STACKING_CONVENTION = "first-level-on-top"

# DataFrame.attrs keys
WIDE_DTYPES_ATTR = "wide_dtypes"
STACKING_ATTR = "stacking_convention"


def _require_columns(table, columns, rule):
    missing = [col for col in columns if col not in table.columns]
    if missing:
        raise SchemaError(
            f"missing column(s) {missing}; available columns are {list(table.columns)}",
            rule=rule,
            names=missing,
        )


def _require_numeric(table, columns, rule):
    non_numeric = [col for col in columns if not is_numeric_dtype(table[col])]
    if non_numeric:
        raise SchemaError(
            f"column(s) {non_numeric} are not numeric",
            rule=rule,
            names=non_numeric,
        )


def combine_categories(wide, merge_rules):
    """
    Replace groups of source columns with their row-wise sum.

    Args:
        wide: Wide DataFrame
        merge_rules: Mapping of derived column name -> list of source columns

    Returns:
        DataFrame without the source columns, derived columns appended at the end.
        A missing value in any source gives a missing result for that row.

    Examples:
        >>> combine_categories(df, {'Cancelled': ['Patient cancellations',
        ...                                      'Hospital cancellations']})
    """
    rule = 'combine_categories'
    result = wide.copy()

    for target, sources in merge_rules.items():
        sources = list(sources)
        if not sources:
            raise SchemaError(f"rule for '{target}' lists no source columns", rule=rule, names=[target])

        _require_columns(result, sources, rule)
        _require_numeric(result, sources, rule)

        if target in result.columns and target not in sources:
            raise SchemaError(
                f"derived column '{target}' would overwrite an existing column",
                rule=rule,
                names=[target],
            )

        combined = result[sources].sum(axis=1, min_count=len(sources))
        result = result.drop(columns=sources)
        result[target] = combined

    return result


def rename_categories(wide, rename_map):
    """Rename columns; every key of rename_map must be an existing column."""
    rule = 'rename_categories'
    unknown = [name for name in rename_map if name not in wide.columns]
    if unknown:
        raise SchemaError(
            f"cannot rename unknown column(s) {unknown}; available columns are {list(wide.columns)}",
            rule=rule,
            names=unknown,
        )

    renamed = wide.rename(columns=rename_map)
    duplicated = list(dict.fromkeys(renamed.columns[renamed.columns.duplicated()]))
    if duplicated:
        raise SchemaError(f"renaming produces duplicate column(s) {duplicated}", rule=rule, names=duplicated)

    return renamed


def to_long(wide, id_column, category_column='category', value_column='count'):
    """
    Melt every non-id column into (id, category, count) rows.

    Rows come out column by column in source column order, and within each
    column in source row order.

    Examples:
        >>> to_long(pd.DataFrame({'Year': [2017], 'Attended': [80], 'Missed': [10]}), 'Year')
           Year  category  count
        0  2017  Attended     80
        1  2017    Missed     10
    """
    rule = 'to_long'
    _require_columns(wide, [id_column], rule)
    if category_column in wide.columns or value_column in wide.columns:
        clashing = [c for c in (category_column, value_column) if c in wide.columns]
        raise SchemaError(f"output column name(s) {clashing} already used by the wide table", rule=rule, names=clashing)

    value_columns = [col for col in wide.columns if col != id_column]
    long = wide.melt(
        id_vars=[id_column],
        value_vars=value_columns,
        var_name=category_column,
        value_name=value_column,
    )
    # melt upcasts mixed int/float columns; to_wide restores them from here
    long.attrs[WIDE_DTYPES_ATTR] = {col: wide[col].dtype for col in value_columns}
    return long


def _fits_dtype(values, dtype):
    """Whether values can be cast back to dtype without losing anything."""
    if not is_integer_dtype(dtype):
        return True
    return values.notna().all() and (values == values.round()).all()


def to_wide(long, id_column, category_column='category', value_column='count'):
    """
    Pivot (id, category, count) rows back into one column per category.

    Inverse of to_long: ids and categories keep their order of first
    appearance and the id column comes first.
    """
    rule = 'to_wide'
    _require_columns(long, [id_column, category_column, value_column], rule)

    # Plain labels so pivoted columns are an ordinary Index
    if isinstance(long[category_column].dtype, pd.CategoricalDtype):
        long = long.assign(**{category_column: long[category_column].astype(object)})

    duplicated = long.duplicated([id_column, category_column])
    if duplicated.any():
        pairs = long.loc[duplicated, [id_column, category_column]].values.tolist()
        raise SchemaError(f"duplicate (id, category) pairs {pairs}", rule=rule, names=pairs)

    ids = pd.Index(pd.unique(long[id_column]), name=id_column)
    categories = pd.Index(pd.unique(long[category_column]))

    wide = long.pivot(index=id_column, columns=category_column, values=value_column)
    wide = wide.reindex(index=ids, columns=categories)
    wide.columns.name = None

    for col, dtype in long.attrs.get(WIDE_DTYPES_ATTR, {}).items():
        if col in wide.columns and _fits_dtype(wide[col], dtype):
            wide[col] = wide[col].astype(dtype)

    wide = wide.reset_index()
    wide.attrs = {}
    return wide


def drop_category(long, name, category_column='category'):
    """Remove every row whose category equals name."""
    _require_columns(long, [category_column], 'drop_category')
    kept = long[long[category_column] != name]
    return kept.reset_index(drop=True)


def with_group_percentage(long, group_key, denominator_category,
                          category_column='category', value_column='count', pct_column='pct'):
    """
    Add pct = 100 * count / count of the denominator category in the same group.

    The denominator row keeps its own pct (100) so it can be dropped afterwards
    with drop_category.

    Raises:
        ComputationError: A group has no denominator row, more than one, or a
            zero/missing denominator count. The whole table is rejected.
    """
    rule = 'with_group_percentage'
    _require_columns(long, [group_key, category_column, value_column], rule)
    _require_numeric(long, [value_column], rule)

    denominator_rows = long[long[category_column] == denominator_category]

    denominators = {}
    for group in pd.unique(long[group_key]):
        rows = denominator_rows[denominator_rows[group_key] == group]
        if rows.empty:
            raise ComputationError(
                f"no '{denominator_category}' row in {group_key} {group!r}",
                rule=rule,
                group=group,
            )
        if len(rows) > 1:
            raise ComputationError(
                f"{len(rows)} '{denominator_category}' rows in {group_key} {group!r}",
                rule=rule,
                group=group,
            )

        value = rows[value_column].iloc[0]
        if pd.isna(value) or value == 0:
            raise ComputationError(
                f"'{denominator_category}' is {value} in {group_key} {group!r}; percentage undefined",
                rule=rule,
                group=group,
            )
        denominators[group] = value

    base = long[group_key].astype(object).map(denominators).astype(float)
    result = long.copy()
    result[pct_column] = 100 * result[value_column] / base
    return result


def with_global_percentage(long, value_column='count', pct_column='pct'):
    """
    Add pct = 100 * count / sum of count over all rows.

    Missing counts are left out of the total and get a missing pct.

    Raises:
        ComputationError: The total is zero or there are no counts at all.
    """
    rule = 'with_global_percentage'
    _require_columns(long, [value_column], rule)
    _require_numeric(long, [value_column], rule)

    total = long[value_column].sum(min_count=1)
    if pd.isna(total) or total == 0:
        raise ComputationError(f"total of '{value_column}' is {total}; percentage undefined", rule=rule)

    result = long.copy()
    result[pct_column] = 100 * result[value_column] / total
    return result


def assign_category_order(long, category_column, ordered_levels):
    """
    Turn category_column into an ordered categorical with ordered_levels.

    The first level is the top of the stack in charts.

    Raises:
        SchemaError: A category in the table is not listed, or levels repeat.
    """
    rule = 'assign_category_order'
    levels = list(ordered_levels)

    repeated = list(dict.fromkeys(level for level in levels if levels.count(level) > 1))
    if repeated:
        raise SchemaError(f"level(s) {repeated} listed more than once", rule=rule, names=repeated)

    _require_columns(long, [category_column], rule)

    observed = pd.unique(long[category_column].dropna())
    unknown = [value for value in observed if value not in levels]
    if unknown:
        raise SchemaError(
            f"'{category_column}' has value(s) {unknown} not in levels {levels}",
            rule=rule,
            names=unknown,
        )

    result = long.copy()
    result[category_column] = pd.Categorical(
        result[category_column].astype(object),
        categories=levels,
        ordered=True,
    )
    result.attrs[STACKING_ATTR] = STACKING_CONVENTION
    return result
