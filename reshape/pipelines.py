"""
Reshape recipes for the two HES outpatient summary tables.

Each recipe is a straight chain of reshaper operations:

    attendance_types_long: Summary Report 3 -> (Year, attendance_type, count, pct)
        pct is relative to the 'Total' row of the same year.

    age_sex_long: Summary Report 8 -> (age_band, sex, type, count, pct)
        pct is relative to the grand total over all rows.
"""

import pandas as pd

from loaders.config import (
    YEAR_COLUMN,
    TOTAL_CATEGORY,
    ATTENDANCE_MERGE_RULES,
    ATTENDANCE_RENAMES,
    ATTENDANCE_ORDER,
    AGE_SEX_RENAMES,
    AGE_SUFFIX,
    AGE_BANDS,
    SEX_COLUMNS,
    SEX_ORDER,
    MATERNITY_TYPES,
)
from .errors import SchemaError
from .reshaper import (
    _require_columns,
    combine_categories,
    rename_categories,
    to_long,
    drop_category,
    with_group_percentage,
    with_global_percentage,
    assign_category_order,
)

ATTENDANCE_TYPE_COLUMN = 'attendance_type'
AGE_BAND_COLUMN = 'age_band'
SEX_COLUMN = 'sex'
TYPE_COLUMN = 'type'
COUNT_COLUMN = 'count'
PCT_COLUMN = 'pct'


def attendance_types_long(wide):
    """
    Reshape the attendance types table into one row per (year, attendance type).

    Patient and hospital cancellations are combined into 'Cancelled', DNAs
    become 'Missed' and attendances 'Attended'. Percentages use the year's
    'Total' row, which is then dropped.

    Examples:
        >>> long = attendance_types_long(load_summary_tables()['attendance_types'])
        >>> long.columns.tolist()
        ['Year', 'attendance_type', 'count', 'pct']
    """
    combined = combine_categories(wide, ATTENDANCE_MERGE_RULES)
    renamed = rename_categories(combined, ATTENDANCE_RENAMES)
    long = to_long(renamed, YEAR_COLUMN, category_column=ATTENDANCE_TYPE_COLUMN, value_column=COUNT_COLUMN)
    long = with_group_percentage(
        long,
        YEAR_COLUMN,
        TOTAL_CATEGORY,
        category_column=ATTENDANCE_TYPE_COLUMN,
        value_column=COUNT_COLUMN,
        pct_column=PCT_COLUMN,
    )
    long = drop_category(long, TOTAL_CATEGORY, category_column=ATTENDANCE_TYPE_COLUMN)
    return assign_category_order(long, ATTENDANCE_TYPE_COLUMN, ATTENDANCE_ORDER)


def split_maternity(long):
    """
    Move the 'Maternity' pseudo-sex into a separate type column.

    'Maternity' rows become sex 'Female' with type 'maternity'; every other
    row gets type 'other'. The (age, sex, type) grid is then completed so
    each (age, sex) pair has both types; absent combinations get a missing count.
    """
    is_maternity = long[SEX_COLUMN] == 'Maternity'
    flagged = long.assign(**{
        TYPE_COLUMN: is_maternity.map({True: MATERNITY_TYPES[0], False: MATERNITY_TYPES[1]}),
        SEX_COLUMN: long[SEX_COLUMN].where(~is_maternity, 'Female'),
    })

    keys = [AGE_BAND_COLUMN, SEX_COLUMN, TYPE_COLUMN]
    duplicated = flagged.duplicated(keys)
    if duplicated.any():
        rows = flagged.loc[duplicated, keys].values.tolist()
        raise SchemaError(f"duplicate rows {rows}", rule='split_maternity', names=rows)

    grid = pd.MultiIndex.from_product(
        [
            pd.unique(flagged[AGE_BAND_COLUMN]),
            pd.unique(flagged[SEX_COLUMN]),
            MATERNITY_TYPES,
        ],
        names=keys,
    )
    completed = flagged.set_index(keys)[COUNT_COLUMN].reindex(grid)
    return completed.reset_index()


def age_sex_long(wide):
    """
    Reshape the sex/age table into one row per (age band, sex, maternity type).

    Percentages are shares of the grand total of all appointments, not of
    each age band.
    """
    _require_columns(wide, SEX_COLUMNS, 'age_sex_long')
    renamed = rename_categories(wide, AGE_SEX_RENAMES)
    long = to_long(renamed, AGE_BAND_COLUMN, category_column=SEX_COLUMN, value_column=COUNT_COLUMN)
    long = split_maternity(long)
    long = long.assign(**{AGE_BAND_COLUMN: long[AGE_BAND_COLUMN].astype(str).str.strip() + AGE_SUFFIX})
    long = with_global_percentage(long, value_column=COUNT_COLUMN, pct_column=PCT_COLUMN)

    long = assign_category_order(long, AGE_BAND_COLUMN, AGE_BANDS)
    long = assign_category_order(long, SEX_COLUMN, SEX_ORDER)
    return assign_category_order(long, TYPE_COLUMN, MATERNITY_TYPES)


PIPELINES = {
    'attendance_types': attendance_types_long,
    'age_sex': age_sex_long,
}


def reshape_all(wide_tables):
    """
    Run the matching recipe for every loaded wide table.

    Args:
        wide_tables: {table name: wide DataFrame}, as returned by load_summary_tables

    Returns:
        dict: {table name: long DataFrame}
    """
    missing = [name for name in PIPELINES if name not in wide_tables]
    if missing:
        raise SchemaError(f"table(s) {missing} were not loaded", rule='reshape_all', names=missing)

    return {name: recipe(wide_tables[name]) for name, recipe in PIPELINES.items()}
