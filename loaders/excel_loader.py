"""
Excel loading for the HES outpatient summary workbook.

The published workbook is not machine-friendly: every summary table sits in a
fixed block of cells below a few title rows. This module reads those fixed
blocks into DataFrames:
    1. Open workbook (values only)
    2. For each configured table: skip title rows, read header row + data rows
    3. Clean header text, drop blank rows
    4. Return {table name: DataFrame}

Functions:
    read_range: Read a fixed block from an openpyxl worksheet
    load_table: Load one fixed block from a workbook file
    load_summary_tables: Load every table listed in config.TABLES
"""

import warnings

import openpyxl
import pandas as pd

from reshape.errors import SchemaError
from .config import EXCEL_FILE, TABLES

# Suppress openpyxl warnings about styles/formatting (we only read data values)
warnings.filterwarnings('ignore', category=UserWarning, module='openpyxl')


def clean_header(value, position):
    """
    Normalize a header cell to a column name.

    Examples:
        >>> clean_header('Did not attends\\n(DNAs) ', 2)
        'Did not attends (DNAs)'
        >>> clean_header(None, 5)
        'Unnamed: 5'
    """
    if value is None or not str(value).strip():
        return f"Unnamed: {position}"
    return str(value).strip().replace('\n', ' ')


def read_range(worksheet, skip_rows, n_rows, n_cols):
    """
    Read a fixed rectangular block of cells into a DataFrame.

    Args:
        worksheet: openpyxl worksheet
        skip_rows: Rows above the header row (title block)
        n_rows: Maximum number of data rows below the header
        n_cols: Number of columns from the left edge

    Returns:
        DataFrame with cleaned headers. Rows with an empty first cell are dropped.
    """
    header_row = skip_rows + 1
    rows = worksheet.iter_rows(
        min_row=header_row,
        max_row=header_row + n_rows,
        max_col=n_cols,
        values_only=True,
    )

    headers = None
    records = []
    for row in rows:
        # Short rows are padded so every record has n_cols values
        values = list(row) + [None] * (n_cols - len(row))
        if headers is None:
            headers = [clean_header(v, idx) for idx, v in enumerate(values)]
            continue

        first = values[0]
        if first is None or (isinstance(first, str) and not first.strip()):
            continue
        if isinstance(first, str):
            values[0] = first.strip()
        records.append(values)

    if headers is None:
        return pd.DataFrame()

    return pd.DataFrame(records, columns=headers)


def load_table(path, sheet, skip_rows, n_rows, n_cols):
    """
    Load one fixed block of a sheet.

    Raises:
        SchemaError: The sheet does not exist in the workbook.

    Examples:
        >>> df = load_table(EXCEL_FILE, 'Summary Report 3', 3, 11, 7)
        >>> df.columns[0]
        'Year'
    """
    wb = openpyxl.load_workbook(path, data_only=True, read_only=True)
    try:
        return _read_sheet(wb, sheet, skip_rows, n_rows, n_cols)
    finally:
        wb.close()


def _read_sheet(wb, sheet, skip_rows, n_rows, n_cols):
    if sheet not in wb.sheetnames:
        raise SchemaError(f"sheet '{sheet}' not found; workbook has {wb.sheetnames}", rule='load_table', names=[sheet])
    return read_range(wb[sheet], skip_rows, n_rows, n_cols)


def load_summary_tables(path=None, tables=None):
    """
    Load every configured summary table from the workbook.

    Args:
        path: Workbook path (defaults to config.EXCEL_FILE)
        tables: Table layout mapping (defaults to config.TABLES)

    Returns:
        dict: {table name: DataFrame}
    """
    path = path or EXCEL_FILE
    tables = tables or TABLES

    print(f"Loading Excel file: {path}...")
    wb = openpyxl.load_workbook(path, data_only=True, read_only=True)
    try:
        loaded = {}
        for name, layout in tables.items():
            print(f"Processing sheet: {layout['sheet']}")
            df = _read_sheet(wb, layout['sheet'], layout['skip_rows'], layout['n_rows'], layout['n_cols'])
            print(f"  Loaded {len(df)} rows x {len(df.columns)} columns for '{name}'")
            loaded[name] = df
    finally:
        wb.close()

    return loaded


if __name__ == "__main__":
    for table_name, table in load_summary_tables().items():
        print(f"\n{table_name}:")
        print(table.head())
