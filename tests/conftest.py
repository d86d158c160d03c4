import openpyxl
import pandas as pd
import pytest
from openpyxl.worksheet.worksheet import Worksheet

AGE_LABELS = [
    "0 - 4", "5 - 9", "10 - 14", "15 - 19", "20 - 24",
    "25 - 29", "30 - 34", "35 - 39", "40 - 44", "45 - 49",
    "50 - 54", "55 - 59", "60 - 64", "65 - 69", "70 - 74",
    "75 - 79", "80 - 84", "85 - 89", "90+",
]

# Year, Attendances, DNAs, Patient cancellations, Hospital cancellations, Unknown
# 2007-08 .. 2017-18, the 11 rows of Summary Report 3
ATTENDANCE_ROWS = [
    (f"{year}-{(year + 1) % 100:02d}",
     70_000 + 2_000 * i, 8_000 + 100 * i, 4_000 + 50 * i, 5_000 - 20 * i, max(0, 1_000 - 100 * i))
    for i, year in enumerate(range(2007, 2018))
]


@pytest.fixture
def attendance_wide():
    """Attendance types table as the loader returns it."""
    records = [row + (sum(row[1:]),) for row in ATTENDANCE_ROWS]
    return pd.DataFrame(records, columns=[
        'Year', 'Attendances', 'Did not attends (DNAs)', 'Patient cancellations',
        'Hospital cancellations', 'Unknown', 'Total',
    ])


@pytest.fixture
def age_sex_wide():
    """Sex/age table as the loader returns it (maternity only for 15-44)."""
    records = []
    for idx, label in enumerate(AGE_LABELS):
        maternity = 500 * idx if 3 <= idx <= 8 else 0
        records.append((label, 1_000 + 10 * idx, 1_200 + 20 * idx, maternity))
    return pd.DataFrame(records, columns=['Age (yrs)', 'Male', 'Female', 'Female (maternity)'])


@pytest.fixture
def temp_excel_file(tmp_path, attendance_wide, age_sex_wide):
    """Create a temporary workbook laid out like the published spreadsheet."""
    file_path = tmp_path / "hes_outpatients.xlsx"
    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    def write_sheet(title, df, extra_header):
        ws: Worksheet = wb.create_sheet(title)
        # Rows 1-3: title block
        ws.cell(row=1, column=1, value="Hospital Outpatient Activity 2017-18")
        ws.cell(row=2, column=1, value=title)
        # Row 4: headers (with a line break and an extra column outside the range)
        for col_idx, header in enumerate(df.columns, 1):
            if header == 'Did not attends (DNAs)':
                header = 'Did not attends\n(DNAs)'
            ws.cell(row=4, column=col_idx, value=header)
        ws.cell(row=4, column=len(df.columns) + 1, value=extra_header)
        for row_idx, row in enumerate(df.itertuples(index=False), 5):
            for col_idx, val in enumerate(row, 1):
                ws.cell(row=row_idx, column=col_idx, value=val.item() if hasattr(val, 'item') else val)
            ws.cell(row=row_idx, column=len(df.columns) + 1, value="note")
        # Footnote below the table
        ws.cell(row=5 + len(df) + 2, column=1, value="Source: NHS Digital")
        return ws

    write_sheet('Summary Report 3', attendance_wide, 'Notes')
    write_sheet('Summary Report 8', age_sex_wide, 'Notes')
    wb.create_sheet('Contents')

    wb.save(file_path)
    return str(file_path)
