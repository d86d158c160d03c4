"""
Configuration constants for HES outpatient data loading and reshaping.

This module centralizes the source location, the fixed cell ranges read from
each sheet, and the category rules applied during reshaping, so the published
layout can change without touching core logic.
"""

# Source workbook published by NHS Digital
SOURCE_URL = "https://files.digital.nhs.uk/0D/0C3CF4/hosp-epis-stat-outp-rep-tabs-2017-18-tab.xlsx"
EXCEL_FILE = "hosp-epis-stat-outp-rep-tabs-2017-18-tab.xlsx"
DOWNLOAD_TIMEOUT = 60       # seconds
DOWNLOAD_CHUNK_SIZE = 1 << 16

# Output directory for charts and exported tables
OUTPUT_DIR = "output"

# Fixed regions to read. skip_rows are skipped before the header row,
# n_rows data rows are kept below it, n_cols columns from the left.
TABLES = {
    'attendance_types': {
        'sheet': 'Summary Report 3',
        'skip_rows': 3,
        'n_rows': 11,
        'n_cols': 7,
    },
    'age_sex': {
        'sheet': 'Summary Report 8',
        'skip_rows': 3,
        'n_rows': 19,
        'n_cols': 4,
    },
}

# --- Attendance types (Summary Report 3) ---

YEAR_COLUMN = 'Year'
TOTAL_CATEGORY = 'Total'

ATTENDANCE_MERGE_RULES = {
    'Cancelled': ['Patient cancellations', 'Hospital cancellations'],
}

ATTENDANCE_RENAMES = {
    'Did not attends (DNAs)': 'Missed',
    'Attendances': 'Attended',
}

# First level is drawn at the top of the stack
ATTENDANCE_ORDER = ['Unknown', 'Missed', 'Cancelled', 'Attended']

# --- Sex and age (Summary Report 8) ---

AGE_COLUMN = 'Age (yrs)'
MATERNITY_COLUMN = 'Female (maternity)'

AGE_SEX_RENAMES = {
    AGE_COLUMN: 'age_band',
    MATERNITY_COLUMN: 'Maternity',
}

AGE_SUFFIX = ' years'
AGE_BANDS = [
    f"{band}{AGE_SUFFIX}" for band in [
        "0 - 4", "5 - 9", "10 - 14", "15 - 19", "20 - 24",
        "25 - 29", "30 - 34", "35 - 39", "40 - 44", "45 - 49",
        "50 - 54", "55 - 59", "60 - 64", "65 - 69", "70 - 74",
        "75 - 79", "80 - 84", "85 - 89", "90+",
    ]
]

# Sex columns the sheet must carry besides age and maternity
SEX_COLUMNS = ['Male', 'Female']
SEX_ORDER = ['Female', 'Male']
MATERNITY_TYPES = ['maternity', 'other']
