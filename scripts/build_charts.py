import argparse
import os
import sys
import zipfile

import requests
from openpyxl.utils.exceptions import InvalidFileException

# Add project root to sys.path
sys.path.append(os.getcwd())

from charts import STYLES, static, interactive, export_static, export_interactive
from loaders import download_source, load_summary_tables
from loaders.config import OUTPUT_DIR
from reshape import ReshapeError, reshape_all

# Output file stem per chart
CHART_FILES = {
    'attendance_types': 'OP_attend_count',
    'age_sex': 'OP_sex_age_count',
}


def build_charts(output_dir=OUTPUT_DIR, static_format='png', force_download=False):
    print("Building outpatient charts...")

    # 1. Fetch + load
    path = download_source(force=force_download)
    wide_tables = load_summary_tables(path)

    # 2. Reshape
    print("Reshaping tables...")
    long_tables = reshape_all(wide_tables)

    # 3. Plot + export
    written = []
    for name, table in long_tables.items():
        style = STYLES[name]
        stem = os.path.join(output_dir, CHART_FILES.get(name, name))
        print(f"Rendering chart: {name}")
        written.append(export_static(static.build_stacked_bar(table, style), f"{stem}.{static_format}"))
        written.append(export_interactive(interactive.build_stacked_bar(table, style), f"{stem}.html"))

    print(f"Build complete. {len(written)} files saved to {output_dir}")
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description="Download HES outpatient data and build stacked bar charts.")
    parser.add_argument('--output-dir', default=OUTPUT_DIR)
    parser.add_argument('--format', default='png', choices=['png', 'pdf', 'svg'])
    parser.add_argument('--force-download', action='store_true')
    args = parser.parse_args(argv)

    try:
        build_charts(args.output_dir, args.format, args.force_download)
    except (ReshapeError, requests.RequestException, OSError, zipfile.BadZipFile, InvalidFileException) as e:
        print(f"Error building charts: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
