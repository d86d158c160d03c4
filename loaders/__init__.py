"""
Loaders for the HES outpatient summary workbook.

This package downloads the NHS Digital spreadsheet and reads its fixed-layout
summary tables into pandas DataFrames for reshaping.

Architecture:
    NHS Digital → downloader → excel_loader → DataFrames (wide)

Modules:
    config: Configuration constants (URL, cell ranges, category rules)
    downloader: HTTP download of the workbook
    excel_loader: Fixed cell range extraction
"""

from .downloader import download_source
from .excel_loader import load_table, load_summary_tables

__all__ = ['download_source', 'load_table', 'load_summary_tables']
