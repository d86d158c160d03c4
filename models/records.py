"""
Record types for the reshaped HES outpatient tables.

The pipeline works on DataFrames; these frozen records are the row-level view
handed to the JSON API and exports.

    LongRecord:   (period, category, count, pct) with pct relative to the period total
    AgeSexRecord: (age_band, sex, type, count, pct) with pct relative to the grand total
"""

import math
from dataclasses import dataclass, asdict
from typing import Optional


def _optional_number(value):
    if value is None:
        return None
    value = float(value)
    return None if math.isnan(value) else value


@dataclass(frozen=True)
class LongRecord:
    period: str
    category: str
    count: Optional[float]
    pct: Optional[float]

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AgeSexRecord:
    age_band: str
    sex: str
    type: str
    count: Optional[float]
    pct: Optional[float]

    def to_dict(self):
        return asdict(self)


def long_records(df, period_column, category_column, count_column='count', pct_column='pct'):
    """
    Convert a long attendance table into LongRecords, in row order.

    Missing counts/percentages become None so the records serialize to JSON.
    """
    return [
        LongRecord(
            period=str(row[period_column]),
            category=str(row[category_column]),
            count=_optional_number(row[count_column]),
            pct=_optional_number(row[pct_column]),
        )
        for _, row in df.iterrows()
    ]


def age_sex_records(df, count_column='count', pct_column='pct'):
    """Convert a long sex/age table into AgeSexRecords, in row order."""
    return [
        AgeSexRecord(
            age_band=str(row['age_band']),
            sex=str(row['sex']),
            type=str(row['type']),
            count=_optional_number(row[count_column]),
            pct=_optional_number(row[pct_column]),
        )
        for _, row in df.iterrows()
    ]
