"""
Reshaping of HES outpatient summary tables into long form.

Architecture:
    wide DataFrame → reshaper operations → long DataFrame with pct and ordered categories

Modules:
    errors: SchemaError / ComputationError
    reshaper: Pure table operations (combine, rename, melt, percentages, ordering)
    pipelines: The attendance types and sex/age recipes
"""

from .errors import ReshapeError, SchemaError, ComputationError
from .reshaper import (
    STACKING_CONVENTION,
    STACKING_ATTR,
    combine_categories,
    rename_categories,
    to_long,
    to_wide,
    drop_category,
    with_group_percentage,
    with_global_percentage,
    assign_category_order,
)
from .pipelines import PIPELINES, attendance_types_long, age_sex_long, reshape_all

__all__ = [
    'ReshapeError', 'SchemaError', 'ComputationError',
    'STACKING_CONVENTION', 'STACKING_ATTR',
    'combine_categories', 'rename_categories', 'to_long', 'to_wide',
    'drop_category', 'with_group_percentage', 'with_global_percentage',
    'assign_category_order',
    'PIPELINES', 'attendance_types_long', 'age_sex_long', 'reshape_all',
]
