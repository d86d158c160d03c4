from .records import LongRecord, AgeSexRecord, long_records, age_sex_records

__all__ = ['LongRecord', 'AgeSexRecord', 'long_records', 'age_sex_records']
