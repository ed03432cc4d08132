"""
Aggregation result flattener — pure function, no I/O.

Converts result rows (alias + typed value variant) into plain records.
Row order is the backend's; nothing is sorted or deduplicated here.
"""

from models import AggregateValue, CellValue, GroupValue, ReductionValue, ResultRow


def value_payload(value: AggregateValue) -> CellValue:
    """Return the active variant's payload, or None for a null value."""
    if isinstance(value, ReductionValue):
        return value.result
    if isinstance(value, GroupValue):
        return value.value
    return None


def flatten_rows(rows: list[ResultRow] | None) -> list[dict[str, CellValue]]:
    """
    Flatten aggregate result rows into one dict per row.

    Entries with an empty alias are dropped; null values are kept as None.
    A null aggregate and zero rows both give [].
    """
    records: list[dict[str, CellValue]] = []
    for row in rows or []:
        record: dict[str, CellValue] = {}
        for entry in row.entries:
            if not entry.alias:
                continue
            record[entry.alias] = value_payload(entry.value)
        records.append(record)
    return records
