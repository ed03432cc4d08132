"""
Aggregate function categories.

The tables below describe what the aggregate endpoint can do with each
AggregateSelectFunctionName. Edit the tables, not the builder, when the
backend gains or drops a capability.
"""

from models import FunctionCategory

# Need expressions the builder can't produce (conditions, ranges, raw SQL-ish
# passthrough) or produce nothing useful.
UNSUPPORTED_FUNCTIONS: frozenset[str] = frozenset({
    "CASE",
    "BETWEEN",
    "LEFT",
    "RAW",
    "NONE",
})

# Change each row's value, so distinct outputs are distinct groups.
TRANSFORMING_FUNCTIONS: frozenset[str] = frozenset({
    "TRIM",
    "UPPER",
    "LOWER",
    "DATE_TRUNC_DAY",
    "DATE_TRUNC_WEEK",
    "DATE_TRUNC_MONTH",
    "DATE_TRUNC_QUARTER",
    "DATE_TRUNC_YEAR",
    "COLOR",
    "LABEL",
    "END_DATE",
    "START_DATE",
    "HOUR",
    "PHONE_COUNTRY_SHORT_NAME",
    "PERSON",
    "ORDER",
    "LENGTH",
    "FLATTEN",
    "IS_DONE",
})

# Known reducers. Anything unlisted is also treated as reducing; this set
# documents the common ones and backs the tool description.
REDUCING_FUNCTIONS: frozenset[str] = frozenset({
    "COUNT",
    "COUNT_DISTINCT",
    "COUNT_SUBITEMS",
    "COUNT_ITEMS",
    "FIRST",
    "SUM",
    "AVERAGE",
    "MEDIAN",
    "MIN",
    "MAX",
    "MIN_MAX",
})


def classify_function(function_name: str) -> FunctionCategory:
    """
    Categorize an aggregate function identifier.

    Unsupported wins over transforming if a name ever lands in both tables.
    """
    name = function_name.upper()
    if name in UNSUPPORTED_FUNCTIONS:
        return FunctionCategory.UNSUPPORTED
    if name in TRANSFORMING_FUNCTIONS:
        return FunctionCategory.TRANSFORMING
    return FunctionCategory.REDUCING
