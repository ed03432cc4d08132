"""Output-key allocation for one aggregation build."""


class AliasAllocator:
    """
    Hands out unique output keys within a single build call.

    Create a new allocator per build; never share one between requests.

    Plain columns keep their column id as the key. Function selections get
    FUNCTION_COLUMN_N, where N counts earlier selections of the same
    (function, column) pair: SUM(numbers) twice → SUM_numbers_0, SUM_numbers_1.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def allocate(self, function_name: str | None, column_id: str) -> str:
        if function_name is None:
            return column_id

        key = f"{function_name}_{column_id}"
        index = self._occurrences.get(key, 0)
        self._occurrences[key] = index + 1
        return f"{key}_{index}"
