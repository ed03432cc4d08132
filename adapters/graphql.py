"""
GraphQL adapter — executes one operation against the monday.com API.

Transport failures are retried and converted to MondayError by @with_retry.
A 200 response carrying an `errors` array is an API error, not data.
"""

import re
from typing import Any, cast

from adapters.services import get_http_client
from api_config import API_URL
from logging_config import log_api_call, log_api_result
from models import ErrorKind, MondayError
from retry import with_retry

# Error codes monday returns in extensions when a query exceeds the
# complexity budget; they clear after a short wait.
THROTTLE_ERROR_CODES = frozenset({
    "ComplexityException",
    "COMPLEXITY_BUDGET_EXHAUSTED",
    "RATE_LIMIT_EXCEEDED",
    "maxConcurrencyExceeded",
})

_OPERATION_NAME = re.compile(r"^\s*(?:query|mutation)\s+(\w+)")


def operation_name(query: str) -> str:
    """Name of the GraphQL operation, for logging."""
    match = _OPERATION_NAME.match(query)
    return match.group(1) if match else "anonymous"


def _raise_for_graphql_errors(payload: dict[str, Any]) -> None:
    errors = payload.get("errors") or []
    if not errors:
        return

    messages = [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
    codes = {
        e.get("extensions", {}).get("code")
        for e in errors
        if isinstance(e, dict) and isinstance(e.get("extensions"), dict)
    }
    if codes & THROTTLE_ERROR_CODES:
        raise MondayError(
            ErrorKind.RATE_LIMITED,
            "; ".join(messages),
            details={"errors": errors},
            retryable=True,
        )
    raise MondayError(ErrorKind.API_ERROR, "; ".join(messages), details={"errors": errors})


@with_retry(max_attempts=3, delay_ms=1000)
def execute_graphql(query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Run a GraphQL operation and return its `data` object.

    Args:
        query: GraphQL document with exactly one operation
        variables: Operation variables (JSON-serializable)

    Returns:
        The `data` member of the response ({} if the API sent none)

    Raises:
        MondayError: On HTTP failure, GraphQL errors, or a non-JSON body
    """
    name = operation_name(query)
    log_api_call(name, **(variables or {}))

    client = get_http_client()
    response = client.post(API_URL, json={"query": query, "variables": variables or {}})
    response.raise_for_status()

    try:
        payload = response.json()
    except ValueError as e:
        raise MondayError(
            ErrorKind.API_ERROR,
            f"{name}: response was not JSON ({e})",
            details={"status_code": response.status_code},
        ) from e

    _raise_for_graphql_errors(payload)

    data = payload.get("data") or {}
    log_api_result(name)
    return cast(dict[str, Any], data)
