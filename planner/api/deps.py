from fastapi import HTTPException, Query

from ..analytics import ALL
from ..models import PRIORITIES, STATUSES


def _literal_error(field: str, allowed: tuple[str, ...], value: str) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=[
            {
                "type": "literal_error",
                "loc": ["query", field],
                "msg": f"{field} must be one of: {ALL}, " + ", ".join(allowed),
                "input": value,
            }
        ],
    )


def parse_status(status: str | None = Query(None)) -> str:
    if status is None or status == "" or status == ALL:
        return ALL
    if status in STATUSES:
        return status
    raise _literal_error("status", STATUSES, status)


def parse_priority(priority: str | None = Query(None)) -> str:
    if priority is None or priority == "" or priority == ALL:
        return ALL
    if priority in PRIORITIES:
        return priority
    raise _literal_error("priority", PRIORITIES, priority)


def parse_category(category: str | None = Query(None)) -> str:
    # Categories are free-form; any non-empty value is an exact-match filter.
    if category is None or category.strip() == "":
        return ALL
    return category
