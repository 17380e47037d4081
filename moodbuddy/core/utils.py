"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional, Tuple
from datetime import date, datetime
import math
import re
from moodbuddy.core.config import settings
from moodbuddy.core.exceptions import ValidationException, field_error

_SCRIPT_TAG = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)


def local_now() -> datetime:
    """Current server-local time. Calendar days are derived from this."""
    return datetime.now()


def local_today() -> date:
    """Current server-local calendar day."""
    return local_now().date()


def success_response(data: Any = None, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Format a success envelope. Extra keyword arguments become top-level keys."""
    response: Dict[str, Any] = {"success": True}
    if message:
        response["message"] = message
    if data is not None:
        response["data"] = data
    response.update(extra)
    return response


def error_response(message: str, errors: Optional[list] = None, **extra: Any) -> Dict[str, Any]:
    """Format an error envelope."""
    response: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        response["errors"] = errors
    response.update(extra)
    return response


def paginated_response(items: list, total: int, page: int, limit: int) -> Dict[str, Any]:
    """Format a page of items with count/total/page/pages metadata."""
    return {
        "success": True,
        "count": len(items),
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit) if limit else 0,
        "data": items,
    }


def validate_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """Apply defaults and bounds to page/limit query parameters."""
    page_num = page if page is not None else 1
    limit_num = limit if limit is not None else settings.DEFAULT_PAGE_SIZE

    errors = []
    if page_num < 1:
        errors.append(field_error("page", "Page must be at least 1"))
    if limit_num < 1 or limit_num > settings.MAX_PAGE_SIZE:
        errors.append(field_error("limit", f"Limit must be between 1 and {settings.MAX_PAGE_SIZE}"))
    if errors:
        raise ValidationException("Invalid pagination parameters", errors=errors)
    return page_num, limit_num


def validate_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    """Reject ranges whose start is after their end."""
    if start_date and end_date and start_date > end_date:
        raise ValidationException(
            "Start date cannot be after end date",
            errors=[field_error("start_date", "Start date cannot be after end date")],
        )


def sanitize_input(value: Any) -> Any:
    """Trim strings and drop embedded <script> blocks. Other values pass through."""
    if isinstance(value, str):
        return _SCRIPT_TAG.sub("", value.strip())
    return value
