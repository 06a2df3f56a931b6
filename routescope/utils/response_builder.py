# routescope/utils/response_builder.py
"""
Unified response builder for all FastAPI routes.

Ensures consistent response format:
{
    "success": bool,
    "message": str,
    "data": { ... } | null,
    "error": { ... } | null,
    "timestamp": "<UTC ISO>",
    "identity": "<optional document identity>"
}
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(
    data: Any = None,
    message: str = "OK",
    identity: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Return standardized success response.
    """
    return {
        "success": True,
        "message": message,
        "data": data,
        "error": None,
        "timestamp": _now(),
        "identity": identity,
    }


def error_response(
    message: str = "Error",
    error: Any = None,
    status_code: int = 400,
    identity: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Return standardized error response.
    """
    if isinstance(error, Exception):
        error = str(error)
    return {
        "success": False,
        "message": message,
        "data": None,
        "error": {"detail": error, "status_code": status_code},
        "timestamp": _now(),
        "identity": identity,
    }
