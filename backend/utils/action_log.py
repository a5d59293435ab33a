"""
Action logging: writes what was changed to the application log (file + console).
Use this so logs show e.g. "holiday created" and "deadline suspended".
"""
import logging
from typing import Any, Optional
from fastapi import Request

ACTION_LOGGER = logging.getLogger("prazos.actions")


def get_client_ip(request: Request) -> Optional[str]:
    """Client IP; respects X-Forwarded-For when behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


def _actor_context(actor: Optional[str] = None, client_ip: Optional[str] = None) -> str:
    parts = []
    if actor:
        parts.append(f"actor={actor}")
    if client_ip:
        parts.append(f"ip={client_ip}")
    return " | ".join(parts) if parts else "anonymous"


def log_user_action(
    action: str,
    *,
    actor: Optional[str] = None,
    client_ip: Optional[str] = None,
    **details: Any,
) -> None:
    """
    Log an action to the application log (logs/prazos.log and console).

    Example:
        log_user_action("CREATE_HOLIDAY", holiday_id=h.id, date="2026-01-20", court="TRT2")
        log_user_action("SUSPEND_DEADLINE", deadline_id=d.id, remaining_days=4)
    """
    ctx = _actor_context(actor=actor, client_ip=client_ip)
    extra_parts = [f"{k}={v!r}" if isinstance(v, str) else f"{k}={v}" for k, v in details.items()]
    extra = " " + " ".join(extra_parts) if extra_parts else ""
    message = f"USER_ACTION | {ctx} | {action}{extra}"
    ACTION_LOGGER.info(message)
