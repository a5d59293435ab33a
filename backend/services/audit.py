"""
Audit service: records changes to holidays and deadlines in the audit_logs table.
Uses affected_entity_type / affected_entity_id for the record that was affected by the action.
"""
from datetime import date, datetime
from typing import Any, Optional
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore
from backend.models import AuditLog


def _json_safe(obj: Any) -> Any:
    """Convert values to JSON-serializable form for the JSON columns."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return {k: _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(v) for v in obj]
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if hasattr(obj, "value"):  # enum
        return obj.value
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)


async def log_action(
    db: AsyncSession,
    action: str,
    affected_entity_type: str,
    *,
    affected_entity_id: Optional[str] = None,
    old_values: Optional[dict[str, Any]] = None,
    new_values: Optional[dict[str, Any]] = None,
    actor: Optional[str] = None,
    summary: Optional[str] = None,
    request_method: Optional[str] = None,
    request_path: Optional[str] = None,
) -> None:
    """
    Write an audit log entry. Call before commit (same transaction).
    affected_entity_type = kind of record affected (HOLIDAY, DEADLINE, SUSPENSION).
    """
    old_safe = _json_safe(old_values) if old_values is not None else None
    new_safe = _json_safe(new_values) if new_values is not None else None

    entry = AuditLog(
        action=action,
        affected_entity_type=affected_entity_type,
        affected_entity_id=affected_entity_id,
        old_values=old_safe,
        new_values=new_safe,
        actor=actor,
        summary=summary,
        request_method=request_method,
        request_path=request_path,
    )
    db.add(entry)
