"""
Catalog of common procedural deadlines in Brazilian labor law.
Static configuration: callers look a type up to get its default day count
before calling add_business_days.
"""
import math
from typing import Dict, Optional, Tuple

from backend.models.deadline import DeadlineType
from backend.models.enums import DeadlineUnitEnum

CUSTOM_DEADLINE_CODE = "personalizado"

DEADLINE_TYPES: Tuple[DeadlineType, ...] = (
    DeadlineType(code="contestacao", label="Contestação", day_count=15),
    DeadlineType(code="recurso_ordinario", label="Recurso Ordinário", day_count=8),
    DeadlineType(code="recurso_revista", label="Recurso de Revista", day_count=8),
    DeadlineType(code="agravo_instrumento", label="Agravo de Instrumento", day_count=8),
    DeadlineType(code="agravo_peticao", label="Agravo de Petição", day_count=8),
    DeadlineType(code="embargos_declaracao", label="Embargos de Declaração", day_count=5),
    DeadlineType(code="manifestacao", label="Manifestação", day_count=5),
    DeadlineType(code="contrarrazoes", label="Contrarrazões", day_count=8),
    DeadlineType(code="pericia", label="Perícia (Quesitos)", day_count=5),
    DeadlineType(code="cumprimento_sentenca", label="Cumprimento de Sentença", day_count=15),
    DeadlineType(code="impugnacao", label="Impugnação", day_count=15),
    DeadlineType(code="pagamento", label="Pagamento Espontâneo", day_count=48, unit=DeadlineUnitEnum.HOURS),
    DeadlineType(code=CUSTOM_DEADLINE_CODE, label="Personalizado", day_count=0),
)

_DEADLINE_TYPES_BY_CODE: Dict[str, DeadlineType] = {t.code: t for t in DEADLINE_TYPES}


def get_deadline_type(code: str) -> Optional[DeadlineType]:
    """Look up a deadline type by code; None if unknown."""
    return _DEADLINE_TYPES_BY_CODE.get(code)


def to_business_days(deadline_type: DeadlineType) -> int:
    """Day count of a catalog entry in business days; hour-based entries round up to whole days."""
    if deadline_type.unit == DeadlineUnitEnum.HOURS:
        return math.ceil(deadline_type.day_count / 24)
    return deadline_type.day_count


def resolve_business_days(code: Optional[str], custom_days: Optional[int] = None) -> Optional[int]:
    """
    Number of business days to add for a deadline type.

    Returns custom_days when no code (or the custom code) is given, and None
    when the code is unknown or no count can be determined.
    """
    if not code or code == CUSTOM_DEADLINE_CODE:
        return custom_days

    deadline_type = get_deadline_type(code)
    if deadline_type is None:
        return None
    return to_business_days(deadline_type)
