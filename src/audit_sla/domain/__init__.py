"""
SLA Domain Layer
================

Domain layer for the audit SLA module.

Contains:
- BusinessCalendar: Business-day arithmetic in America/New_York
- Entities: DeadlineEvaluation
- Value Objects: SLAWindowsConfig, SLADeadline
- Domain Services: Stateless business logic (SLACalculator)

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from src.audit_sla.domain.business_calendar import (
    BusinessCalendar,
    BUSINESS_WEEKDAYS,
    DEADLINE_TIME,
    REFERENCE_TIMEZONE,
    get_business_calendar,
    is_business_date,
    system_clock,
)
from src.audit_sla.domain.entities import DeadlineEvaluation
from src.audit_sla.domain.value_objects import (
    SLACalculator,
    SLAWindowsConfig,
    SLADeadline,
)

__all__ = [
    # Calendar
    "BusinessCalendar",
    "BUSINESS_WEEKDAYS",
    "DEADLINE_TIME",
    "REFERENCE_TIMEZONE",
    "get_business_calendar",
    "is_business_date",
    "system_clock",
    # Entities
    "DeadlineEvaluation",
    # Value Objects & Services
    "SLACalculator",
    "SLAWindowsConfig",
    "SLADeadline",
]
