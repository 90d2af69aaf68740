"""
SLA Application Layer
======================

Application layer for the audit SLA module.

Contains:
- Services: Orchestrate the calendar and window configuration
- DTOs: Data transfer objects for UI serialization

This layer depends on the domain layer and provider interfaces,
but not on concrete infrastructure implementations.
"""

from src.audit_sla.application.dto import SLABadgeResponse, badge_label
from src.audit_sla.application.services import (
    SLADeadlineService,
    ISLAWindowsProvider,
    IHolidayProvider,
    StaticSLAWindowsProvider,
    NoHolidayProvider,
)

__all__ = [
    # DTOs
    "SLABadgeResponse",
    "badge_label",
    # Services
    "SLADeadlineService",
    # Provider Interfaces
    "ISLAWindowsProvider",
    "IHolidayProvider",
    "StaticSLAWindowsProvider",
    "NoHolidayProvider",
]
