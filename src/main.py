"""
QA Audit SLA - Composition Root
================================

Wires the business-day deadline engine for the QA audit workflow.

Modules:
- Audit SLA: Business-day deadlines for acknowledgement, sign-off and disputes

Clean Architecture Layers:
- Application: Services and DTOs
- Domain: Business calendar, entities and value objects
- Infrastructure: YAML config with hot reload
"""

from typing import Optional

# Configuration and Core
from src.config import Settings, get_settings

# Audit SLA Module
from src.audit_sla.application import SLADeadlineService, IHolidayProvider
from src.audit_sla.domain import BusinessCalendar
from src.audit_sla.infrastructure import SLAWindowsConfigManager

# Logging
from src.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


def create_deadline_service(
    settings: Optional[Settings] = None,
    calendar: Optional[BusinessCalendar] = None,
    holiday_provider: Optional[IHolidayProvider] = None,
    configure_logging: bool = True,
) -> SLADeadlineService:
    """
    Build an SLADeadlineService from settings.

    STARTUP:
    1. Setup structured logging
    2. Load SLA window configuration
    3. Start watching the config file (when enabled)

    Call ``service.config_provider.stop_watching()`` on shutdown when watching.
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(settings.log_level, settings.environment)
    logger.info("Starting audit SLA engine", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Loading SLA window configuration")
    config_manager = SLAWindowsConfigManager()
    config_manager.load(settings.sla_config_path)
    if settings.sla_config_watch:
        config_manager.start_watching()

    return SLADeadlineService(config_manager, calendar, holiday_provider)
