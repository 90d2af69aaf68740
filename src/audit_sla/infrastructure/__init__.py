"""
SLA Infrastructure Layer
=========================

Infrastructure implementations for the audit SLA module.

Contains:
- External: YAML config loading with hot reload
"""

from src.audit_sla.infrastructure.external import (
    ConfigFileHandler,
    SLAWindowsConfigManager,
)

__all__ = [
    "ConfigFileHandler",
    "SLAWindowsConfigManager",
]
