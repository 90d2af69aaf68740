"""
Shared Kernel Module
====================

Shared infrastructure used by the audit SLA bounded context.

Architecture Pattern: Modular Monolith
- Each module (audit_sla) is a bounded context
- Shared kernel contains only generic infrastructure

DO NOT add SLA business logic to the shared kernel.
"""

__version__ = "1.0.0"
