"""
SLA Domain Entities
====================

Pure Python domain entities for audit SLA monitoring.

These entities contain business logic and are free of infrastructure
concerns.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from src.config import SLAWindowType, SLAState


@dataclass
class DeadlineEvaluation:
    """
    Point-in-time SLA reading for one workflow window.

    Drives UI countdown badges and automated escalation.
    """

    window_type: SLAWindowType
    deadline: datetime
    state: SLAState
    remaining_business_days: int
    is_passed: bool

    subject_id: Optional[str] = None
    met_at: Optional[datetime] = None

    def __post_init__(self):
        if self.remaining_business_days < 0:
            raise ValueError("remaining_business_days cannot be negative")

    @property
    def key(self) -> Tuple[Optional[str], SLAWindowType]:
        """Same key as the evaluated SLADeadline, for escalation bookkeeping."""
        return self.subject_id, self.window_type

    @property
    def is_actionable(self) -> bool:
        """Check if the window needs attention (at risk or breached)."""
        return self.state in (SLAState.AT_RISK, SLAState.BREACHED)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "window_type": self.window_type.value,
            "subject_id": self.subject_id,
            "deadline": self.deadline.isoformat(),
            "state": self.state.value,
            "remaining_business_days": self.remaining_business_days,
            "is_passed": self.is_passed,
            "met_at": self.met_at.isoformat() if self.met_at else None,
        }
