"""
SLA Application DTOs
=====================

Data Transfer Objects handed to the audit and dispute UI.

These Pydantic models handle serialization and validation of SLA
readings. Following YAGNI - only what's needed.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.config import SLAState
from src.audit_sla.domain import DeadlineEvaluation


# ========== Type Aliases for Literals ==========
SLAWindowTypeStr = Literal[
    "agent_acknowledge", "tl_sign_off", "ops_tl_review", "dispute_filing", "reappeal_filing"
]
SLAStateStr = Literal["on_track", "at_risk", "breached", "met"]


# ========== Response DTOs ==========

class SLABadgeResponse(BaseModel):
    """Countdown badge for one SLA window."""
    window_type: SLAWindowTypeStr = Field(..., description="SLA window")
    subject_id: Optional[str] = Field(None, description="Audit or dispute id")
    deadline: datetime = Field(..., description="Deadline at 5 PM America/New_York")
    state: SLAStateStr = Field(..., description="Current SLA state")
    remaining_business_days: int = Field(..., ge=0, description="Business days left, today included")
    is_passed: bool = Field(..., description="Whether the deadline has passed")
    label: str = Field(..., description="Human readable countdown")

    @classmethod
    def from_evaluation(cls, evaluation: DeadlineEvaluation) -> "SLABadgeResponse":
        return cls(
            window_type=evaluation.window_type.value,
            subject_id=evaluation.subject_id,
            deadline=evaluation.deadline,
            state=evaluation.state.value,
            remaining_business_days=evaluation.remaining_business_days,
            is_passed=evaluation.is_passed,
            label=badge_label(evaluation),
        )


def badge_label(evaluation: DeadlineEvaluation) -> str:
    if evaluation.state == SLAState.MET:
        return "Completed"
    if evaluation.is_passed:
        return "Overdue"
    remaining = evaluation.remaining_business_days
    if remaining <= 1:
        return "Last business day"
    return f"{remaining} business days left"
