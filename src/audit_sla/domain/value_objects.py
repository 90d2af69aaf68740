"""
SLA Value Objects
==================

Immutable value objects for the audit SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from src.config import (
    SLAWindowType, SLAState,
    VALID_SLA_WINDOW_TYPES, DEFAULT_WINDOW_BUSINESS_DAYS
)


class SLACalculator:
    """
    Pure functions for SLA state decisions.

    Stateless utility class: all deadline arithmetic lives in
    BusinessCalendar, this class only turns its answers into states.
    """

    @staticmethod
    def calculate_state(
        deadline: datetime,
        is_passed: bool,
        remaining_business_days: int,
        met_at: Optional[datetime] = None,
        at_risk_threshold_days: int = 1
    ) -> SLAState:
        """
        Calculate current SLA state.

        Args:
            deadline: The SLA deadline
            is_passed: Whether now is strictly after the deadline
            remaining_business_days: Inclusive business days left (0 once passed)
            met_at: When the required action happened, if it did
            at_risk_threshold_days: Remaining days at or below which the SLA is at risk

        Returns:
            SLAState: Current SLA state
        """
        if met_at is not None and met_at <= deadline:
            return SLAState.MET

        if is_passed:
            return SLAState.BREACHED
        if remaining_business_days <= at_risk_threshold_days:
            return SLAState.AT_RISK
        return SLAState.ON_TRACK

    @staticmethod
    def should_escalate(
        current_state: SLAState,
        previous_state: Optional[SLAState] = None
    ) -> bool:
        """
        Escalate on entering at_risk or breached, once per transition.

        Args:
            current_state: Current SLA state
            previous_state: State seen on the previous sweep (if any)
        """
        if current_state == SLAState.BREACHED:
            return previous_state != SLAState.BREACHED
        if current_state == SLAState.AT_RISK:
            return previous_state not in (SLAState.AT_RISK, SLAState.BREACHED)
        return False


class SLAWindowsConfig(BaseModel):
    """
    SLA window configuration loaded from YAML.

    Maps each workflow window to its length in business days.
    Missing windows fall back to the workflow defaults.
    """
    windows: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_WINDOW_BUSINESS_DAYS),
        description="Business days allowed per SLA window"
    )
    at_risk_threshold_days: int = Field(
        default=1,
        ge=0,
        description="Remaining business days at or below which a window is at risk"
    )

    @field_validator("windows")
    @classmethod
    def validate_windows(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Reject unknown or negative windows and fill in missing ones."""
        unknown = sorted(set(v) - set(VALID_SLA_WINDOW_TYPES))
        if unknown:
            raise ValueError(f"unknown SLA windows: {unknown}")

        for name, days in v.items():
            if days < 0:
                raise ValueError(f"SLA window {name} cannot be negative")

        return {**DEFAULT_WINDOW_BUSINESS_DAYS, **v}

    def get_business_days(self, window_type: SLAWindowType) -> int:
        """
        Business days allowed for a window.

        Example:
            agent_acknowledge = 3 -> released Monday, due Thursday 5 PM
        """
        return self.windows[SLAWindowType(window_type).value]


@dataclass(frozen=True)
class SLADeadline:
    """
    Immutable value object representing an SLA window deadline.

    ``started_at`` and ``deadline`` are in the reference zone.
    """
    window_type: SLAWindowType
    started_at: datetime
    deadline: datetime
    business_days: int
    subject_id: Optional[str] = None

    @property
    def key(self) -> Tuple[Optional[str], SLAWindowType]:
        """Identity of the tracked window: one subject can have several windows."""
        return self.subject_id, self.window_type
