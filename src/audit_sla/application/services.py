"""
SLA Application Services
=========================

Application services orchestrate the business calendar and the SLA
window configuration for the audit and dispute workflow.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (providers), not concrete implementations
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from src.audit_sla.domain import (
    BusinessCalendar,
    DeadlineEvaluation,
    SLACalculator,
    SLADeadline,
    SLAWindowsConfig,
    get_business_calendar,
)
from src.audit_sla.domain.business_calendar import Instant
from src.audit_sla.application.dto import SLABadgeResponse
from src.config import SLAState, SLAWindowType
from src.core.exceptions import SLAWindowExpiredException
from src.shared.infrastructure.logging import get_context_logger, get_logger, log_latency

logger = get_logger(__name__)

WindowKey = Tuple[Optional[str], SLAWindowType]


# ========== Provider Interfaces (Dependency Inversion) ==========

class ISLAWindowsProvider(ABC):
    """Interface for SLA window configuration access."""

    @abstractmethod
    def get_config(self) -> SLAWindowsConfig:
        """Get current SLA window configuration."""


class IHolidayProvider(ABC):
    """Interface for campaign holiday calendars."""

    @abstractmethod
    def get_holidays(self, campaign_id: Optional[str] = None) -> Set[date]:
        """Dates (reference zone) on which no SLA day elapses."""


class StaticSLAWindowsProvider(ISLAWindowsProvider):
    """Fixed configuration, for callers without a config file."""

    def __init__(self, config: Optional[SLAWindowsConfig] = None):
        self._config = config or SLAWindowsConfig()

    def get_config(self) -> SLAWindowsConfig:
        return self._config


class NoHolidayProvider(IHolidayProvider):
    """Campaigns without a holiday calendar."""

    def get_holidays(self, campaign_id: Optional[str] = None) -> Set[date]:
        return set()


# ========== Application Services ==========

class SLADeadlineService:
    """
    Computes and evaluates business-day deadlines for workflow windows.

    All "now" readings go through the calendar clock unless an explicit
    ``now`` is passed, so sweeps can evaluate many deadlines at one instant.
    """

    def __init__(
        self,
        config_provider: ISLAWindowsProvider,
        calendar: Optional[BusinessCalendar] = None,
        holiday_provider: Optional[IHolidayProvider] = None
    ):
        self._config_provider = config_provider
        self._calendar = calendar or get_business_calendar()
        self._holiday_provider = holiday_provider or NoHolidayProvider()

    @property
    def calendar(self) -> BusinessCalendar:
        return self._calendar

    @property
    def config_provider(self) -> ISLAWindowsProvider:
        return self._config_provider

    def deadline_for(
        self,
        window_type: SLAWindowType,
        started_at: Instant,
        subject_id: Optional[str] = None
    ) -> SLADeadline:
        """
        Deadline of a workflow window started at ``started_at``.

        Args:
            window_type: Which workflow window
            started_at: Release, submission or rejection instant
            subject_id: Audit or dispute id, for logs and badges

        Returns:
            SLADeadline pinned to 5 PM America/New_York
        """
        window_type = SLAWindowType(window_type)
        business_days = self._config_provider.get_config().get_business_days(window_type)
        started = self._calendar.to_reference_zone(started_at)
        deadline = self._calendar.get_business_day_deadline(started, business_days)

        get_context_logger(__name__, subject_id).debug(
            "SLA deadline computed",
            extra={
                "window_type": window_type.value,
                "business_days": business_days,
                "started_at": started.isoformat(),
                "deadline": deadline.isoformat(),
            },
        )

        return SLADeadline(
            window_type=window_type,
            started_at=started,
            deadline=deadline,
            business_days=business_days,
            subject_id=subject_id,
        )

    def agent_acknowledge_deadline(self, released_at: Instant, audit_id: Optional[str] = None) -> SLADeadline:
        """Agent acknowledge/dispute window, counted from audit release."""
        return self.deadline_for(SLAWindowType.AGENT_ACKNOWLEDGE, released_at, audit_id)

    def tl_sign_off_deadline(self, released_at: Instant, audit_id: Optional[str] = None) -> SLADeadline:
        """Team lead sign-off window, counted from audit release."""
        return self.deadline_for(SLAWindowType.TL_SIGN_OFF, released_at, audit_id)

    def ops_tl_review_deadline(self, submitted_at: Instant, dispute_id: Optional[str] = None) -> SLADeadline:
        """Ops TL review window, counted from dispute submission."""
        return self.deadline_for(SLAWindowType.OPS_TL_REVIEW, submitted_at, dispute_id)

    def evaluate(
        self,
        deadline: SLADeadline,
        met_at: Optional[Instant] = None,
        now: Optional[Instant] = None
    ) -> DeadlineEvaluation:
        """
        Read the state of a deadline at ``now``.

        Args:
            deadline: Deadline to evaluate
            met_at: When the required action happened, if it did
            now: Evaluation instant (defaults to the calendar clock)

        Once ``met_at`` is set the window is closed: ``is_passed`` is read at
        ``met_at`` instead of ``now`` and no business days remain.
        """
        current = self._calendar.now() if now is None else self._calendar.to_reference_zone(now)
        met = self._calendar.to_reference_zone(met_at) if met_at is not None else None
        config = self._config_provider.get_config()

        if met is None:
            is_passed = self._calendar.is_deadline_passed(deadline.deadline, now=current)
            remaining = self._calendar.get_remaining_business_days(deadline.deadline, now=current)
        else:
            is_passed = self._calendar.is_deadline_passed(deadline.deadline, now=met)
            remaining = 0
        state = SLACalculator.calculate_state(
            deadline.deadline, is_passed, remaining, met, config.at_risk_threshold_days
        )

        return DeadlineEvaluation(
            window_type=deadline.window_type,
            deadline=deadline.deadline,
            state=state,
            remaining_business_days=remaining,
            is_passed=is_passed,
            subject_id=deadline.subject_id,
            met_at=met,
        )

    def badge(
        self,
        deadline: SLADeadline,
        met_at: Optional[Instant] = None,
        now: Optional[Instant] = None
    ) -> SLABadgeResponse:
        """UI countdown badge for a deadline."""
        return SLABadgeResponse.from_evaluation(self.evaluate(deadline, met_at, now))

    def collect_escalations(
        self,
        deadlines: Iterable[SLADeadline],
        previous_states: Optional[Dict[WindowKey, SLAState]] = None,
        now: Optional[Instant] = None
    ) -> List[DeadlineEvaluation]:
        """
        Evaluate open deadlines and keep the ones that need escalating.

        Args:
            deadlines: Open (not yet met) deadlines
            previous_states: Last known state per window, keyed by
                ``SLADeadline.key`` (subject_id, window_type)
            now: Sweep instant, shared by every deadline

        Returns:
            Evaluations that just entered at_risk or breached
        """
        previous_states = previous_states or {}
        current = self._calendar.now() if now is None else self._calendar.to_reference_zone(now)
        deadlines = list(deadlines)
        escalations = []

        with log_latency(logger, "sla_escalation_sweep", deadlines=len(deadlines)):
            for deadline in deadlines:
                evaluation = self.evaluate(deadline, now=current)
                previous = previous_states.get(deadline.key)
                if SLACalculator.should_escalate(evaluation.state, previous):
                    escalations.append(evaluation)

        logger.info(
            "SLA escalation sweep finished",
            extra={"evaluated": len(deadlines), "escalations": len(escalations)},
        )
        return escalations

    def ensure_within_window(
        self,
        window_type: SLAWindowType,
        last_action_at: Instant,
        subject_id: Optional[str] = None,
        now: Optional[Instant] = None
    ) -> SLADeadline:
        """
        Guard for actions that must happen inside a window.

        Raises:
            SLAWindowExpiredException: the window deadline has passed
        """
        deadline = self.deadline_for(window_type, last_action_at, subject_id)
        if self._calendar.is_deadline_passed(deadline.deadline, now=now):
            get_context_logger(__name__, subject_id).warning(
                "SLA window closed",
                extra={
                    "window_type": deadline.window_type.value,
                    "deadline": deadline.deadline.isoformat(),
                },
            )
            raise SLAWindowExpiredException(deadline.window_type.value, deadline.deadline, subject_id)
        return deadline

    def calculate_due_date(
        self,
        start: Instant,
        business_days: int,
        campaign_id: Optional[str] = None
    ) -> datetime:
        """
        Due date that also skips the campaign's holidays.

        Time of day is kept, as in BusinessCalendar.add_business_days.
        Without holidays both give the same answer.
        """
        holidays = self._holiday_provider.get_holidays(campaign_id)
        return self._calendar.add_business_days(start, business_days, skip=holidays)
