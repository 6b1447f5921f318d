"""Use case for the administrator's platform health overview."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.domain.common.text import clamp_score, round_half_up
from interview_coach.domain.common.timestamps import as_utc
from interview_coach.domain.interview.constants import QUESTION_SOURCES
from interview_coach.domain.interview.entities.interview_session import InterviewSession

logger = structlog.get_logger(__name__)

TREND_DAYS = 14
TOP_RISK_SESSIONS = 8
STALE_AGE_HOURS = 24
STALE_MAX_PROGRESS = 40


@dataclass
class OverviewTotals:
    users: int
    sessions: int
    completed: int
    in_progress: int
    dropoff_percent: int
    average_score: int


@dataclass
class SourceShare:
    source: str
    count: int
    percent: int


@dataclass
class CategoryPerformance:
    category: str
    sessions: int
    average_score: int


@dataclass
class TrendDay:
    date: str
    started: int = 0
    completed: int = 0
    average_score: int = 0


@dataclass
class RiskSession:
    session_id: int
    user_name: str
    target_role: str
    company_simulation: str
    category: str
    created_at: datetime | None
    age_hours: int
    questions_count: int
    answered_count: int
    progress_percent: int
    risk_score: int


@dataclass
class Alert:
    severity: str
    title: str
    detail: str


@dataclass
class AdminOverview:
    generated_at: datetime
    totals: OverviewTotals
    source_breakdown: list[SourceShare]
    category_breakdown: list[CategoryPerformance]
    trend: list[TrendDay]
    top_risk_sessions: list[RiskSession]
    alerts: list[Alert]


def _date_key(value: datetime | None) -> str:
    value = as_utc(value)
    return value.astimezone(UTC).date().isoformat() if value else ""


def build_alerts(
    total_sessions: int,
    completed: int,
    dropoff_percent: int,
    average_score: int,
    stale_count: int,
    ai_share_percent: int,
) -> list[Alert]:
    """Turn the headline numbers into alerts, most severe checks first."""
    if not total_sessions:
        return [
            Alert(
                severity="info",
                title="No session data yet",
                detail="Create or complete sessions to unlock admin analytics trends.",
            )
        ]

    alerts: list[Alert] = []
    if dropoff_percent >= 45:
        alerts.append(
            Alert(
                severity="high",
                title="High drop-off trend",
                detail=(
                    f"In-progress sessions are {dropoff_percent}% of total. "
                    "Investigate onboarding friction and reminder nudges."
                ),
            )
        )
    elif dropoff_percent >= 30:
        alerts.append(
            Alert(
                severity="medium",
                title="Drop-off trend rising",
                detail=(
                    f"Drop-off is {dropoff_percent}%. "
                    "Monitor stale sessions and improve completion guidance."
                ),
            )
        )

    if completed >= 5 and average_score < 65:
        alerts.append(
            Alert(
                severity="medium",
                title="Low average performance",
                detail=(
                    f"Completed-session average is {average_score}/100. "
                    "Consider stronger coaching prompts and STAR guidance."
                ),
            )
        )

    if stale_count >= 5:
        alerts.append(
            Alert(
                severity="high",
                title="Many stale in-progress sessions",
                detail=(
                    f"{stale_count} sessions are stale for 24h+ with low progress. "
                    "Trigger re-engagement campaigns."
                ),
            )
        )
    elif stale_count >= 2:
        alerts.append(
            Alert(
                severity="medium",
                title="Stale sessions detected",
                detail=(
                    f"{stale_count} sessions are stale for 24h+ with low progress. "
                    "Follow up with users."
                ),
            )
        )

    if ai_share_percent < 20:
        alerts.append(
            Alert(
                severity="info",
                title="Low AI question usage",
                detail=(
                    f"AI/resume sourced sessions are {ai_share_percent}%. "
                    "Encourage AI mode for varied practice quality."
                ),
            )
        )

    if not alerts:
        alerts.append(
            Alert(
                severity="info",
                title="Platform signals are stable",
                detail="No major risk spikes detected in current session performance trends.",
            )
        )
    return alerts


class AdminOverviewUseCase:
    """Aggregates every session on the platform into totals, trends and risk signals."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
    ) -> None:
        self.session_repository = session_repository
        self.user_repository = user_repository

    def _risk_row(self, session: InterviewSession, user_name: str, now: datetime) -> RiskSession:
        questions_count = len(session.questions)
        answered_count = session.answered_count
        progress = clamp_score(answered_count / questions_count * 100) if questions_count else 0
        created_at = as_utc(session.created_at)
        age_hours = (
            round_half_up((now - created_at).total_seconds() / 3600) if created_at else 0
        )
        return RiskSession(
            session_id=session.id.value,
            user_name=user_name,
            target_role=session.target_role,
            company_simulation=session.company_simulation,
            category=session.category,
            created_at=created_at,
            age_hours=age_hours,
            questions_count=questions_count,
            answered_count=answered_count,
            progress_percent=progress,
            risk_score=round_half_up(age_hours * 1.4 + (100 - progress) * 1.1),
        )

    def get_overview(self) -> AdminOverview:
        now = datetime.now(UTC)
        sessions = self.session_repository.list_all()
        total_users = self.user_repository.count()

        completed_sessions = [session for session in sessions if session.is_completed]
        in_progress_sessions = [session for session in sessions if not session.is_completed]
        total = len(sessions)
        completed = len(completed_sessions)
        in_progress = len(in_progress_sessions)
        dropoff = clamp_score(in_progress / total * 100) if total else 0
        average_score = (
            round_half_up(sum(s.overall_score or 0 for s in completed_sessions) / completed)
            if completed
            else 0
        )

        source_counts = dict.fromkeys(QUESTION_SOURCES, 0)
        for session in sessions:
            source = session.question_source
            if source not in source_counts:
                source = "predefined"
            source_counts[source] += 1
        source_breakdown = [
            SourceShare(
                source=source,
                count=count,
                percent=clamp_score(count / total * 100) if total else 0,
            )
            for source, count in source_counts.items()
        ]

        by_category: dict[str, list[int]] = {}
        for session in completed_sessions:
            by_category.setdefault(session.category, []).append(session.overall_score or 0)
        category_breakdown = [
            CategoryPerformance(
                category=category,
                sessions=len(scores),
                average_score=round_half_up(sum(scores) / len(scores)),
            )
            for category, scores in by_category.items()
        ]

        today = now.date()
        days = [today - timedelta(days=offset) for offset in range(TREND_DAYS - 1, -1, -1)]
        trend = {day.isoformat(): TrendDay(date=day.isoformat()) for day in days}
        trend_scores: dict[str, list[int]] = {key: [] for key in trend}
        for session in sessions:
            started = _date_key(session.created_at)
            if started in trend:
                trend[started].started += 1
            if session.is_completed:
                finished = _date_key(session.ended_at or session.created_at)
                if finished in trend:
                    trend[finished].completed += 1
                    trend_scores[finished].append(session.overall_score or 0)
        for key, scores in trend_scores.items():
            if scores:
                trend[key].average_score = round_half_up(sum(scores) / len(scores))

        owners = self.user_repository.find_by_ids(
            list({session.user_id for session in in_progress_sessions})
        )
        risk_rows = [
            self._risk_row(
                session,
                owners[session.user_id.value].name
                if session.user_id.value in owners
                else "Candidate",
                now,
            )
            for session in in_progress_sessions
        ]
        stale_count = sum(
            1
            for row in risk_rows
            if row.age_hours >= STALE_AGE_HOURS and row.progress_percent <= STALE_MAX_PROGRESS
        )
        top_risk = sorted(risk_rows, key=lambda row: row.risk_score, reverse=True)[
            :TOP_RISK_SESSIONS
        ]
        ai_share = sum(item.percent for item in source_breakdown if item.source in ("ai", "resume"))

        logger.debug("admin_overview_built", sessions=total, in_progress=in_progress)
        return AdminOverview(
            generated_at=now,
            totals=OverviewTotals(
                users=total_users,
                sessions=total,
                completed=completed,
                in_progress=in_progress,
                dropoff_percent=dropoff,
                average_score=average_score,
            ),
            source_breakdown=source_breakdown,
            category_breakdown=category_breakdown,
            trend=list(trend.values()),
            top_risk_sessions=top_risk,
            alerts=build_alerts(total, completed, dropoff, average_score, stale_count, ai_share),
        )
