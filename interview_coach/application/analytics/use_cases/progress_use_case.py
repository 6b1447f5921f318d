"""Use case for a candidate's practice progress dashboard."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.domain.common.text import clamp_score, round_half_up
from interview_coach.domain.common.timestamps import as_utc
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.interview.entities.answer import METRIC_KEYS
from interview_coach.domain.interview.entities.interview_session import InterviewSession

SCORE_TREND_LENGTH = 12
WEEKLY_SESSIONS_TARGET = 3
WEEKLY_AVERAGE_TARGET = 75
WEEKLY_CLARITY_TARGET = 70


@dataclass
class TrendPoint:
    date: datetime | None
    score: int
    category: str


@dataclass
class CategoryStat:
    category: str
    average_score: int
    sessions: int


@dataclass
class MetricAverage:
    metric: str
    value: int


@dataclass
class Mission:
    id: str
    label: str
    progress: int
    target: int
    completed: bool


@dataclass
class WeeklyGoals:
    weekly_sessions: int
    weekly_average_score: int
    weekly_clarity: int
    missions: list[Mission]
    streak: int = 0
    points: int = 0
    badges: list[str] = field(default_factory=list)


@dataclass
class ProgressReport:
    completed_sessions: int
    average_score: int
    score_trend: list[TrendPoint]
    category_breakdown: list[CategoryStat]
    metric_averages: list[MetricAverage]
    goals: WeeklyGoals


def _mean(values: list[int]) -> int:
    return round_half_up(sum(values) / len(values)) if values else 0


def _session_score(session: InterviewSession) -> int:
    return clamp_score(session.overall_score or 0)


class ProgressUseCase:
    """Summarises completed sessions into trends, breakdowns and weekly missions."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
    ) -> None:
        self.session_repository = session_repository
        self.user_repository = user_repository

    def get_progress(self, user_id: int) -> ProgressReport:
        owner = UserId(user_id)
        sessions = self.session_repository.list_completed_for_user(owner)
        scores = [_session_score(session) for session in sessions]

        score_trend = [
            TrendPoint(
                date=session.ended_at,
                score=_session_score(session),
                category=session.category,
            )
            for session in sessions[-SCORE_TREND_LENGTH:]
        ]

        by_category: dict[str, list[int]] = {}
        for session in sessions:
            by_category.setdefault(session.category, []).append(_session_score(session))
        category_breakdown = [
            CategoryStat(category=category, average_score=_mean(values), sessions=len(values))
            for category, values in by_category.items()
        ]

        metric_averages = []
        for key in METRIC_KEYS:
            total = sum(
                clamp_score(getattr(session.metrics, key)) if session.metrics else 0
                for session in sessions
            )
            value = round_half_up(total / len(sessions)) if sessions else 0
            metric_averages.append(MetricAverage(metric=key, value=value))

        week_start = datetime.now(UTC) - timedelta(days=7)
        weekly = [
            session
            for session in sessions
            if (ended := as_utc(session.ended_at)) is not None and ended >= week_start
        ]
        weekly_average = _mean([_session_score(session) for session in weekly])
        weekly_clarity = _mean(
            [session.metrics.clarity if session.metrics else 0 for session in weekly]
        )

        missions = [
            Mission(
                id="weekly_sessions_3",
                label="Complete 3 sessions this week",
                progress=len(weekly),
                target=WEEKLY_SESSIONS_TARGET,
                completed=len(weekly) >= WEEKLY_SESSIONS_TARGET,
            ),
            Mission(
                id="weekly_avg_75",
                label="Reach weekly average score of 75",
                progress=weekly_average,
                target=WEEKLY_AVERAGE_TARGET,
                completed=weekly_average >= WEEKLY_AVERAGE_TARGET,
            ),
            Mission(
                id="weekly_clarity_70",
                label="Reach weekly clarity score of 70",
                progress=weekly_clarity,
                target=WEEKLY_CLARITY_TARGET,
                completed=weekly_clarity >= WEEKLY_CLARITY_TARGET,
            ),
        ]

        goals = WeeklyGoals(
            weekly_sessions=len(weekly),
            weekly_average_score=weekly_average,
            weekly_clarity=weekly_clarity,
            missions=missions,
        )
        user = self.user_repository.find_by_id(owner)
        if user is not None:
            goals.streak = user.streak
            goals.points = user.points
            goals.badges = list(user.badges)

        return ProgressReport(
            completed_sessions=len(sessions),
            average_score=_mean(scores),
            score_trend=score_trend,
            category_breakdown=category_breakdown,
            metric_averages=metric_averages,
            goals=goals,
        )
