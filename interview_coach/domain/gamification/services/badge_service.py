"""
Domain service for practice rewards: points, daily streaks and badges.

This is a pure domain service with no infrastructure dependencies.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from interview_coach.domain.common.text import round_half_up
from interview_coach.domain.identity.entities.user import User

BASE_POINTS = 20
HIGH_SCORE_THRESHOLD = 85
HIGH_SCORE_BONUS = 10

FIRST_MOCK = "First Mock"
SHARP_SPEAKER = "Sharp Speaker"
INTERVIEW_ACE = "Interview Ace"
CONSISTENCY_STREAK = "Consistency Streak"
INTERVIEW_ATHLETE = "Interview Athlete"


@dataclass
class GamificationResult:
    points_earned: int
    total_points: int
    streak: int
    awarded_badges: list[str] = field(default_factory=list)


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).date()


class BadgeService:
    """
    Rewards a completed session.

    Points are 20 plus a fifth of the session score, with a bonus of 10
    for scores of 85 and above. Streaks count consecutive UTC days.
    """

    def points_for(self, session_score: int) -> int:
        points = BASE_POINTS + round_half_up(session_score / 5)
        if session_score >= HIGH_SCORE_THRESHOLD:
            points += HIGH_SCORE_BONUS
        return points

    def next_streak(self, streak: int, last_practice: datetime | None, now: datetime) -> int:
        if last_practice is None:
            return 1
        gap = (_utc_date(now) - _utc_date(last_practice)).days
        if gap == 0:
            return streak or 1
        if gap == 1:
            return streak + 1
        return 1

    def badges_for(self, session_score: int, streak: int, completed_sessions: int) -> list[str]:
        earned: list[str] = []
        if completed_sessions == 1:
            earned.append(FIRST_MOCK)
        if session_score >= 80:
            earned.append(SHARP_SPEAKER)
        if session_score >= 90:
            earned.append(INTERVIEW_ACE)
        if streak >= 3:
            earned.append(CONSISTENCY_STREAK)
        if completed_sessions >= 10:
            earned.append(INTERVIEW_ATHLETE)
        return earned

    def apply(
        self, user: User, session_score: int, completed_sessions: int, now: datetime
    ) -> GamificationResult:
        """
        Update the user's points, streak and badges for a completed session.

        Args:
            user: Candidate who completed the session
            session_score: Overall session score
            completed_sessions: Completed sessions including this one
            now: Completion time

        Returns:
            GamificationResult with only the newly awarded badges
        """
        points_earned = self.points_for(session_score)
        streak = self.next_streak(user.streak, user.last_practice_date, now)
        awarded = [
            badge
            for badge in self.badges_for(session_score, streak, completed_sessions)
            if badge not in user.badges
        ]
        user.apply_practice_reward(
            points_earned=points_earned,
            streak=streak,
            badges=[*user.badges, *awarded],
            practiced_at=now,
        )
        return GamificationResult(
            points_earned=points_earned,
            total_points=user.points,
            streak=user.streak,
            awarded_badges=awarded,
        )
