"""Use case for the points leaderboard."""

from dataclasses import dataclass

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
    UserSessionStats,
)

LEADERBOARD_SIZE = 30


@dataclass
class LeaderboardEntry:
    rank: int
    user_id: int
    name: str
    points: int
    streak: int
    badges: list[str]
    average_score: int
    sessions: int


@dataclass
class Leaderboard:
    entries: list[LeaderboardEntry]
    my_rank: LeaderboardEntry | None


class LeaderboardUseCase:
    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        session_repository: SessionRepositoryProtocol,
    ) -> None:
        self.user_repository = user_repository
        self.session_repository = session_repository

    def get_leaderboard(self, user_id: int) -> Leaderboard:
        """Top users by points, then streak, then earliest sign-up."""
        users = self.user_repository.list_leaderboard(LEADERBOARD_SIZE)
        stats = self.session_repository.stats_for_users([user.id for user in users])
        empty = UserSessionStats(completed_sessions=0, average_score=0)

        entries = []
        for rank, user in enumerate(users, start=1):
            user_stats = stats.get(user.id.value, empty)
            entries.append(
                LeaderboardEntry(
                    rank=rank,
                    user_id=user.id.value,
                    name=user.name,
                    points=user.points,
                    streak=user.streak,
                    badges=list(user.badges),
                    average_score=user_stats.average_score,
                    sessions=user_stats.completed_sessions,
                )
            )

        my_rank = next((entry for entry in entries if entry.user_id == user_id), None)
        return Leaderboard(entries=entries, my_rank=my_rank)
