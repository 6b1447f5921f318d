"""Use cases for administrator account management."""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.subscription import (
    PLANS,
    SUBSCRIPTION_STATUSES,
)
from interview_coach.domain.identity.entities.user import ACCOUNT_STATUSES, ROLES, User
from interview_coach.domain.identity.exceptions import SelfManagementError, UserNotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_USERS_LIMIT = 200
MIN_LIMIT = 20
MAX_LIMIT = 500


def clamp_admin_limit(limit: int | None, default: int) -> int:
    return max(MIN_LIMIT, min(MAX_LIMIT, limit or default))


def normalize_choice(value: str | None, allowed: tuple[str, ...]) -> str:
    """Lowercased value if it is one of `allowed`, else an empty string."""
    cleaned = (value or "").strip().lower()
    return cleaned if cleaned in allowed else ""


@dataclass
class UserFilters:
    search: str = ""
    role: str = ""
    account_status: str = ""
    plan: str = ""
    limit: int = DEFAULT_USERS_LIMIT


@dataclass
class UserTotals:
    users: int
    active: int
    suspended: int
    admins: int
    flagged: int


@dataclass
class UserDirectory:
    generated_at: datetime
    filters: UserFilters
    totals: UserTotals
    users: list[User]


class AdminUsersUseCase:
    """Lists accounts and applies role, status and subscription changes made by admins."""

    def __init__(self, user_repository: UserRepositoryProtocol) -> None:
        self.user_repository = user_repository

    def _load(self, user_id: int) -> User:
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list_users(
        self,
        search: str | None = None,
        role: str | None = None,
        account_status: str | None = None,
        plan: str | None = None,
        limit: int | None = None,
    ) -> UserDirectory:
        """
        Filter accounts, newest first.

        Unknown filter values are ignored. Totals count every matching
        account, before the limit is applied.
        """
        filters = UserFilters(
            search=(search or "").strip().lower(),
            role=normalize_choice(role, ROLES),
            account_status=normalize_choice(account_status, ACCOUNT_STATUSES),
            plan=normalize_choice(plan, PLANS),
            limit=clamp_admin_limit(limit, DEFAULT_USERS_LIMIT),
        )

        def matches(user: User) -> bool:
            if filters.search and filters.search not in f"{user.name} {user.email}".lower():
                return False
            if filters.role and user.role != filters.role:
                return False
            if filters.account_status and user.account_status != filters.account_status:
                return False
            return not filters.plan or user.subscription.plan == filters.plan

        users = sorted(
            (user for user in self.user_repository.list_all() if matches(user)),
            key=lambda user: user.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        totals = UserTotals(
            users=len(users),
            active=sum(1 for user in users if user.account_status == "active"),
            suspended=sum(1 for user in users if user.account_status == "suspended"),
            admins=sum(1 for user in users if user.is_admin),
            flagged=sum(1 for user in users if user.violation_count > 0),
        )
        return UserDirectory(
            generated_at=datetime.now(UTC),
            filters=filters,
            totals=totals,
            users=users[: filters.limit],
        )

    def update_user(
        self,
        admin_id: int,
        user_id: int,
        role: str | None = None,
        account_status: str | None = None,
        reset_violations: bool = False,
    ) -> User:
        """
        Change a user's role or account status, or clear their violations.

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If the role or status is not allowed
            SelfManagementError: If an admin demotes or suspends their own account
        """
        user = self._load(user_id)

        new_role = normalize_choice(role, ROLES) if role is not None else ""
        if role is not None and not new_role:
            raise ValidationError("Invalid role. Allowed: user/admin.", "role", role)
        new_status = (
            normalize_choice(account_status, ACCOUNT_STATUSES) if account_status is not None else ""
        )
        if account_status is not None and not new_status:
            raise ValidationError(
                "Invalid account status. Allowed: active/suspended.",
                "account_status",
                account_status,
            )

        if admin_id == user_id:
            if new_role and new_role != user.role:
                raise SelfManagementError("You cannot change your own role.", "role", new_role)
            if new_status == "suspended":
                raise SelfManagementError(
                    "You cannot suspend your own account.", "account_status", new_status
                )

        if new_role:
            user.change_role(new_role)
        if new_status:
            user.change_account_status(new_status)
        if reset_violations:
            user.reset_violations()

        user = self.user_repository.save(user)
        logger.info(
            "admin_user_updated",
            admin_id=admin_id,
            user_id=user_id,
            role=user.role,
            account_status=user.account_status,
            reset_violations=reset_violations,
        )
        return user

    def update_subscription(
        self,
        admin_id: int,
        user_id: int,
        plan: str | None,
        status: str | None,
        currency: str | None = None,
        days: int | None = None,
    ) -> User:
        """
        Override a user's subscription.

        Args:
            admin_id: Admin making the change
            user_id: Account to change
            plan: free | pro | elite
            status: active | expired | cancelled
            currency: Defaults to the current subscription currency
            days: Period length, 0..730; defaults to the plan's standard length

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If the plan, status or currency is not allowed
        """
        user = self._load(user_id)

        new_plan = normalize_choice(plan, PLANS)
        if not new_plan:
            raise ValidationError("Valid plan is required (free/pro/elite).", "plan", plan)
        new_status = normalize_choice(status, SUBSCRIPTION_STATUSES)
        if not new_status:
            raise ValidationError(
                "Valid status is required (active/expired/cancelled).", "status", status
            )
        new_currency = (currency or user.subscription.currency or "INR").strip().upper()

        user.subscription.override(
            plan=new_plan,
            status=new_status,
            currency=new_currency,
            now=datetime.now(UTC),
            days=days,
        )
        user = self.user_repository.save(user)
        logger.info(
            "admin_subscription_updated",
            admin_id=admin_id,
            user_id=user_id,
            plan=new_plan,
            status=new_status,
        )
        return user
