"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from interview_coach.database import Base


class User(Base):
    """Registered candidate or administrator."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    account_status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    auth_provider: Mapped[str] = mapped_column(String(20), nullable=False, default="local")

    # Career profile
    target_role: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    experience_level: Mapped[str] = mapped_column(String(60), nullable=False, default="")
    preferred_companies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    profile_summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    resume_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Gamification
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    badges: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_practice_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Subscription
    subscription_plan: Mapped[str] = mapped_column(String(20), nullable=False, default="free")
    subscription_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active"
    )
    subscription_currency: Mapped[str] = mapped_column(String(3), nullable=False, default="INR")
    subscription_period_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    subscription_period_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    subscription_auto_renew: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    subscription_last_payment_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Integrity
    violation_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_violation_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_violation_reason: Mapped[str] = mapped_column(String(180), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    sessions: Mapped[list["InterviewSession"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class Question(Base):
    """Question bank entry."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    category: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    role_focus: Mapped[str] = mapped_column(String(120), nullable=False, default="General")
    company_context: Mapped[str] = mapped_column(String(120), nullable=False, default="General")
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="intermediate")
    source: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Question."""
        return f"<Question(id={self.id}, category='{self.category}', prompt='{self.prompt[:40]}')>"


class InterviewSession(Base):
    """Mock interview session with its question set and final assessment."""

    __tablename__ = "interview_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    target_role: Mapped[str] = mapped_column(String(120), nullable=False, default="General")
    company_simulation: Mapped[str] = mapped_column(
        String(120), nullable=False, default="Startup"
    )
    question_source: Mapped[str] = mapped_column(String(20), nullable=False)
    focus_areas: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    job_description_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), index=True, nullable=False)

    metrics: Mapped[dict[str, int] | None] = mapped_column(JSON, nullable=True)
    strengths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    improvements: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    recommendation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    job_fit_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    overall_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    certificate_id: Mapped[str | None] = mapped_column(
        String(32), unique=True, index=True, nullable=True
    )
    certificate_issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user: Mapped[User] = relationship(back_populates="sessions")
    questions: Mapped[list["SessionQuestion"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionQuestion.position",
    )
    integrity_events: Mapped[list["IntegrityEvent"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="IntegrityEvent.id",
    )

    def __repr__(self) -> str:
        """String representation of InterviewSession."""
        return (
            f"<InterviewSession(id={self.id}, user_id={self.user_id}, "
            f"category='{self.category}', status='{self.status}')>"
        )


class SessionQuestion(Base):
    """Question asked within a session, snapshotted at creation time."""

    __tablename__ = "session_questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("interview_sessions.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    question_ref: Mapped[int | None] = mapped_column(
        ForeignKey("questions.id", ondelete="SET NULL"), nullable=True
    )
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    answer: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    session: Mapped[InterviewSession] = relationship(back_populates="questions")

    def __repr__(self) -> str:
        """String representation of SessionQuestion."""
        return f"<SessionQuestion(id={self.id}, session_id={self.session_id})>"


class IntegrityEvent(Base):
    """Proctoring signal raised by the client during a session."""

    __tablename__ = "integrity_events"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("interview_sessions.id", ondelete="CASCADE"), index=True, nullable=False
    )
    event_type: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str] = mapped_column(String(180), nullable=False)
    meta: Mapped[str] = mapped_column(String(180), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    session: Mapped[InterviewSession] = relationship(back_populates="integrity_events")

    def __repr__(self) -> str:
        """String representation of IntegrityEvent."""
        return f"<IntegrityEvent(id={self.id}, type='{self.event_type}')>"


class Payment(Base):
    """UPI payment intent and its settlement state."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    payment_id: Mapped[str] = mapped_column(String(40), unique=True, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    plan: Mapped[str] = mapped_column(String(20), nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    upi_id: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    upi_uri: Mapped[str] = mapped_column(Text, nullable=False, default="")
    qr_code_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    utr: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship(back_populates="payments")

    def __repr__(self) -> str:
        """String representation of Payment."""
        return f"<Payment(payment_id='{self.payment_id}', status='{self.status}')>"
