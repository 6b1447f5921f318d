"""Mapper for InterviewSession ORM ↔ Domain conversion."""

from datetime import datetime
from typing import Any

from interview_coach.domain.common.value_objects.ids import (
    InterviewSessionId,
    QuestionId,
    SessionQuestionId,
    UserId,
)
from interview_coach.domain.interview.entities.answer import Answer, ScoreCard, TimelineMarker
from interview_coach.domain.interview.entities.interview_session import (
    Certificate,
    IntegrityEvent,
    InterviewSession,
    SessionQuestion,
    SessionSummary,
)
from interview_coach.domain.common.timestamps import as_utc
from interview_coach.models import IntegrityEvent as IntegrityEventORM
from interview_coach.models import InterviewSession as InterviewSessionORM
from interview_coach.models import SessionQuestion as SessionQuestionORM


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    try:
        return as_utc(datetime.fromisoformat(str(value)))
    except ValueError:
        return None


def answer_to_json(answer: Answer) -> dict[str, Any]:
    """Serialize an answer for the JSON column."""
    return {
        "answer_type": answer.answer_type,
        "transcript": answer.transcript,
        "raw_text": answer.raw_text,
        "media_reference": answer.media_reference,
        "duration_sec": answer.duration_sec,
        "speaking_speed_wpm": answer.speaking_speed_wpm,
        "facial_expression_score": answer.facial_expression_score,
        "confidence_self_rating": answer.confidence_self_rating,
        "scores": answer.scores.to_json(),
        "feedback_tips": list(answer.feedback_tips),
        "improvements": list(answer.improvements),
        "relevance_notes": answer.relevance_notes,
        "timeline_markers": [marker.to_json() for marker in answer.timeline_markers],
        "answered_at": answer.answered_at.isoformat() if answer.answered_at else None,
    }


def answer_from_json(data: dict[str, Any]) -> Answer:
    return Answer(
        answer_type=str(data.get("answer_type") or "text"),
        transcript=str(data.get("transcript") or ""),
        raw_text=str(data.get("raw_text") or ""),
        media_reference=str(data.get("media_reference") or ""),
        duration_sec=float(data.get("duration_sec") or 0),
        speaking_speed_wpm=int(data.get("speaking_speed_wpm") or 0),
        facial_expression_score=float(data.get("facial_expression_score") or 0),
        confidence_self_rating=float(data.get("confidence_self_rating") or 0),
        scores=ScoreCard.from_json(data.get("scores")),
        feedback_tips=list(data.get("feedback_tips") or []),
        improvements=list(data.get("improvements") or []),
        relevance_notes=str(data.get("relevance_notes") or ""),
        timeline_markers=[
            TimelineMarker.from_json(item) for item in data.get("timeline_markers") or []
        ],
        answered_at=_parse_datetime(data.get("answered_at")),
    )


class SessionMapper:
    """Mapper for InterviewSession ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: InterviewSessionORM) -> InterviewSession:
        certificate = None
        if orm_model.certificate_id:
            certificate = Certificate(
                id=orm_model.certificate_id,
                issued_at=as_utc(orm_model.certificate_issued_at)
                or as_utc(orm_model.ended_at)
                or as_utc(orm_model.created_at),
            )

        return InterviewSession(
            id=InterviewSessionId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            category=orm_model.category,
            question_source=orm_model.question_source,
            target_role=orm_model.target_role,
            company_simulation=orm_model.company_simulation,
            focus_areas=list(orm_model.focus_areas or []),
            job_description_text=orm_model.job_description_text,
            status=orm_model.status,
            questions=[
                SessionQuestion(
                    id=SessionQuestionId(question.id),
                    position=question.position,
                    prompt=question.prompt,
                    tags=list(question.tags or []),
                    question_ref=QuestionId(question.question_ref)
                    if question.question_ref
                    else None,
                    answer=answer_from_json(question.answer) if question.answer else None,
                )
                for question in orm_model.questions
            ],
            integrity_events=[
                IntegrityEvent(
                    event_type=event.event_type,
                    reason=event.reason,
                    meta=event.meta,
                    created_at=as_utc(event.created_at) or event.created_at,
                )
                for event in orm_model.integrity_events
            ],
            metrics=ScoreCard.from_json(orm_model.metrics) if orm_model.metrics else None,
            summary=SessionSummary(
                strengths=list(orm_model.strengths or []),
                improvements=list(orm_model.improvements or []),
                recommendation=orm_model.recommendation,
                job_fit_score=orm_model.job_fit_score or 0,
            ),
            overall_score=orm_model.overall_score,
            certificate=certificate,
            started_at=as_utc(orm_model.started_at),
            ended_at=as_utc(orm_model.ended_at),
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: InterviewSession, orm_model: InterviewSessionORM | None = None
    ) -> InterviewSessionORM:
        """
        Copy the aggregate onto an ORM model.

        Questions are matched by id. Integrity events are replaced wholesale
        since the aggregate keeps only the most recent ones.
        """
        if orm_model is None:
            orm_model = InterviewSessionORM(
                id=domain_entity.id.as_column()
            )

        orm_model.user_id = domain_entity.user_id.value
        orm_model.category = domain_entity.category
        orm_model.question_source = domain_entity.question_source
        orm_model.target_role = domain_entity.target_role
        orm_model.company_simulation = domain_entity.company_simulation
        orm_model.focus_areas = list(domain_entity.focus_areas)
        orm_model.job_description_text = domain_entity.job_description_text
        orm_model.status = domain_entity.status
        orm_model.metrics = domain_entity.metrics.to_json() if domain_entity.metrics else None
        orm_model.strengths = list(domain_entity.summary.strengths)
        orm_model.improvements = list(domain_entity.summary.improvements)
        orm_model.recommendation = domain_entity.summary.recommendation
        orm_model.job_fit_score = domain_entity.summary.job_fit_score
        orm_model.overall_score = domain_entity.overall_score
        orm_model.certificate_id = (
            domain_entity.certificate.id if domain_entity.certificate else None
        )
        orm_model.certificate_issued_at = (
            domain_entity.certificate.issued_at if domain_entity.certificate else None
        )
        orm_model.started_at = domain_entity.started_at or orm_model.started_at
        orm_model.ended_at = domain_entity.ended_at

        existing = {question.id: question for question in orm_model.questions if question.id}
        questions: list[SessionQuestionORM] = []
        for question in domain_entity.questions:
            question_orm = existing.get(question.id.value) or SessionQuestionORM()
            question_orm.position = question.position
            question_orm.prompt = question.prompt
            question_orm.tags = list(question.tags)
            question_orm.question_ref = (
                question.question_ref.value if question.question_ref else None
            )
            question_orm.answer = answer_to_json(question.answer) if question.answer else None
            questions.append(question_orm)
        orm_model.questions = questions

        orm_model.integrity_events = [
            IntegrityEventORM(
                event_type=event.event_type,
                reason=event.reason,
                meta=event.meta,
                created_at=event.created_at,
            )
            for event in domain_entity.integrity_events
        ]
        return orm_model
