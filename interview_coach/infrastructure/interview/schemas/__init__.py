"""Interview context schemas."""

from interview_coach.infrastructure.interview.schemas.question_schemas import (
    GeneratedQuestionResponse,
    QuestionCreateRequest,
    QuestionGenerateRequest,
    QuestionGenerateResponse,
    QuestionMetaResponse,
    QuestionMutationResponse,
    QuestionResponse,
    QuestionsListResponse,
    QuestionUpdateRequest,
)
from interview_coach.infrastructure.interview.schemas.session_schemas import (
    AnswerResponse,
    AnswerSubmitResponse,
    CertificateDetails,
    CertificateVerificationResponse,
    FollowUpRequest,
    FollowUpResponse,
    GamificationResponse,
    IntegrityEventResponse,
    JudgeChatRequest,
    JudgeChatResponse,
    SecurityIncidentRequest,
    SecurityIncidentResponse,
    SelectionResponse,
    SessionCompleteResponse,
    SessionCreateRequest,
    SessionDetail,
    SessionListItem,
    SessionResponse,
    SessionsListResponse,
)

__all__ = [
    "AnswerResponse",
    "AnswerSubmitResponse",
    "CertificateDetails",
    "CertificateVerificationResponse",
    "FollowUpRequest",
    "FollowUpResponse",
    "GamificationResponse",
    "GeneratedQuestionResponse",
    "IntegrityEventResponse",
    "JudgeChatRequest",
    "JudgeChatResponse",
    "QuestionCreateRequest",
    "QuestionGenerateRequest",
    "QuestionGenerateResponse",
    "QuestionMetaResponse",
    "QuestionMutationResponse",
    "QuestionResponse",
    "QuestionUpdateRequest",
    "QuestionsListResponse",
    "SecurityIncidentRequest",
    "SecurityIncidentResponse",
    "SelectionResponse",
    "SessionCompleteResponse",
    "SessionCreateRequest",
    "SessionDetail",
    "SessionListItem",
    "SessionResponse",
    "SessionsListResponse",
]
