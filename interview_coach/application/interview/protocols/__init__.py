from .ai_interview_service import AIInterviewServiceProtocol, ChatContext, QuestionRequest
from .question_repository import QuestionRepositoryProtocol
from .session_repository import SessionRepositoryProtocol, UserSessionStats
from .transcription_service import TranscriptionServiceProtocol

__all__ = [
    "AIInterviewServiceProtocol",
    "ChatContext",
    "QuestionRepositoryProtocol",
    "QuestionRequest",
    "SessionRepositoryProtocol",
    "TranscriptionServiceProtocol",
    "UserSessionStats",
]
