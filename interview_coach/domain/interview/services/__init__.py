from .answer_evaluator import AnswerEvaluation, AnswerEvaluationService, ExternalAssessment
from .interviewer_chat import ChatTurn, InterviewerChatService, LiveCommand
from .question_generator import GeneratedQuestion, QuestionGeneratorService
from .session_scoring import SessionScoringService

__all__ = [
    "AnswerEvaluation",
    "AnswerEvaluationService",
    "ChatTurn",
    "ExternalAssessment",
    "GeneratedQuestion",
    "InterviewerChatService",
    "LiveCommand",
    "QuestionGeneratorService",
    "SessionScoringService",
]
