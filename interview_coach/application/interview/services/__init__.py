from .question_sourcing_service import QuestionSourcingService

__all__ = ["QuestionSourcingService"]
