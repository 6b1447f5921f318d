from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from interview_coach.application.analytics.use_cases.admin_billing_use_case import (
    AdminBillingUseCase,
)
from interview_coach.application.analytics.use_cases.admin_overview_use_case import (
    AdminOverviewUseCase,
)
from interview_coach.application.analytics.use_cases.admin_users_use_case import (
    AdminUsersUseCase,
)
from interview_coach.application.analytics.use_cases.leaderboard_use_case import (
    LeaderboardUseCase,
)
from interview_coach.application.analytics.use_cases.progress_use_case import ProgressUseCase
from interview_coach.application.billing.use_cases.payment_use_case import (
    PaymentUseCase,
    UpiSettings,
)
from interview_coach.application.identity.use_cases.admin_access_use_case import (
    AdminAccessUseCase,
)
from interview_coach.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from interview_coach.application.identity.use_cases.profile_use_case import ProfileUseCase
from interview_coach.application.identity.use_cases.register_user_use_case import (
    RegisterUserUseCase,
)
from interview_coach.application.interview.services.question_sourcing_service import (
    QuestionSourcingService,
)
from interview_coach.application.interview.use_cases.answer_submission_use_case import (
    AnswerSubmissionUseCase,
)
from interview_coach.application.interview.use_cases.interview_coaching_use_case import (
    InterviewCoachingUseCase,
)
from interview_coach.application.interview.use_cases.interview_session_use_case import (
    InterviewSessionUseCase,
)
from interview_coach.application.interview.use_cases.question_admin_use_case import (
    QuestionAdminUseCase,
)
from interview_coach.application.interview.use_cases.question_bank_use_case import (
    QuestionBankUseCase,
)
from interview_coach.application.interview.use_cases.seed_question_bank_use_case import (
    SeedQuestionBankUseCase,
)
from interview_coach.application.interview.use_cases.session_completion_use_case import (
    SessionCompletionUseCase,
)
from interview_coach.application.interview.use_cases.session_integrity_use_case import (
    SessionIntegrityUseCase,
)
from interview_coach.config import get_settings
from interview_coach.infrastructure.ai.ai_service import AIInterviewService
from interview_coach.infrastructure.ai.transcription_service import WhisperTranscriptionService
from interview_coach.infrastructure.billing.repositories.payment_repository import (
    PaymentRepository,
)
from interview_coach.infrastructure.identity.repositories.user_repository import UserRepository
from interview_coach.infrastructure.identity.services.password_service import (
    get_password_service,
)
from interview_coach.infrastructure.identity.services.token_service import get_token_service
from interview_coach.infrastructure.interview.repositories.question_repository import (
    QuestionRepository,
)
from interview_coach.infrastructure.interview.repositories.session_repository import (
    SessionRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)
    settings = providers.Callable(get_settings)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    question_repository = providers.Factory(QuestionRepository, db=db)
    session_repository = providers.Factory(SessionRepository, db=db)
    payment_repository = providers.Factory(PaymentRepository, db=db)

    # External services
    password_service = providers.Callable(get_password_service)
    token_service = providers.Callable(get_token_service)
    ai_service = providers.Singleton(AIInterviewService)
    transcription_service = providers.Singleton(WhisperTranscriptionService)

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )
    register_user_use_case = providers.Factory(
        RegisterUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )
    admin_access_use_case = providers.Factory(
        AdminAccessUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
        environment=settings.provided.ENVIRONMENT,
    )
    profile_use_case = providers.Factory(
        ProfileUseCase,
        user_repository=user_repository,
        session_repository=session_repository,
        payment_repository=payment_repository,
    )

    # Interview module
    question_sourcing_service = providers.Factory(
        QuestionSourcingService,
        question_repository=question_repository,
        ai_service=ai_service,
    )
    question_bank_use_case = providers.Factory(
        QuestionBankUseCase,
        sourcing_service=question_sourcing_service,
    )
    question_admin_use_case = providers.Factory(
        QuestionAdminUseCase,
        question_repository=question_repository,
    )
    seed_question_bank_use_case = providers.Factory(
        SeedQuestionBankUseCase,
        question_repository=question_repository,
    )
    interview_session_use_case = providers.Factory(
        InterviewSessionUseCase,
        session_repository=session_repository,
        user_repository=user_repository,
        sourcing_service=question_sourcing_service,
    )
    answer_submission_use_case = providers.Factory(
        AnswerSubmissionUseCase,
        session_repository=session_repository,
        ai_service=ai_service,
        transcription_service=transcription_service,
    )
    interview_coaching_use_case = providers.Factory(
        InterviewCoachingUseCase,
        session_repository=session_repository,
        question_repository=question_repository,
        ai_service=ai_service,
    )
    session_integrity_use_case = providers.Factory(
        SessionIntegrityUseCase,
        session_repository=session_repository,
        user_repository=user_repository,
    )
    session_completion_use_case = providers.Factory(
        SessionCompletionUseCase,
        session_repository=session_repository,
        user_repository=user_repository,
        selection_threshold=settings.provided.INTERVIEW_SELECTION_THRESHOLD,
    )

    # Billing module
    upi_settings = providers.Factory(
        UpiSettings,
        upi_id=settings.provided.PAYMENT_UPI_ID,
        merchant_name=settings.provided.PAYMENT_MERCHANT_NAME,
        qr_provider=settings.provided.PAYMENT_QR_PROVIDER,
        expiry_minutes=settings.provided.PAYMENT_INTENT_EXPIRY_MINUTES,
    )
    payment_use_case = providers.Factory(
        PaymentUseCase,
        payment_repository=payment_repository,
        user_repository=user_repository,
        upi_settings=upi_settings,
    )

    # Analytics module
    progress_use_case = providers.Factory(
        ProgressUseCase,
        session_repository=session_repository,
        user_repository=user_repository,
    )
    leaderboard_use_case = providers.Factory(
        LeaderboardUseCase,
        user_repository=user_repository,
        session_repository=session_repository,
    )
    admin_overview_use_case = providers.Factory(
        AdminOverviewUseCase,
        session_repository=session_repository,
        user_repository=user_repository,
    )
    admin_users_use_case = providers.Factory(
        AdminUsersUseCase,
        user_repository=user_repository,
    )
    admin_billing_use_case = providers.Factory(
        AdminBillingUseCase,
        payment_repository=payment_repository,
        user_repository=user_repository,
    )


# Initialize container
container = Container()
