from interview_coach.infrastructure.common.schemas.response_wrappers import MessageResponse
from interview_coach.infrastructure.common.schemas.settings_schemas import AppSettingsResponse

__all__ = ["AppSettingsResponse", "MessageResponse"]
