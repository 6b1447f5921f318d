"""Vocabulary shared by the interview domain."""

CATEGORIES = ("HR", "Technical", "Behavioral", "Coding")
COMPANIES = ("Google", "Amazon", "Startup", "Microsoft", "Meta")
QUESTION_SOURCES = ("predefined", "ai", "resume")
ANSWER_TYPES = ("text", "voice", "video")
DIFFICULTIES = ("beginner", "intermediate", "advanced")
DIFFICULTY_ALIASES = {"easy": "beginner", "medium": "intermediate", "hard": "advanced"}

SESSION_STATUSES = ("in_progress", "completed")
INTEGRITY_EVENT_TYPES = ("network", "focus", "clipboard", "policy")

MIN_QUESTION_COUNT = 3
MAX_QUESTION_COUNT = 12
DEFAULT_QUESTION_COUNT = 5

MIN_PROMPT_LENGTH = 10
MAX_QUESTION_TAGS = 12
MAX_FOCUS_AREAS = 6
MAX_JOB_DESCRIPTION_LENGTH = 12000
MAX_INTEGRITY_EVENTS = 40
MAX_INTEGRITY_TEXT_LENGTH = 180

DEFAULT_TARGET_ROLE = "Generalist"
DEFAULT_COMPANY = "Startup"
GENERAL_CONTEXT = "General"
