from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Upstream AI service call budgets, in seconds
STANDARD_CALL_TIMEOUT = 30.0
DOCUMENT_CALL_TIMEOUT = 60.0
STATUS_PROBE_TIMEOUT = 5.0

AI_SERVICE_NAMES = ("forecast", "churn", "ocr", "sentiment", "chatbot")
