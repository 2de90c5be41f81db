"""Basic exceptions for the Gemini interview toolkit"""  # noqa: D415


class GeminiInterviewError(Exception):
    """Base exception for Gemini interview errors"""  # noqa: D415


class ConfigurationError(GeminiInterviewError):
    """Raised when configuration values fail validation"""  # noqa: D415


class MissingKeyError(ConfigurationError):
    """Raised when the API key is required but not configured"""  # noqa: D415


class GenerationError(GeminiInterviewError):
    """Raised when a call to the Gemini API fails or times out"""  # noqa: D415
