"""
Project-wide constants for the Gemini interview toolkit
"""  # noqa: D200, D212, D415

# ==============================================================================
# Extraction Engine
# ==============================================================================

# Language tags recognised on opening code fences (```json, ```js, ...)
FENCE_LANGUAGE_TAGS = ("json5", "jsonc", "json", "javascript", "js")

# Oversized model responses are truncated before scanning
DEFAULT_MAX_TEXT_SIZE = 1_000_000  # characters

# Score bounds used by evaluation prompts and validation
MIN_SCORE = 0
MAX_SCORE = 100

# ==============================================================================
# Gemini API
# ==============================================================================

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_REQUEST_TIMEOUT = 60.0  # seconds
DEFAULT_QUESTION_COUNT = 7
MAX_QUESTION_COUNT = 20

# Finish reason reported by the API for a normally completed generation
FINISH_REASON_STOP = "STOP"

# Characters of a response echoed into logs
LOG_PREVIEW_CHARS = 150

# ==============================================================================
# Interview Languages
# ==============================================================================

DEFAULT_LANGUAGE = "en-US"
