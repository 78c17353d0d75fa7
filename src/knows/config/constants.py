"""Application constants."""

# KnowS API endpoints
AI_SEARCH_PATH = "/knows/ai_search"
ANSWER_PATH = "/knows/answer"
EVIDENCE_SUMMARY_PATH = "/knows/evidence/summary"
EVIDENCE_HIGHLIGHT_PATH = "/knows/evidence/highlight"
GET_PAPER_EN_PATH = "/knows/evidence/get_paper_en"
GET_PAPER_CN_PATH = "/knows/evidence/get_paper_cn"
GET_GUIDE_PATH = "/knows/evidence/get_guide"
GET_MEETING_PATH = "/knows/evidence/get_meeting"
AUTO_TAGGING_PATH = "/knows/auto_tagging"
LIST_QUESTION_PATH = "/knows/list_question"
# Upstream spelling, kept for API compatibility
LIST_INTERPRETATION_PATH = "/knows/list_interpretion"

API_KEY_HEADER = "x-api-key"

# Client defaults
DEFAULT_REQUEST_TIMEOUT = 120.0  # seconds
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BACKOFF = 0.5  # seconds
MAX_RETRY_BACKOFF = 8.0  # seconds
MAX_ERROR_BODY_LENGTH = 500

# Batch and cache defaults
DEFAULT_BATCH_CONCURRENCY = 5
DEFAULT_CACHE_TTL = 3600.0  # seconds
DEFAULT_CACHE_MAX_ENTRIES = 500
