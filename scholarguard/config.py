import os
from dotenv import load_dotenv

load_dotenv()

# ───── API Keys & Model ─────
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# ───── Generation ─────
PLAGIARISM_TEMPERATURE = 0.1
AI_DETECTION_TEMPERATURE = 0.2
HUMANIZE_TEMPERATURE = 0.7

# ───── Input limits ─────
MAX_INPUT_CHARS = 12000

# ───── Retry policy ─────
MAX_ATTEMPTS = 3
BASE_DELAY_MS = 1000
RETRY_LOG_MESSAGE_CHARS = 200

# ───── Match alignment ─────
MIN_UNIT_LENGTH = 10
PREFIX_WINDOW = 30
PALETTE_SIZE = 6

# ───── AI verdict thresholds ─────
AI_LIKELY_THRESHOLD = 70
AI_MIXED_THRESHOLD = 30

# ───── File support ─────
ALLOWED_EXTENSIONS = {"txt", "md", "pdf", "docx"}
MAX_FILE_SIZE_MB = 10

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")
