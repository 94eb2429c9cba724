import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Persistent store - one JSON file per collection key under DATA_DIR
DATA_DIR_STR = os.getenv("DATA_DIR", str(BASE_DIR / "data"))
DATA_DIR = Path(DATA_DIR_STR)
STORAGE_TYPE = os.getenv("STORAGE_TYPE", "json")  # Options: 'json', 'memory'

# Collection keys
DOCUMENTS_KEY = "papersnap_documents"
FOLDERS_KEY = "papersnap_folders"
FLASHCARDS_KEY = "papersnap_flashcards"
SETTINGS_KEY = "papersnap_settings"

# AI provider configuration
AI_PROVIDER = os.getenv("AI_PROVIDER", "gemini")  # Options: 'gemini', 'anthropic', 'openrouter', 'mock'

# The original web client read its Gemini key from API_KEY
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-haiku-latest")

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemini-2.5-flash")

# Upload limits
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "20"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]
