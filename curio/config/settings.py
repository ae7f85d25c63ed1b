"""
Configuration module for Curio.

All values are plain module-level constants read from environment variables
(a local .env file is loaded first). API keys are deliberately absent: they are
resolved per operation through curio.config.credentials.get_api_key.

Usage:
    from curio.config import settings as config
    config.MAX_WEB_RESULTS
"""
import os

# Load environment variables from .env file (if present)
# This must happen before any os.getenv() calls
from dotenv import load_dotenv

from curio.config.credentials import is_gcp_environment

load_dotenv()

# --- Directory Configuration ---
# Use /tmp on GCP (Cloud Run ephemeral storage), otherwise use local paths
if is_gcp_environment():
    DATA_DIR = os.getenv("DATA_DIR", "/tmp/curio_data")
else:
    DATA_DIR = os.getenv("DATA_DIR", "curio_data")

# --- Document Store Configuration ---
DB_VERSION = 1
LEARNING_REQUESTS_COLLECTION = "learning-requests"
LESSON_PLANS_COLLECTION = "lesson-plans"
CONTENT_COLLECTION = "content"

# --- Model Configuration ---
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "google")
LLM_MODEL = os.getenv("LLM_MODEL", "gemini-2.5-flash")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4000"))

# --- Web Search Configuration ---
MAX_WEB_RESULTS = int(os.getenv("MAX_WEB_RESULTS", "10"))
TAVILY_SEARCH_DEPTH = os.getenv("TAVILY_SEARCH_DEPTH", "basic")

# --- Dialogue Session Configuration ---
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "3600"))
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "256"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Gradio Server ---
GRADIO_SERVER_NAME = os.getenv("GRADIO_SERVER_NAME", "0.0.0.0")
GRADIO_SERVER_PORT = int(os.getenv("GRADIO_SERVER_PORT", "7860"))

# Log configuration source
if is_gcp_environment():
    print("✓ Running on GCP - using Secret Manager for API keys")
else:
    print("✓ Running locally - using environment variables for API keys")
