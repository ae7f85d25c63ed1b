"""
Credential lookup with Secret Manager support.
Falls back to environment variables for local development.

Keys are looked up on every call instead of being read once at import time,
so a rotated key is picked up by the next LLM or search operation.
"""
import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def is_gcp_environment() -> bool:
    """Check if running on GCP."""
    return (
        os.getenv("GAE_ENV") is not None or  # App Engine
        os.getenv("K_SERVICE") is not None or  # Cloud Run
        os.getenv("GOOGLE_CLOUD_PROJECT") is not None  # Any GCP service
    )


def get_api_key(name: str, project_id: Optional[str] = None) -> Optional[str]:
    """
    Get an API key from the environment (local) or Google Secret Manager (GCP).
    
    Priority:
    1. Environment variable (highest priority - works everywhere)
    2. Secret Manager (if on GCP and env var not set)
    3. None (if neither available)
    
    Args:
        name: Secret name in Secret Manager or env var name (e.g. "TAVILY_API_KEY")
        project_id: GCP project ID (auto-detected if None)
    
    Returns:
        Key value or None if not found
    """
    env_value = os.getenv(name)
    if env_value:
        return env_value
    
    if not is_gcp_environment():
        return None
    
    try:
        from google.cloud import secretmanager
    except ImportError:
        # google-cloud-secret-manager not installed (local dev)
        return None
    
    project_id = project_id or os.getenv("GOOGLE_CLOUD_PROJECT")
    if not project_id:
        logger.warning(f"GOOGLE_CLOUD_PROJECT not set, cannot fetch secret {name}")
        return None
    
    try:
        client = secretmanager.SecretManagerServiceClient()
        secret_path = f"projects/{project_id}/secrets/{name}/versions/latest"
        response = client.access_secret_version(request={"name": secret_path})
        return response.payload.data.decode("UTF-8")
    except Exception as e:
        # Secret not found or permission denied
        logger.warning(f"Could not fetch secret {name} from Secret Manager: {e}")
        return None
