# debatehub/config.py
import os
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Config:
    # General environmental details
    APP_NAME = os.environ.get("APP_NAME", "DebateHub")
    SECRET_KEY = os.environ.get("SECRET_KEY", "change_me_in_env")
    try:
        PORT = int(os.environ.get("PORT", "3000"))
    except ValueError:
        PORT = 3000
    # Comma separated list, "*" allows every origin
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # AWS Bedrock configuration for the fact-check gateway
    AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
    AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")
    AWS_SESSION_TOKEN = os.environ.get("AWS_SESSION_TOKEN")  # optional
    BEDROCK_MODEL_ID = os.environ.get("BEDROCK_MODEL_ID", "amazon.nova-lite-v1:0")
    # Bedrock retry controls (throttling resilience)
    try:
        BEDROCK_RETRY_MAX_ATTEMPTS = max(1, int(os.environ.get("BEDROCK_RETRY_MAX_ATTEMPTS", "3")))
    except ValueError:
        BEDROCK_RETRY_MAX_ATTEMPTS = 3
    try:
        BEDROCK_RETRY_BASE_DELAY_SECONDS = max(0.05, float(os.environ.get("BEDROCK_RETRY_BASE_DELAY_SECONDS", "0.5")))
    except ValueError:
        BEDROCK_RETRY_BASE_DELAY_SECONDS = 0.5
    try:
        BEDROCK_RETRY_MAX_DELAY_SECONDS = max(
            BEDROCK_RETRY_BASE_DELAY_SECONDS,
            float(os.environ.get("BEDROCK_RETRY_MAX_DELAY_SECONDS", "6.0")),
        )
    except ValueError:
        BEDROCK_RETRY_MAX_DELAY_SECONDS = max(6.0, BEDROCK_RETRY_BASE_DELAY_SECONDS)
    try:
        BEDROCK_BOTO_MAX_ATTEMPTS = max(2, int(os.environ.get("BEDROCK_BOTO_MAX_ATTEMPTS", "3")))
    except ValueError:
        BEDROCK_BOTO_MAX_ATTEMPTS = 3

    # Fact-check gateway controls
    try:
        FACT_CHECK_TIMEOUT_SECONDS = max(0.1, float(os.environ.get("FACT_CHECK_TIMEOUT_SECONDS", "20")))
    except ValueError:
        FACT_CHECK_TIMEOUT_SECONDS = 20.0
    try:
        FACT_CHECK_MAX_WORKERS = max(1, int(os.environ.get("FACT_CHECK_MAX_WORKERS", "4")))
    except ValueError:
        FACT_CHECK_MAX_WORKERS = 4
    try:
        FACT_CHECK_MAX_TOKENS = max(16, int(os.environ.get("FACT_CHECK_MAX_TOKENS", "150")))
    except ValueError:
        FACT_CHECK_MAX_TOKENS = 150
    try:
        FACT_CHECK_TEMPERATURE = max(0.0, min(1.0, float(os.environ.get("FACT_CHECK_TEMPERATURE", "0.7"))))
    except ValueError:
        FACT_CHECK_TEMPERATURE = 0.7

    # Whether a voice clip is echoed back to the participant who recorded it
    VOICE_EXCLUDE_SENDER = os.environ.get("VOICE_EXCLUDE_SENDER", "true").lower() not in {"0", "false", "no"}

    # Upper bound on stored polls, oldest evicted first. 0 keeps every poll for the process lifetime.
    try:
        POLL_STORE_MAX_POLLS = max(0, int(os.environ.get("POLL_STORE_MAX_POLLS", "0")))
    except ValueError:
        POLL_STORE_MAX_POLLS = 0

    # Media and static assets
    STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))


def cors_origins(value):
    """Normalise the CORS_ORIGINS setting into what Flask-CORS / Socket.IO expect."""
    if isinstance(value, (list, tuple)):
        return list(value)
    raw = (value or "*").strip()
    if raw == "*":
        return "*"
    return [o.strip() for o in raw.split(",") if o.strip()]
