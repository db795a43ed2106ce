import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from ENV_FILE if specified, or .env.local, or .env
env_file = os.getenv('ENV_FILE')
if env_file:
    load_dotenv(Path(env_file))
else:
    # Try .env.local first, then fall back to .env
    env_local = Path.cwd() / '.env.local'
    if env_local.exists():
        load_dotenv(env_local)
    else:
        load_dotenv()


def _number_from_env(key: str, fallback: Optional[int]) -> Optional[int]:
    """Extract integer from environment variable with fallback."""
    raw = os.getenv(key)
    if raw is None:
        return fallback

    try:
        return int(raw)
    except ValueError:
        return fallback


# SendGrid credentials and default sender
SENDGRID_API_KEY = os.getenv('SENDGRID_API_KEY')
SENDGRID_FROM_ADDRESS = os.getenv('SENDGRID_FROM_ADDRESS')
SENDGRID_FROM_NAME = os.getenv('SENDGRID_FROM_NAME', '')

SENDGRID_API_URL = os.getenv(
    'SENDGRID_API_URL',
    'https://api.sendgrid.com/v3/mail/send'
)

# Seconds; unset leaves the timeout to the HTTP transport
SENDGRID_TIMEOUT = _number_from_env('SENDGRID_TIMEOUT', None)
