from datetime import datetime
import pytz
from readhub.config import settings

# Service-wide zone, UTC unless overridden in settings
LOCAL_TZ = pytz.timezone(settings.timezone)

def now_local() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(LOCAL_TZ)
