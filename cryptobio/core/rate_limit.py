from slowapi import Limiter
from slowapi.util import get_remote_address

from cryptobio.config import settings

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

USERNAME_CHECK_LIMIT = "60/minute"
