"""Library-wide constants and defaults."""

import platform

__version__ = "0.1.0"

# Holodex v2 REST API
DEFAULT_BASE_URL = "https://holodex.net/api/v2"
SUPPORTED_URL_SCHEMES = ("http", "https")

# Request headers
API_KEY_HEADER = "X-APIKEY"
USER_AGENT = f"holodex-python/{__version__} (python/{platform.python_version()})"

# Rate limit headers sent with every response
RATE_LIMIT_HEADER = "X-Ratelimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-Ratelimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-Ratelimit-Reset"
