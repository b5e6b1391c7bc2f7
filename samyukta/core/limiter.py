# samyukta/core/limiter.py
"""
Shared slowapi limiter for the scan endpoints. Kept out of main.py so
endpoint modules can decorate routes without importing the app.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# One bucket per client address; a desk scanner counts as one client
limiter = Limiter(key_func=get_remote_address)

# Public badge scans and coordinator lookups
SCAN_RATE_LIMIT = "120/minute"
