from __future__ import annotations

import logging

LOGGER = logging.getLogger("async_oauth2")
APP_VERSION = "0.5.0"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

REDACTED = "[redacted]"

STATE_NUM_BYTES = 16
PKCE_MIN_NUM_BYTES = 32
PKCE_MAX_NUM_BYTES = 96
PKCE_MIN_LEN = 43
PKCE_MAX_LEN = 128
