import os

from networkable_sdk.utils.environment import str2bool

# Size of the thread pool used to run callback-style requests.
MAX_WORKERS = int(os.getenv("NETWORKABLE_MAX_WORKERS", "8"))

# Log method, URL, status and size of every response at DEBUG level.
LOG_RESPONSES = str2bool(os.getenv("NETWORKABLE_LOG_RESPONSES", "False"))

LOG_LEVEL = os.getenv("NETWORKABLE_LOG_LEVEL", "INFO").upper()

SENSITIVE_QUERY_KEYS = {"api_key", "key", "token", "access_token"}
