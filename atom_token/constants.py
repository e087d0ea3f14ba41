import string

__all__ = (
    "TOKEN_ALPHABET",
    "DEFAULT_TOKEN_LENGTH",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_APP_PORT",
    "MAX_STORE_INT",
    "MAX_USER_ID",
    "LOG_LEVELS",
    "API_PREFIX",
)

TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 64
DEFAULT_PAGE_SIZE = 10
DEFAULT_APP_PORT = 8080
# signed BIGINT: user IDs, timestamps and OFFSET values must fit into it
MAX_STORE_INT = 2**63 - 1
MAX_USER_ID = MAX_STORE_INT
LOG_LEVELS = "DEBUG|INFO|WARNING|ERROR|CRITICAL"
API_PREFIX = "/api/token/v1"
TOKENS_TABLE = "token"
NOT_FOUND_REASON = "token not found"
