"""
Common utilities package for the Taskboard API: authentication primitives and logging.
"""

from taskboard.utils.auth import (
    BCRYPT_ROUNDS,
    MAX_PASSWORD_BYTES,
    PasswordHasher,
    TokenService,
)
from taskboard.utils.logger import cleanup_old_logs, setup_logger

__all__ = [
    # Authentication utilities
    "BCRYPT_ROUNDS",
    "MAX_PASSWORD_BYTES",
    "PasswordHasher",
    "TokenService",
    # Logging utilities
    "setup_logger",
    "cleanup_old_logs",
]
