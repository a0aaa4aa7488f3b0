# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ArchiveMode(str, Enum):
    AWAIT = "await"
    BACKGROUND = "background"


class ErrorInfo(NamedTuple):
    code: str
    message: str
    http_status: int


class ErrorMessage(Enum):
    CONFIG_MISSING = ErrorInfo(
        "config_missing", "Config missing", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    SNAPSHOT_FAILED = ErrorInfo(
        "snapshot_failed", "Failed to fetch gallery", status.HTTP_502_BAD_GATEWAY
    )
    TICK_TIMEOUT = ErrorInfo(
        "tick_timeout", "Tick exceeded its time budget", status.HTTP_504_GATEWAY_TIMEOUT
    )
    INTERNAL_ERROR = ErrorInfo(
        "internal_error", "Internal Error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
