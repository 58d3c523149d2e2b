"""Logging and error classification."""

from .error_codes import ErrorCode, ErrorInfo, ErrorSeverity, get_error_info
from .logging import setup_logging

__all__ = ["ErrorCode", "ErrorInfo", "ErrorSeverity", "get_error_info", "setup_logging"]
