"""Tests for error code metadata."""

from pricewatch.core.observability.error_codes import (
    ERROR_METADATA,
    ErrorCode,
    ErrorSeverity,
    get_error_info,
)


def test_every_code_has_metadata() -> None:
    assert set(ERROR_METADATA) == set(ErrorCode)
    for code, info in ERROR_METADATA.items():
        assert info.code == code.value
        assert info.recovery_hint


def test_network_errors_are_transient() -> None:
    assert get_error_info(ErrorCode.NET_TIMEOUT).severity == ErrorSeverity.WARNING
    assert get_error_info(ErrorCode.NET_CONNECTION_FAILED).category == "network"
