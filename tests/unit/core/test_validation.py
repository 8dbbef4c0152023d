r"""Unit tests for the parameter validation functions."""

from __future__ import annotations

import httpx
import pytest

from tc3client.core.validation import (
    check_attachment_size,
    validate_config_value,
    validate_delay,
    validate_retry_times,
    validate_timeout,
)
from tc3client.exceptions import SizeLimitExceededError

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0.1, 1, 10.0, httpx.Timeout(5.0)])
def test_validate_timeout_valid(timeout: float | httpx.Timeout) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, 0.0, -1.0])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


##########################################
#     Tests for validate_retry_times     #
##########################################


@pytest.mark.parametrize("retry_times", [1, 3, 10])
def test_validate_retry_times_valid(retry_times: int) -> None:
    validate_retry_times(retry_times)


@pytest.mark.parametrize("retry_times", [0, -1])
def test_validate_retry_times_invalid(retry_times: int) -> None:
    with pytest.raises(ValueError, match=rf"retry_times must be >= 1, got {retry_times}"):
        validate_retry_times(retry_times)


####################################
#     Tests for validate_delay     #
####################################


@pytest.mark.parametrize("delay", [0, 0.0, 0.5, 30])
def test_validate_delay_valid(delay: float) -> None:
    validate_delay(delay)


def test_validate_delay_invalid() -> None:
    with pytest.raises(ValueError, match=r"delay must be >= 0, got -0.5"):
        validate_delay(-0.5)


###########################################
#     Tests for validate_config_value     #
###########################################


def test_validate_config_value_valid() -> None:
    validate_config_value("host", "tmt.tencentcloudapi.com")


def test_validate_config_value_empty() -> None:
    with pytest.raises(ValueError, match=r"host must not be empty"):
        validate_config_value("host", "")


###########################################
#     Tests for check_attachment_size     #
###########################################


@pytest.mark.parametrize("size", [0, 1, 4 * 1024 * 1024 - 1])
def test_check_attachment_size_valid(size: int) -> None:
    check_attachment_size(size)


@pytest.mark.parametrize("size", [4 * 1024 * 1024, 4 * 1024 * 1024 + 1, 10 * 1024 * 1024])
def test_check_attachment_size_too_large(size: int) -> None:
    with pytest.raises(SizeLimitExceededError) as exc_info:
        check_attachment_size(size)
    assert exc_info.value.size == size
    assert exc_info.value.max_size == 4 * 1024 * 1024


def test_check_attachment_size_custom_limit() -> None:
    check_attachment_size(9, max_size=10)
    with pytest.raises(
        SizeLimitExceededError,
        match=r"The media size 10 exceeds the maximum allowed upload size of 10",
    ):
        check_attachment_size(10, max_size=10)
