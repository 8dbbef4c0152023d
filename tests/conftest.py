from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from tc3client.credential import Credential
from tc3client.observer import Abort, Observer

if TYPE_CHECKING:
    from collections.abc import Generator

    from tc3client.observer import MethodInfo, RetryDecision

SECRET_ID = "AKIDz8krbsJ5yKBZQpn74WFkmLPx3EXAMPLE"
SECRET_KEY = "Gu5t9xGARNpq86cd98joQYCN3EXAMPLE"

# 2019-02-25T16:44:25Z
FIXED_TIMESTAMP = 1551113065


class RecordingObserver(Observer):
    """Observer that records every notification and returns a fixed
    retry decision."""

    def __init__(self, decision: RetryDecision | None = None, retry_times: int = 3) -> None:
        self.decision = decision if decision is not None else Abort()
        self._retry_times = retry_times
        self.calls: list[tuple[str, object]] = []

    def begin(self, info: MethodInfo) -> None:
        self.calls.append(("begin", info))

    def pre_request(self, request: httpx.Request) -> None:
        self.calls.append(("pre_request", request))

    def http_error(self, error: httpx.RequestError) -> RetryDecision:
        self.calls.append(("http_error", error))
        return self.decision

    def http_failure(self, response: httpx.Response) -> RetryDecision:
        self.calls.append(("http_failure", response))
        return self.decision

    def retry_times(self) -> int:
        return self._retry_times

    def finished(self, is_success: bool) -> None:
        self.calls.append(("finished", is_success))

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def names(self) -> list[str]:
        return [call for call, _ in self.calls]


@pytest.fixture
def credential() -> Credential:
    return Credential(secret_id=SECRET_ID, secret_key=SECRET_KEY)


@pytest.fixture
def recording_observer() -> type[RecordingObserver]:
    """Return the RecordingObserver class so tests can configure it."""
    return RecordingObserver


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fixed_time() -> Generator[Mock, None, None]:
    """Pin time.time so that timestamps and signatures are
    reproducible."""
    with patch("time.time", return_value=float(FIXED_TIMESTAMP)) as mock:
        yield mock


@pytest.fixture
def mock_transport() -> Mock:
    """Create a transport whose send method returns a 200 response."""
    return Mock(send=AsyncMock(return_value=httpx.Response(200, content=b"ok")))
