r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import pytest

import tc3client


def test_package_version() -> None:
    assert isinstance(tc3client.__version__, str)
    assert "." in tc3client.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in tc3client.__all__:
        assert hasattr(tc3client, name), f"{name} is in __all__ but not defined in module"


def test_all_exports_count() -> None:
    assert len(tc3client.__all__) == 13


@pytest.mark.parametrize(
    "name",
    ["ClientConfig", "Credential", "ExecutionEngine", "RetryObserver", "TencentClient"],
)
def test_public_classes_are_callable(name: str) -> None:
    assert callable(getattr(tc3client, name))


def test_sign_is_exported() -> None:
    from tc3client.signing import sign

    assert tc3client.sign is sign
