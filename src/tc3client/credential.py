r"""API credentials."""

from __future__ import annotations

__all__ = ["Credential"]

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    """A secret id and key pair used to sign requests.

    The credential is immutable and can be shared between concurrent
    calls.

    Attributes:
        secret_id: The public part of the key pair, sent in the
            ``Authorization`` header.
        secret_key: The private part of the key pair, never sent.

    Example:
        ```pycon
        >>> from tc3client import Credential
        >>> credential = Credential(secret_id="AKIDEXAMPLE", secret_key="secret")
        >>> credential
        Credential(secret_id='AKIDEXAMPLE')

        ```
    """

    secret_id: str
    secret_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.secret_id:
            msg = "secret_id must not be empty"
            raise ValueError(msg)
        if not self.secret_key:
            msg = "secret_key must not be empty"
            raise ValueError(msg)
