"""Port for the side channel receiving transport failures."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ErrorChannelPort(Protocol):
    """Report a failure that must not reach the original caller."""

    def report(self, message: str, error: BaseException | None = None) -> None:
        """Surface ``message`` (and the optional cause) out of band."""


__all__ = ["ErrorChannelPort"]
