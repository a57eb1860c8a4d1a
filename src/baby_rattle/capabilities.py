"""Collaborator capability interface and the errors raised around it."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable


class CapabilityError(RuntimeError):
    """Base class for collaborator capability failures."""


class MissingCapabilityError(CapabilityError, AttributeError):
    """Raised when a collaborator is asked for a capability it cannot perform.

    This is a call-time failure: the collaborator (real or substitute) has no
    such capability, or a substitute was never told how to respond to it.
    """

    def __init__(self, capability: str, collaborator: Any) -> None:
        self.capability = capability
        self.collaborator = collaborator
        super().__init__(
            f"{collaborator!r} has no capability '{capability}' configured"
        )


class UndeclaredCapabilityError(CapabilityError):
    """Raised when a checked substitute is configured with capabilities its real type lacks.

    Configuration-time failure; never an ``AttributeError``.
    """

    def __init__(self, spec_class: type, capabilities: Iterable[str]) -> None:
        self.spec_class = spec_class
        self.capabilities = sorted(capabilities)
        names = ", ".join(self.capabilities)
        super().__init__(
            f"{spec_class.__name__} does not implement: {names}"
        )


class ReservedCapabilityError(CapabilityError):
    """Raised when a substitute would have to stub a name its mock machinery owns."""

    def __init__(self, capabilities: Iterable[str]) -> None:
        self.capabilities = sorted(capabilities)
        names = ", ".join(self.capabilities)
        super().__init__(f"Cannot stub reserved substitute attributes: {names}")


@runtime_checkable
class RattleLike(Protocol):
    """Protocol for anything a baby can hold as its rattle."""

    def shake(self) -> str: ...


def declared_capabilities(cls: type) -> frozenset[str]:
    """Return the public callable attribute names defined by ``cls``."""
    return frozenset(
        name
        for name in dir(cls)
        if not name.startswith("_") and callable(getattr(cls, name, None))
    )
