"""Substitute factories for collaborators, built on ``unittest.mock``.

``double`` accepts any stub names. ``instance_double`` checks stub names
against the public callables of a real class and refuses unknown ones
before handing anything back. Every call returns an independent object.

Names that ``NonCallableMock`` itself owns (``called``, ``reset_mock``,
``side_effect`` and friends) cannot be stubbed; asking for one raises
``ReservedCapabilityError``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable
from unittest.mock import NonCallableMock

from baby_rattle.capabilities import (
    MissingCapabilityError,
    ReservedCapabilityError,
    UndeclaredCapabilityError,
    declared_capabilities,
)

logger = logging.getLogger(__name__)

RESERVED_NAMES = frozenset(name for name in dir(NonCallableMock) if not name.startswith("_")) | {
    "return_value",
    "side_effect",
}


class _Substitute(NonCallableMock):
    """Mock whose unknown public attributes raise ``MissingCapabilityError``."""

    def __getattr__(self, name: str) -> Any:
        try:
            return super().__getattr__(name)
        except AttributeError as exc:
            if name.startswith("_"):
                raise
            raise MissingCapabilityError(name, self) from exc


def _reject_reserved(names: Iterable[str]) -> None:
    reserved = {name for name in names if name.startswith("_") or name in RESERVED_NAMES}
    if reserved:
        raise ReservedCapabilityError(reserved)


def _configure(substitute: NonCallableMock, stubs: dict[str, Any]) -> None:
    for capability, value in stubs.items():
        getattr(substitute, capability).return_value = value


def double(name: str | None = None, /, **stubs: Any) -> NonCallableMock:
    """Create an unchecked substitute responding to exactly ``stubs``.

    Stub names are not validated against anything, so a substitute can
    happily claim capabilities no real collaborator has. ``name`` is
    positional-only, so ``name`` itself can be stubbed.
    """
    _reject_reserved(stubs)
    substitute = _Substitute(spec=sorted(stubs), name=name)
    _configure(substitute, stubs)
    logger.debug("Created unchecked double %r with stubs %s", name, sorted(stubs))
    return substitute


def instance_double(
    spec_class: type, name: str | None = None, /, **stubs: Any
) -> NonCallableMock:
    """Create a substitute checked against the instance interface of ``spec_class``.

    Args:
        spec_class: The real collaborator type being stood in for.
        name: Optional label used in reprs; defaults to the class name.
        **stubs: Capability name to return value.

    Raises:
        TypeError: ``spec_class`` is not a class.
        UndeclaredCapabilityError: a stub names a capability ``spec_class``
            does not define. Raised before the substitute exists.
        ReservedCapabilityError: ``spec_class`` declares a capability that
            clashes with the mock's own attributes.
    """
    if not isinstance(spec_class, type):
        raise TypeError(f"instance_double expects a class, got {spec_class!r}")

    declared = declared_capabilities(spec_class)
    undeclared = set(stubs) - declared
    if undeclared:
        raise UndeclaredCapabilityError(spec_class, undeclared)
    _reject_reserved(declared)

    substitute = _Substitute(spec=spec_class, name=name or spec_class.__name__)
    for capability in sorted(declared - set(stubs)):
        getattr(substitute, capability).side_effect = MissingCapabilityError(capability, substitute)
    _configure(substitute, stubs)
    logger.debug(
        "Created checked double of %s with stubs %s", spec_class.__name__, sorted(stubs)
    )
    return substitute
