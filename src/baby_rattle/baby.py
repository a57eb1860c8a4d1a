"""A baby that owns one rattle and a growing pile of toys."""

from __future__ import annotations

import logging
from typing import Any

from baby_rattle.capabilities import MissingCapabilityError, RattleLike
from baby_rattle.rattle import Rattle

logger = logging.getLogger(__name__)


class Baby:
    """Holds a single rattle-shaped collaborator and delegates to it.

    The collaborator is fixed at construction. When none is supplied a new
    real ``Rattle`` is created. Nothing here recovers from collaborator
    failures; they reach the caller as-is, except that a failed capability
    lookup surfaces as ``MissingCapabilityError``. Lookup means plain
    ``getattr``, so an ``AttributeError`` raised by a collaborator's property
    getter is reported the same way, with the original chained as the cause.
    Errors raised once the capability is called are never rewrapped.
    """

    def __init__(self, rattle: RattleLike | None = None) -> None:
        if rattle is None:
            rattle = Rattle()
        self._rattle = rattle
        self._toys: list[Any] = []
        logger.debug("Baby created with collaborator %r", rattle)

    @property
    def rattle(self) -> RattleLike:
        return self._rattle

    @property
    def toys(self) -> list[Any]:
        return list(self._toys)

    def shake_rattle(self) -> Any:
        return self._invoke("shake")

    def throw_rattle(self) -> Any:
        return self._invoke("throw")

    def collect_rattle(self) -> list[Any]:
        """Add the rattle to the toy collection and return every toy so far."""
        self._toys.append(self._rattle)
        return self.toys

    def _invoke(self, capability: str) -> Any:
        try:
            method = getattr(self._rattle, capability)
        except MissingCapabilityError:
            raise
        except AttributeError as exc:
            raise MissingCapabilityError(capability, self._rattle) from exc
        logger.debug("Invoking %s on %r", capability, self._rattle)
        return method()
