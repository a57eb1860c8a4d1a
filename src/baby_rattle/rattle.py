"""The real rattle collaborator."""

from __future__ import annotations

SHAKE_SOUND = "I'm a rattle being shaken"


class Rattle:
    """A rattle can be shaken. It cannot be thrown."""

    def shake(self) -> str:
        return SHAKE_SOUND
