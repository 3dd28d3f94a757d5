"""
Shared Enums

Types used by both the media store and the progress analytics layer.
"""

from enum import Enum

# =============================================================================
# ENUMS
# =============================================================================


class ShotType(Enum):
    """Padel stroke categories that scope both media and score history"""

    DERECHA = "derecha"  # Forehand
    REVES = "reves"  # Backhand
    VOLEA = "volea"  # Volley
    SAQUE = "saque"  # Serve
    BANDEJA = "bandeja"  # Defensive overhead
    VIBORA = "vibora"  # Sliced overhead
    REMATE = "remate"  # Smash

    @property
    def display_name(self) -> str:
        """Human-readable name shown to players"""
        return SHOT_TYPE_DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value) -> "ShotType":
        """
        Coerce a string (any case) or ShotType into a ShotType.

        Raises:
            ValueError: If value is not one of the seven shot types
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown shot type: {value!r}") from None


SHOT_TYPE_DISPLAY_NAMES = {
    ShotType.DERECHA: "Derecha",
    ShotType.REVES: "Revés",
    ShotType.VOLEA: "Volea",
    ShotType.SAQUE: "Saque",
    ShotType.BANDEJA: "Bandeja",
    ShotType.VIBORA: "Víbora",
    ShotType.REMATE: "Remate",
}


class Trend(Enum):
    """Short-term classification of score movement"""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
