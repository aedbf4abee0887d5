"""Threat circle radius from magnitude - Pure functions.

The threat circle is the distance around an earthquake beyond which its
effect on a city is considered negligible. The radius follows an
exponential curve in magnitude:

    radius_km = scale_km * 10 ** (exponent * magnitude)

With the default constants this gives roughly 20 km at M4, 126 km at M6
and 2000 km at M9.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quakemap.core.earthquake import EventMarker


DEFAULT_SCALE_KM = 0.5
DEFAULT_EXPONENT = 0.4


@dataclass(frozen=True)
class ThreatCircleConfig:
    """Calibration constants for the threat circle curve.

    Attributes:
        scale_km: Radius at magnitude 0
        exponent: Growth rate per magnitude unit (base 10)
    """
    scale_km: float = DEFAULT_SCALE_KM
    exponent: float = DEFAULT_EXPONENT


def threat_radius_km(
    magnitude: float,
    scale_km: float = DEFAULT_SCALE_KM,
    exponent: float = DEFAULT_EXPONENT,
) -> float:
    """Compute the threat circle radius for a magnitude.

    Pure function. Non-decreasing in magnitude for positive constants.

    Args:
        magnitude: Earthquake magnitude
        scale_km: Radius at magnitude 0
        exponent: Growth rate per magnitude unit

    Returns:
        Radius in kilometers
    """
    return scale_km * 10 ** (exponent * magnitude)


def annotate_threat_radii(
    events: list["EventMarker"],
    config: ThreatCircleConfig | None = None,
) -> None:
    """Write the threat radius onto each event."""
    config = config or ThreatCircleConfig()
    for event in events:
        event.threat_radius_km = threat_radius_km(
            event.magnitude,
            scale_km=config.scale_km,
            exponent=config.exponent,
        )
