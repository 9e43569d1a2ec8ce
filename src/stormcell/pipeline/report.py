"""Human-readable storm table."""

from datetime import datetime
from typing import Optional, Sequence

from stormcell.radar.pixel import StormCell

__all__ = ['format_storm_report']


def format_storm_report(storms: Sequence[StormCell], station: str,
                        processed_at: Optional[datetime] = None) -> str:
    """Format storms as a fixed-width table with a station header.

    Examples
    --------
    >>> print(format_storm_report(storms, "GuangZhou"))
    Observe Station: GuangZhou
    Process Time: 2024-04-24 13:48:00
    Storm number in active: 1
    ID       Distance (km)   Compass    Max Intensity (dBZ)  Type
    1        42.55           NE         55                   single-cell
    """
    processed_at = processed_at or datetime.now()
    lines = [
        f"Observe Station: {station}",
        f"Process Time: {processed_at:%Y-%m-%d %H:%M:%S}",
        f"Storm number in active: {len(storms)}",
        f"{'ID':<8} {'Distance (km)':<15} {'Compass':<10} {'Max Intensity (dBZ)':<20} {'Type':<10}",
    ]
    for storm in storms:
        lines.append(
            f"{storm.storm_id:<8} {storm.distance:<15.2f} {storm.compass:<10} "
            f"{storm.max_intensity:<20} {storm.shape_type.value:<10}"
        )
    return "\n".join(line.rstrip() for line in lines)
