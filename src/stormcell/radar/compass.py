"""Eight-point compass labels for bearings."""

__all__ = ['COMPASS_BINS', 'bearing_to_compass']

# (label, low, high) inclusive, first match wins
COMPASS_BINS = (
    ("N", 0.0, 22.5),
    ("N", 337.5, 360.0),
    ("NE", 22.5, 67.5),
    ("E", 67.5, 112.5),
    ("SE", 112.5, 157.5),
    ("S", 157.5, 202.5),
    ("SW", 202.5, 247.5),
    ("W", 247.5, 292.5),
    ("NW", 292.5, 337.5),
)


def bearing_to_compass(bearing: float) -> str:
    """Eight-point compass label (N, NE, ..., NW) for a bearing in degrees.

    Bins are 45 deg wide and centred on each label; a bearing on a
    boundary takes the first matching label (22.5 -> "N", 67.5 -> "NE").
    Values outside [0, 360] give "Unknown".
    """
    for label, low, high in COMPASS_BINS:
        if low <= bearing <= high:
            return label
    return "Unknown"
