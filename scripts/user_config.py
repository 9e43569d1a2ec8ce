"""Storm detection user configuration.

This is the user-facing configuration file. Modify settings here to customize
the detector. Expert defaults live in src/stormcell/schemas/param.py.

Usage:
    python scripts/run_storm_pipeline.py scripts/user_config.py --image radar.png
    python scripts/run_storm_pipeline.py scripts/user_config.py --fetch
"""

CONFIG = {
    # ========================================================================
    # STATION & OUTPUT
    # ========================================================================
    "STATION_NAME": "GuangZhou",
    "BASE_DIR": "./output",          # All outputs go here
    "LOG_LEVEL": "INFO",

    # ========================================================================
    # IMAGE GEOMETRY
    # ========================================================================
    "RADAR_CENTER": (300, 300),      # Radar origin in image pixels (x, y)
    "RADAR_AREA": (599, 599),        # Analysed region (width, height)
    "DISTANCE_RATIO": 200 / 235,     # km per pixel

    # ========================================================================
    # CLUSTERING
    # ========================================================================
    "ADJACENT_THRESHOLD": 2,         # Chebyshev neighbour radius (pixels)
    "MIN_SIZE": 40,                  # Cells must have more pixels than this
    "MIN_INTENSITY": 45,             # Cells must reach this tier (dBZ)
    "CLUSTER_METHOD": "scan",        # "scan" or "kdtree"

    # ========================================================================
    # SHAPE
    # ========================================================================
    "STRONG_INTENSITY": 45,
    "MAJOR_PIXEL_THRESHOLD": 50,
    "TYPE_THRESHOLD": 0.88,

    # ========================================================================
    # RENDERING
    # ========================================================================
    "RENDER": True,
}
