"""`stormcell` - storm cell detection from classified radar reflectivity images.

Subpackages:
- radar: Image loading, pixel classification, clustering, cell geometry
- pipeline: Single-frame processor and storm report
- visualization: Annotated result image
"""

__version__ = "0.1.0"
