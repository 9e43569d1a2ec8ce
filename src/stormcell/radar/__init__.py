"""Radar image processing modules.

- loader: Read radar product images
- downloader: Download the latest product image
- classifier: Colour to reflectivity tier
- cell_clusterer: Pixel clustering
- shape_analyzer: Axis fit and morphology
- storm_assembler: Ranked storm cells
- compass: Bearing to compass label
"""

from stormcell.radar.pixel import Pixel, ShapeFit, ShapeType, StormCell
from stormcell.radar.loader import RadarImageLoader
from stormcell.radar.downloader import RadarImageDownloader
from stormcell.radar.classifier import PixelClassifier
from stormcell.radar.cell_clusterer import RadarCellClusterer
from stormcell.radar.shape_analyzer import RadarShapeAnalyzer
from stormcell.radar.storm_assembler import StormAssembler

__all__ = [
    "Pixel",
    "ShapeFit",
    "ShapeType",
    "StormCell",
    "RadarImageLoader",
    "RadarImageDownloader",
    "PixelClassifier",
    "RadarCellClusterer",
    "RadarShapeAnalyzer",
    "StormAssembler",
]
