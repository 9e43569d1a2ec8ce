"""Single-frame storm detection.

`StormProcessor` runs one radar image through the full chain:

    load -> classify -> extract pixels -> cluster -> assemble -> persist -> render

Every stage hands its output to a contract check before the next stage
consumes it. Results are written under the output directories created by
``setup_output_directories``:

- analysis/<image>_storms.csv : one row per storm cell
- plots/<image>_result.png : annotated result image (when rendering is on)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from stormcell.contracts import assert_classified, assert_partitioned, assert_storm_output
from stormcell.radar.loader import RadarImageLoader
from stormcell.radar.classifier import PixelClassifier
from stormcell.radar.storm_assembler import StormAssembler
from stormcell.radar.pixel import StormCell
from stormcell.setup_directories import get_analysis_path, get_plot_path
from stormcell.visualization.plotter import StormPlotter, copy_legend

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['StormProcessor', 'FrameResult']

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """Outputs of one processed radar image."""

    image_path: Path
    storms: List[StormCell] = field(default_factory=list)
    analysis_path: Optional[Path] = None
    plot_path: Optional[Path] = None


class StormProcessor:
    """Detect storm cells in radar product images.

    Example usage::

        output_dirs = setup_output_directories(config.base_dir)
        processor = StormProcessor(config, output_dirs)
        result = processor.process("Z9200_202404241348.png")
        for storm in result.storms:
            print(storm.storm_id, storm.distance, storm.compass)
    """

    def __init__(self, config: "InternalConfig", output_dirs: Dict[str, Path]):
        """Initialize processor with validated configuration.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        output_dirs : dict
            Output directory paths (from setup_output_directories):
            - analysis: storm tables
            - plots: result images
        """
        self.config = config
        self.output_dirs = output_dirs

        self.loader = RadarImageLoader(config)
        self.classifier = PixelClassifier(config)
        self.assembler = StormAssembler(config)
        self.plotter = StormPlotter(config) if config.renderer.enabled else None

    def process(self, image_path: Union[str, Path],
                base_image_path: Optional[Union[str, Path]] = None) -> FrameResult:
        """Run detection on one image and persist the results.

        Parameters
        ----------
        image_path : str or Path
            Radar product image.
        base_image_path : str or Path, optional
            Clean base map of the same size. When given, storms are drawn on
            it with the radar legend copied across; otherwise they are drawn
            on the radar image itself.

        Returns
        -------
        FrameResult
            Ranked storm cells and the written file paths.
        """
        image_path = Path(image_path)
        logger.info("Processing %s", image_path.name)

        rgba = self.loader.load(image_path)

        ds = self.classifier.classify(rgba)
        assert_classified(ds, self.classifier.intensity_name)

        pixels = self.classifier.extract_pixels(ds)
        components = self.assembler.clusterer.partition(pixels)
        assert_partitioned(components, pixels)

        clusters = self.assembler.clusterer.accept(components)
        storms = self.assembler.assemble_clusters(clusters)
        clusterer_cfg = self.config.clusterer
        assert_storm_output(storms, clusterer_cfg.min_size, clusterer_cfg.min_intensity)

        result = FrameResult(image_path=image_path, storms=storms)
        result.analysis_path = self._write_table(storms, image_path)

        if self.plotter is not None:
            base_rgba = rgba
            if base_image_path is not None:
                base_rgba = copy_legend(rgba, self.loader.load(base_image_path))
            result.plot_path = self.plotter.render(
                storms, base_rgba, get_plot_path(self.output_dirs, image_path.name)
            )

        logger.info("%s: %d storm cells from %d classified pixels",
                    image_path.name, len(storms), len(pixels))
        return result

    def _write_table(self, storms: List[StormCell], image_path: Path) -> Path:
        out_path = get_analysis_path(self.output_dirs, image_path.name)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        self.assembler.to_dataframe(storms).to_csv(out_path, index=False)
        logger.debug("Storm table written: %s", out_path)
        return out_path
