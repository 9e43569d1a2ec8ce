"""Storm cell result image rendering.

Paints detected cells onto a base map image and annotates them with
matplotlib (Agg backend, file output only).
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence, Tuple, Union

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Ellipse

from stormcell.radar.pixel import StormCell

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['StormPlotter', 'copy_legend']

logger = logging.getLogger(__name__)


def copy_legend(radar_rgba: np.ndarray, base_rgba: np.ndarray) -> np.ndarray:
    """Copy the legend strip of a radar image into a base map.

    The PPI product is a square radar area with the colour legend to its
    right, so the legend is every column from ``height`` to ``width``.

    Raises
    ------
    ValueError
        If the two images differ in size.
    """
    if radar_rgba.shape[:2] != base_rgba.shape[:2]:
        raise ValueError(
            f"Image dimensions do not match: {radar_rgba.shape[:2]} vs {base_rgba.shape[:2]}"
        )

    height = radar_rgba.shape[0]
    result = base_rgba.copy()
    result[:, height:, :] = radar_rgba[:, height:, :]
    return result


def _mpl_color(rgba: Tuple[int, int, int, int]) -> Tuple[float, float, float, float]:
    return tuple(c / 255.0 for c in rgba)


class StormPlotter:
    """Render the annotated storm image.

    For each storm (in rank order) the plotter draws:

    - member pixels in their classified colour
    - the centroid pixel in ``centroid_color``
    - the fitted ellipse, only when the shape fit is drawable
    - a line from the radar origin to the centroid
    - the ``#id`` label next to the centroid

    Example usage::

        plotter = StormPlotter(config)
        plotter.render(storms, base_rgba, output_dirs["plots"] / "result.png")
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        renderer = config.renderer
        self.dpi = renderer.dpi
        self.centroid_color = renderer.centroid_color
        self.line_color = renderer.line_color
        self.ellipse_color = renderer.ellipse_color
        self.label_color = renderer.label_color
        self.label_offset = renderer.label_offset
        self.font_size = renderer.font_size
        self.radar_center = config.station.radar_center

        logger.info(f"StormPlotter initialized (dpi={self.dpi})")

    def paint_storms(self, storms: Sequence[StormCell], base_rgba: np.ndarray) -> np.ndarray:
        """Return a copy of base_rgba with cell pixels and centroids painted."""
        canvas = base_rgba.copy()
        height, width = canvas.shape[:2]

        for storm in storms:
            if storm.pixels:
                xs = np.array([p.x for p in storm.pixels])
                ys = np.array([p.y for p in storm.pixels])
                colors = np.array([p.color for p in storm.pixels], dtype=np.uint8)
                inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
                canvas[ys[inside], xs[inside]] = colors[inside]

            cx, cy = storm.centroid
            if 0 <= cx < width and 0 <= cy < height:
                canvas[cy, cx] = self.centroid_color

        return canvas

    def render(self, storms: Sequence[StormCell], base_rgba: np.ndarray,
               output_path: Union[str, Path]) -> Path:
        """Draw storms over base_rgba and save the figure.

        The figure has exactly the pixel size of the base image.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        canvas = self.paint_storms(storms, base_rgba)
        height, width = canvas.shape[:2]

        fig = plt.figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        try:
            ax = fig.add_axes([0, 0, 1, 1])
            ax.imshow(canvas, interpolation="nearest")
            ax.set_xlim(-0.5, width - 0.5)
            ax.set_ylim(height - 0.5, -0.5)
            ax.axis("off")

            ox, oy = self.radar_center
            for storm in storms:
                cx, cy = storm.centroid
                fit = storm.shape
                if fit.drawable:
                    ax.add_patch(Ellipse(
                        (cx, cy),
                        width=2 * round(fit.major_axis_length),
                        height=2 * round(fit.minor_axis_length),
                        angle=float(np.degrees(fit.axis_angle)),
                        fill=False,
                        edgecolor=_mpl_color(self.ellipse_color),
                        linewidth=1.0,
                    ))

                ax.plot([ox, cx], [oy, cy], color=_mpl_color(self.line_color), linewidth=1.0)
                ax.text(
                    cx + self.label_offset[0], cy + self.label_offset[1],
                    f"#{storm.storm_id}",
                    color=_mpl_color(self.label_color),
                    fontsize=self.font_size,
                )

            fig.savefig(output_path, dpi=self.dpi)
        finally:
            plt.close(fig)

        logger.info("Result image saved: %s", output_path)
        return output_path
