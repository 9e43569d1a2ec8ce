"""Classification stage contract.

The tier grid handed to pixel extraction must be a 2D (y, x) integer
field with no negative tiers; 0 marks unclassified pixels.
"""

import numpy as np
import xarray as xr
from stormcell.contracts.base import require


def assert_classified(ds: xr.Dataset, intensity_var: str = "intensity") -> None:
    """Check the Dataset returned by PixelClassifier.classify().

    Parameters
    ----------
    ds : xr.Dataset
        Dataset from classifier.classify()

    intensity_var : str
        Name of the tier variable

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        "x" in ds.coords,
        "Grid contract violated: missing 'x' coordinate"
    )
    require(
        "y" in ds.coords,
        "Grid contract violated: missing 'y' coordinate"
    )
    require(
        intensity_var in ds.data_vars,
        f"Grid contract violated: missing '{intensity_var}' variable"
    )

    tiers = ds[intensity_var]
    require(
        tiers.ndim == 2,
        f"Grid contract violated: '{intensity_var}' has {tiers.ndim} dims, expected 2"
    )
    require(
        tiers.dtype.kind in {"i", "u"},
        f"Grid contract violated: '{intensity_var}' dtype is {tiers.dtype}, expected integer"
    )
    if tiers.size > 0:
        require(
            np.min(tiers.values) >= 0,
            f"Grid contract violated: '{intensity_var}' contains negative tiers"
        )
