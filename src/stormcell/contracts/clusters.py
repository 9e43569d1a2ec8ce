"""Clustering stage contract.

Enforces the guarantee that the component partition is exhaustive and
disjoint over the input pixels.
"""

from typing import Sequence

from stormcell.contracts.base import require


def assert_partitioned(components: Sequence[Sequence], pixels: Sequence) -> None:
    """Enforce clustering stage contract.

    Called after clusterer.partition(), before the acceptance filter.

    Parameters
    ----------
    components : sequence of pixel lists
        Output of clusterer.partition()

    pixels : sequence of Pixel
        Input of clusterer.partition()

    Raises
    ------
    ContractViolation
        If a pixel is missing, invented, or shared between components
    """
    seen = set()
    for idx, component in enumerate(components):
        require(
            len(component) > 0,
            f"Cluster contract violated: component {idx} is empty"
        )
        members = set(component)
        require(
            len(members) == len(component),
            f"Cluster contract violated: component {idx} repeats a pixel"
        )
        require(
            seen.isdisjoint(members),
            f"Cluster contract violated: component {idx} overlaps an earlier component"
        )
        seen |= members

    expected = set(pixels)
    require(
        seen == expected,
        f"Cluster contract violated: components cover {len(seen)} pixels, "
        f"input has {len(expected)}"
    )
