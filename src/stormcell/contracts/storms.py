"""Assembly stage contract.

Enforces the guarantee that the storm list is filtered, located and
ranked as promised.
"""

from typing import Sequence

from stormcell.contracts.base import require


def assert_storm_output(storms: Sequence, min_size: int, min_intensity: int) -> None:
    """Enforce assembly stage contract.

    Called after assembler.assemble(). We do NOT validate the scientific
    correctness of the geometry; only the structural guarantees.

    Parameters
    ----------
    storms : sequence of StormCell
        Output of assembler.assemble()

    min_size : int
        Cells must have more pixels than this

    min_intensity : int
        Cells must reach this tier

    Raises
    ------
    ContractViolation
        If structural requirements are violated
    """
    require(
        isinstance(storms, (list, tuple)),
        f"Storm contract violated: output is {type(storms)}, expected list"
    )

    for rank, storm in enumerate(storms):
        require(
            storm.storm_id == rank + 1,
            f"Storm contract violated: storm at rank {rank} has id {storm.storm_id}, expected {rank + 1}"
        )
        require(
            storm.size > min_size,
            f"Storm contract violated: storm {storm.storm_id} has {storm.size} pixels, expected > {min_size}"
        )
        require(
            storm.max_intensity >= min_intensity,
            f"Storm contract violated: storm {storm.storm_id} peaks at {storm.max_intensity} dBZ, "
            f"expected >= {min_intensity}"
        )
        require(
            0.0 <= storm.bearing < 360.0,
            f"Storm contract violated: storm {storm.storm_id} bearing {storm.bearing} outside [0, 360)"
        )
        if rank > 0:
            require(
                storms[rank - 1].distance <= storm.distance,
                f"Storm contract violated: storm {storm.storm_id} is closer than storm {rank}"
            )
