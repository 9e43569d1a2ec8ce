"""The single check primitive used by every stage contract."""

from stormcell.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Raise ContractViolation(message) unless condition holds.

    Examples
    --------
    >>> require(ds["intensity"].ndim == 2, "Grid contract violated: tier grid must be 2D")
    >>> require(storm.storm_id == rank + 1, "Storm contract violated: ids not dense")
    """
    if not condition:
        raise ContractViolation(message)
