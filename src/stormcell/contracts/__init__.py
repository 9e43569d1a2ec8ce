"""Pipeline contracts: fail-fast enforcement of stage invariants.

This package enforces semantic guarantees between pipeline stages.
Contracts fail immediately and loudly when pipeline stages don't produce
their promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Algorithms handle geometry edge cases
"""

from stormcell.contracts.failure import ContractViolation
from stormcell.contracts.base import require
from stormcell.contracts.grid import assert_classified
from stormcell.contracts.clusters import assert_partitioned
from stormcell.contracts.storms import assert_storm_output

__all__ = [
    "ContractViolation",
    "require",
    "assert_classified",
    "assert_partitioned",
    "assert_storm_output",
]
