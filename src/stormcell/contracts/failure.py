"""Exception raised when a detection stage breaks its output guarantee."""


class ContractViolation(RuntimeError):
    """A stage handed the next one data it promised never to produce.

    Kept apart from the other failure kinds of the detector:

    - bad settings raise pydantic ``ValidationError`` during resolution
    - unreadable or missing images raise ``ValueError`` / ``FileNotFoundError``
    - degenerate cell geometry returns documented fallback values

    Seeing this exception means the code is wrong, not the input.
    """
