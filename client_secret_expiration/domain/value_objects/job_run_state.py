"""Job run state value object."""

from enum import StrEnum, auto


class JobRunState(StrEnum):
    """State of a single scheduled job run."""

    QUERYING = auto()
    PUBLISHING = auto()
    COMPLETED = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        """Check if the run has finished."""
        return self in {JobRunState.COMPLETED, JobRunState.FAILED}

    def __str__(self) -> str:
        return self.value
