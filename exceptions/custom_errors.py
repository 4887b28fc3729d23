class ScheduleError(Exception):
    """Base class for every error raised by the lesson scheduler."""

    pass


class DataValidationError(ScheduleError):
    """Raised when school data (configuration, definitions, assignments or availability) is invalid."""

    pass


class SolverError(ScheduleError):
    """Raised when the constraint model cannot be built or searched."""

    pass


class BlockInfeasibleError(SolverError):
    """Raised when a block has no feasible (day, start) slot before search begins."""

    def __init__(self, block, message: str = None):
        self.block = block
        if message is None:
            message = (
                f"❌ Teacher '{block.teacher}' cannot place lesson '{block.lesson}' "
                f"({block.length}h block). Check the teacher's availability."
            )
        super().__init__(message)


class NoBlocksToScheduleError(ScheduleError):
    """Raised when the assignments yield no blocks at all. Not a failure of the data as such."""

    pass


class SearchInfeasibleError(SolverError):
    """Raised when the search proves that no timetable satisfies every constraint."""

    pass


class SearchTimedOutError(SolverError):
    """Raised when the time budget runs out without a solution or a proof of infeasibility."""

    pass


class ModelInvalidError(SolverError):
    """Raised when CP-SAT rejects the model as invalid."""

    pass


class SolveCancelledError(ScheduleError):
    """Raised when the caller cancels a solve before or during search."""

    pass


class FileReadingError(ScheduleError):
    """Raised when there is an error reading a file."""

    pass


class FileContentError(ScheduleError):
    """Raised when the content of a file is not as expected."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    NoBlocksToScheduleError: 422,
    SearchInfeasibleError: 422,
    SearchTimedOutError: 422,
    ModelInvalidError: 500,
    DataValidationError: 400,
    FileContentError: 400,
    BlockInfeasibleError: 422,
    SolverError: 422,
    SolveCancelledError: 409,
    FileReadingError: 500,
}
