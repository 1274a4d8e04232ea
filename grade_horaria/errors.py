# grade_horaria/errors.py
class TimetableAppError(Exception):
    """
    Failure surfaced to the client as {"error": message} with status_code.
    Only the backend call and the document export raise these.
    """

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class SchedulerError(TimetableAppError):
    status_code = 502


class SchedulerUnavailableError(SchedulerError):
    # connection refused / host not found
    status_code = 503


class SchedulerTimeoutError(SchedulerError):
    status_code = 504


class SchedulerRejectedError(SchedulerError):
    """The backend answered, but not with a usable timetable."""

    def __init__(self, message: str, status_code: int = 502, body: str = ""):
        super().__init__(message, status_code)
        self.body = body


class DocumentCompositionError(TimetableAppError):
    status_code = 500


class ExportInProgressError(TimetableAppError):
    status_code = 409
