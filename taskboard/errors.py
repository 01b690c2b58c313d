"""Error taxonomy. Every error is terminal; ``status_code`` is what the API answers."""


class TaskBoardError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class Unauthenticated(TaskBoardError):
    status_code = 401

    def __init__(self, message="Not authenticated"):
        super().__init__(message)


class NotFound(TaskBoardError):
    """Entity does not exist or is not owned by the caller.

    The two cases share one error so callers cannot discover foreign ids.
    """

    status_code = 404


class InvalidCredentials(TaskBoardError):
    status_code = 401

    def __init__(self, message="Invalid email or password"):
        super().__init__(message)


class ValidationError(TaskBoardError):
    status_code = 400


class Conflict(TaskBoardError):
    status_code = 409
