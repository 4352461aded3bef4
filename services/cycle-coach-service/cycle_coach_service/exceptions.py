from fastapi import HTTPException, status


class ConfigurationError(RuntimeError):
    """Service cannot start with the current settings."""


class GenerationError(RuntimeError):
    """The generation endpoint did not produce usable text."""


class GenerationTransportError(GenerationError):
    pass


class GenerationStatusError(GenerationError):
    def __init__(self, status_code: int | None):
        super().__init__(f"Generation endpoint returned status {status_code}")
        self.status_code = status_code


class GenerationDecodeError(GenerationError):
    pass


class GenerationFailedException(HTTPException):
    def __init__(self, subject: str):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate {subject}. Please try again.",
        )


class TaskNotFoundException(HTTPException):
    def __init__(self, task_id: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Generation task {task_id} not found")
