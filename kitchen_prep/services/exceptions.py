"""Domain errors raised by the repository layer."""


class EmptyUpdateError(ValueError):
    """Raised when an update carries no fields to apply."""

    def __init__(self) -> None:
        super().__init__("No fields to update")


class TaskNotFoundError(LookupError):
    """Raised when a task id does not match any row."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
