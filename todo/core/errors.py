class TodoError(Exception):
    pass


class NotFoundError(TodoError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"task {task_id} not found")


class ValidationError(TodoError):
    pass


class ParseError(TodoError):
    def __init__(self, message: str, line_no: int | None = None):
        self.line_no = line_no
        where = f"line {line_no}: " if line_no is not None else ""
        super().__init__(f"{where}{message}")


class MalformedDateError(TodoError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"malformed due date '{text}' (expected YYYY-MM-DD)")


class StorageError(TodoError):
    pass
