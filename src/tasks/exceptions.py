"""Exceptions raised by the task store."""


class TaskStoreError(Exception):
    """Base class for store errors"""

    pass


class CategoryReferenceError(TaskStoreError):
    """A task references a category that does not exist.

    Raised on create/update before anything is stored, and on reads if a
    stored task somehow lost its category. Handlers treat it as a server fault.
    """

    def __init__(self, category_id: int):
        super().__init__(f"Invalid category ID: {category_id}")
        self.category_id = category_id


class UsernameTakenError(TaskStoreError):
    """Username is already registered"""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username
