from taskapi.models.task import Task
from taskapi.models.token import Token, TokenType
from taskapi.models.user import User

__all__ = [
    "Task",
    "Token",
    "TokenType",
    "User",
]
