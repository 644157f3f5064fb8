"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthResultSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from .common import DayField, PageSchema, PaginationQuerySchema, build_page
from .task import TaskCreateSchema, TaskQuerySchema, TaskSchema, TaskUpdateSchema

__all__ = [
    "AuthResultSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "UserSchema",
    "DayField",
    "PageSchema",
    "PaginationQuerySchema",
    "build_page",
    "TaskCreateSchema",
    "TaskQuerySchema",
    "TaskSchema",
    "TaskUpdateSchema",
]
