"""Common Marshmallow schemas and fields shared across resources."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate


def not_blank(value: str) -> None:
    """Reject strings that are empty once surrounding whitespace is removed."""
    if not value or not value.strip():
        raise ValidationError("Must not be blank.")


class DayField(fields.Field):
    """Accept an ISO date, or an ISO datetime reduced to its calendar date."""

    default_error_messages = {"invalid": "Not a valid date."}

    def _serialize(self, value: Any, attr: str | None, obj: Any, **kwargs: Any) -> Any:
        if value is None:
            return None
        return value.isoformat()

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise self.make_error("invalid")
        raw = value.strip()
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError as exc:
            raise self.make_error("invalid") from exc


class PaginationQuerySchema(Schema):
    """Validate ``page``/``limit``/``sortBy`` with configurable defaults."""

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = 10, max_limit: int = 200, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    sort_by = fields.String(data_key="sortBy", load_default=None)
    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        sort_by = (data.get("sort_by") or "").strip()
        data["sort_by"] = sort_by or None
        return data


class PageSchema(Schema):
    """Pagination metadata emitted next to ``results``."""

    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    total_pages = fields.Integer(required=True, data_key="totalPages")
    total_results = fields.Integer(required=True, data_key="totalResults")


_page_schema = PageSchema()


def build_page(page: Any, item_schema: Schema) -> dict[str, Any]:
    """Return ``{"results": [...], "page", "limit", "totalPages", "totalResults"}``."""

    body = _page_schema.dump(page)
    body["results"] = item_schema.dump(page.results, many=True)
    return body
