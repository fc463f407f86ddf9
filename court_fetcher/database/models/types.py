"""Custom column types"""
import json

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class UnicodeJSON(TypeDecorator):
    """
    JSON stored as TEXT with ``ensure_ascii=False``.

    The stock JSON type escapes non-ASCII characters; party names and order
    text are kept readable in the audit table instead.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if isinstance(value, str):
            # Already serialized
            return value
        return json.dumps(value, ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if value is None or not isinstance(value, str):
            return value
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value
