"""
================================================================================
Post Payload Builder
================================================================================

Fluent builder for /posts request bodies.

Usage:
    >>> PostBuilder.new().with_title("hello").with_user_id(7).build_json()
    '{"title": "hello", "body": "Test Body", "userId": 7}'

================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict


class PostBuilder:
    """Builds post payloads with sensible defaults for every field."""

    DEFAULT_TITLE = "Test Title"
    DEFAULT_BODY = "Test Body"
    DEFAULT_USER_ID = 1

    def __init__(self) -> None:
        self._title = self.DEFAULT_TITLE
        self._body = self.DEFAULT_BODY
        self._user_id = self.DEFAULT_USER_ID

    @classmethod
    def new(cls) -> "PostBuilder":
        return cls()

    def with_title(self, title: str) -> "PostBuilder":
        self._title = title
        return self

    def with_body(self, body: str) -> "PostBuilder":
        self._body = body
        return self

    def with_user_id(self, user_id: int) -> "PostBuilder":
        self._user_id = user_id
        return self

    def build(self) -> Dict[str, Any]:
        """Return the payload as a dict using the API's camelCase keys."""
        return {
            "title": self._title,
            "body": self._body,
            "userId": self._user_id,
        }

    def build_json(self) -> str:
        """Return the payload serialized as JSON text."""
        return json.dumps(self.build(), ensure_ascii=False)


__all__ = [
    "PostBuilder",
]
