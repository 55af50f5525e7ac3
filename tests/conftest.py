"""
Shared fixtures for the comment client tests.
"""

from typing import Any, Optional

import pytest

from sbsource.errors import NotFoundError, TransportError

API_URL = "https://smilebasicsource.com/api/"


class FakeClient:
    """Stand-in for SmileSourceClient that records every call."""

    def __init__(
        self,
        comments: Optional[dict[int, dict[str, Any]]] = None,
        response: Optional[dict[str, Any]] = None,
        error: Optional[TransportError] = None,
    ) -> None:
        self.comments = comments or {}
        self.response = response
        self.error = error
        self.calls: list[tuple] = []

    def get_comment_by_id(self, comment_id: int) -> dict[str, Any]:
        self.calls.append(("get", comment_id))
        if self.error:
            raise self.error
        if comment_id not in self.comments:
            raise NotFoundError(f"Comment {comment_id} was not found", status_code=404)
        return self.comments[comment_id]

    def put_comment(
        self, comment_id: int, record: dict[str, Any], auth_token: str
    ) -> dict[str, Any]:
        self.calls.append(("put", comment_id, record, auth_token))
        if self.error:
            raise self.error
        return self.response or {**record, "editDate": "2021-01-02T00:00:00"}

    def post_comment(self, record: dict[str, Any], auth_token: str) -> dict[str, Any]:
        self.calls.append(("post", record, auth_token))
        if self.error:
            raise self.error
        return self.response or {
            **record,
            "id": 90001,
            "createDate": "2021-01-03T00:00:00",
            "editDate": "2021-01-03T00:00:00",
            "createUserId": 1,
            "editUserId": 1,
            "deleted": False,
        }


@pytest.fixture
def api_url() -> str:
    return API_URL


@pytest.fixture
def raw_users() -> list[dict[str, Any]]:
    """Two user records as returned by the API."""
    return [
        {
            "id": 1,
            "username": "12Me21",
            "avatar": 1111,
            "createDate": "2020-01-01T00:00:00",
            "banned": False,
            "super": True,
            "registered": True,
        },
        {
            "id": 2,
            "username": "snail",
            "avatar": 2222,
            "createDate": "2020-02-01T00:00:00",
            "special": "moderator",
            "banned": False,
            "super": False,
            "registered": True,
        },
    ]


@pytest.fixture
def raw_comment() -> dict[str, Any]:
    """A comment record carrying a settings line."""
    return {
        "parentId": 936,
        "content": '{"m":"t"}\nback to here',
        "createDate": "2021-01-01T00:00:00",
        "editDate": "2021-01-01T00:00:00",
        "createUserId": 2,
        "editUserId": 9,
        "deleted": False,
        "id": 82268,
    }
