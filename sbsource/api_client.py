"""HTTP client for the SmileBASIC Source API."""

from typing import Any, Iterable, Optional

import requests

from sbsource.errors import NotFoundError, TransportError


class SmileSourceClient:
    """Send comment and user requests to the API.

    Requests are made once; failures are raised as :class:`TransportError`.

    :ivar api_url: Base URL of the API, ending with a slash.
    :ivar session: The requests session for HTTP connections.
    :ivar timeout: Timeout in seconds for every request.
    """

    def __init__(self, api_url: str, timeout: float = 15) -> None:
        """Initialize the API client.

        :param api_url: Base URL of the API, ending with a slash.
        :type api_url: str
        :param timeout: Timeout in seconds for every request.
        :type timeout: float
        """
        self.api_url = api_url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {"Accept": "application/json", "User-Agent": "sbs-comments"}
        )

    @staticmethod
    def generate_headers(auth_token: str) -> dict[str, str]:
        """Build the headers for an authorized request.

        :param auth_token: The token used to authorize the request.
        :type auth_token: str
        :return: Header dictionary to send along with the request.
        :rtype: dict[str, str]
        """
        return {"Authorization": f"Bearer {auth_token}"}

    def _request(
        self,
        method: str,
        path: str,
        auth_token: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        """Perform a request and decode the JSON response.

        :param method: HTTP method.
        :type method: str
        :param path: Endpoint path relative to the API URL.
        :type path: str
        :param auth_token: Optional token used to authorize the request.
        :type auth_token: Optional[str]
        :return: The decoded JSON body.
        :raises TransportError: If the request fails or the body is not JSON.
        """
        url = f"{self.api_url}{path}"
        headers = self.generate_headers(auth_token) if auth_token else None
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            print(f"Error: {method} {url} returned status {status_code}")
            raise TransportError(str(e), status_code=status_code) from e
        except requests.RequestException as e:
            print(f"Error: {method} {url} failed: {e}")
            raise TransportError(str(e)) from e
        except ValueError as e:
            print(f"Error: {method} {url} did not return JSON: {e}")
            raise TransportError(f"Invalid JSON response from {url}") from e

    def get_comment_by_id(self, comment_id: int) -> dict[str, Any]:
        """Fetch a single comment record.

        :param comment_id: The ID of the comment to retrieve.
        :type comment_id: int
        :return: The raw comment record.
        :rtype: dict[str, Any]
        :raises NotFoundError: If the API has no comment with this ID.
        """
        records = self._request("GET", "Comment", params={"Ids": comment_id})
        if not records:
            raise NotFoundError(f"Comment {comment_id} was not found", status_code=404)
        return records[0]

    def put_comment(
        self, comment_id: int, record: dict[str, Any], auth_token: str
    ) -> dict[str, Any]:
        """Replace an existing comment.

        :param comment_id: The ID of the comment to edit.
        :type comment_id: int
        :param record: The raw comment record to send.
        :type record: dict[str, Any]
        :param auth_token: The token used to authorize the request.
        :type auth_token: str
        :return: The comment record as stored by the API.
        :rtype: dict[str, Any]
        """
        return self._request(
            "PUT", f"Comment/{comment_id}", auth_token=auth_token, json=record
        )

    def post_comment(self, record: dict[str, Any], auth_token: str) -> dict[str, Any]:
        """Create a new comment.

        :param record: The raw comment record to send.
        :type record: dict[str, Any]
        :param auth_token: The token used to authorize the request.
        :type auth_token: str
        :return: The comment record as stored by the API.
        :rtype: dict[str, Any]
        """
        return self._request("POST", "Comment", auth_token=auth_token, json=record)

    def get_users(self, user_ids: Iterable[int]) -> list[dict[str, Any]]:
        """Fetch user records for a set of IDs.

        :param user_ids: The IDs of the users to retrieve.
        :type user_ids: Iterable[int]
        :return: The raw user records the API knows about.
        :rtype: list[dict[str, Any]]
        """
        ids = sorted({user_id for user_id in user_ids if user_id is not None})
        if not ids:
            return []
        return self._request(
            "GET", "User", params={"ids": ",".join(str(i) for i in ids)}
        )
