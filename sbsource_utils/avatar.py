"""Avatar URL helpers."""

from typing import Optional


def build_avatar_link(api_url: str, file_id: Optional[int], size: int = 256) -> str:
    """Build the URL of a cropped avatar image served by the API.

    A missing file ID is formatted as-is, giving a URL that the API rejects.

    :param api_url: The API URL, ending with a slash.
    :type api_url: str
    :param file_id: The file ID where the avatar is stored.
    :type file_id: Optional[int]
    :param size: The size of the avatar in pixels.
    :type size: int
    :return: A URL to the avatar on the API.
    :rtype: str
    """
    return f"{api_url}File/raw/{file_id}?size={size}&crop=true"
