"""User data model."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from sbsource_utils.avatar import build_avatar_link


class User(BaseModel):
    """Wraps a user record as returned by the API.

    :ivar id: The internal ID of the user.
    :ivar username: The username of the user.
    :ivar avatar_file_id: The file ID where the user's avatar is stored.
    :ivar create_date: The date string of the user's creation.
    :ivar special: Optional free-text role tag.
    :ivar banned: Whether the user is banned.
    :ivar is_privileged: Whether the user has special permissions.
    :ivar registered: Whether the user finished registration.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[int] = None
    username: Optional[str] = None
    avatar_file_id: Optional[int] = Field(default=None, alias="avatar")
    create_date: Optional[str] = Field(default=None, alias="createDate")
    special: Optional[str] = None
    banned: Optional[bool] = None
    is_privileged: Optional[bool] = Field(default=None, alias="super")
    registered: Optional[bool] = None

    _api_url: str = PrivateAttr(default="")

    @classmethod
    def from_record(cls, raw: dict[str, Any], api_url: str) -> "User":
        """Create a user from an API record.

        :param raw: The user data as it is formatted on the API.
        :type raw: dict[str, Any]
        :param api_url: The API URL from which the user data was grabbed.
        :type api_url: str
        :return: The wrapped user.
        :rtype: User
        """
        user = cls.model_validate(raw)
        user._api_url = api_url
        return user

    @property
    def api_url(self) -> str:
        return self._api_url

    def get_avatar_link(self, size: int = 256) -> str:
        """Generate an avatar link from the user's avatar file ID.

        :param size: The size of the avatar in pixels.
        :type size: int
        :return: A URL to the avatar on the API.
        :rtype: str
        """
        return build_avatar_link(self._api_url, self.avatar_file_id, size)

    def to_record(self) -> dict[str, Any]:
        """Return the user in the API's record format.

        :return: The fields that were present on the source record.
        :rtype: dict[str, Any]
        """
        return self.model_dump(by_alias=True, exclude_unset=True)
