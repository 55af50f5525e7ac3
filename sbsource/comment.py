"""Comment data model with embedded settings."""

import asyncio
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from sbsource.api_client import SmileSourceClient
from sbsource.errors import AuthenticationRequiredError
from sbsource.user import User
from sbsource_utils.avatar import build_avatar_link
from sbsource_utils.metadata_codec import CommentSettings, MetadataCodec

RosterEntry = Union[User, dict[str, Any], None]


class Comment(BaseModel):
    """Represents a single comment as stored by the API.

    The ``content`` field holds the settings line followed by the text; the
    decoded parts are exposed as :attr:`settings` and :attr:`text_content`.

    :ivar id: The internal ID of the comment.
    :ivar parent_id: The room or page ID the comment was posted under.
    :ivar content: The content as stored by the API, settings included.
    :ivar create_date: The time string when the comment was created.
    :ivar edit_date: The time string when the comment was last edited.
    :ivar create_user_id: The ID of the user who created the comment.
    :ivar edit_user_id: The ID of the user who edited the comment last.
    :ivar deleted: Whether the comment is deleted.
    :ivar create_user: The user who created the comment, if known.
    :ivar edit_user: The user who last edited the comment, if known.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[int] = None
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    content: str = ""
    create_date: Optional[str] = Field(default=None, alias="createDate")
    edit_date: Optional[str] = Field(default=None, alias="editDate")
    create_user_id: Optional[int] = Field(default=None, alias="createUserId")
    edit_user_id: Optional[int] = Field(default=None, alias="editUserId")
    deleted: bool = False
    create_user: Optional[User] = Field(default=None, exclude=True)
    edit_user: Optional[User] = Field(default=None, exclude=True)

    _api_url: str = PrivateAttr(default="")
    _auth_token: Optional[str] = PrivateAttr(default=None)
    _client: Optional[SmileSourceClient] = PrivateAttr(default=None)
    _settings: CommentSettings = PrivateAttr(
        default_factory=MetadataCodec.default_settings
    )
    _text_content: str = PrivateAttr(default="")

    def model_post_init(self, context: Any) -> None:
        self._settings, self._text_content = MetadataCodec.decode(self.content)

    @classmethod
    def from_record(
        cls,
        raw: dict[str, Any],
        api_url: str,
        users: Iterable[RosterEntry] = (),
        auth_token: Optional[str] = None,
        client: Optional[SmileSourceClient] = None,
    ) -> "Comment":
        """Create a comment from an API record.

        :param raw: The comment data that is grabbed from the API.
        :type raw: dict[str, Any]
        :param api_url: The API URL from which the comment data was grabbed.
        :type api_url: str
        :param users: Users or raw user records to attach by ID.
        :type users: Iterable[RosterEntry]
        :param auth_token: Token used to manipulate the comment further.
        :type auth_token: Optional[str]
        :param client: Client used for later requests on this comment.
        :type client: Optional[SmileSourceClient]
        :return: The new comment.
        :rtype: Comment
        """
        comment = cls.model_validate(raw)
        comment._api_url = api_url
        comment._auth_token = auth_token
        comment._client = client

        roster = [
            user if isinstance(user, User) else User.from_record(user, api_url)
            for user in users
            if user is not None
        ]
        comment.create_user = _find_user(roster, comment.create_user_id)
        comment.edit_user = _find_user(roster, comment.edit_user_id)
        return comment

    @classmethod
    async def fetch_by_id(
        cls,
        comment_id: int,
        api_url: str,
        users: Iterable[RosterEntry] = (),
        auth_token: Optional[str] = None,
        client: Optional[SmileSourceClient] = None,
    ) -> "Comment":
        """Get a comment from the API by ID.

        :param comment_id: The ID of the comment to retrieve.
        :type comment_id: int
        :param api_url: The API URL to retrieve the comment from.
        :type api_url: str
        :param users: Users or raw user records to attach by ID.
        :type users: Iterable[RosterEntry]
        :param auth_token: Token used to manipulate the comment further.
        :type auth_token: Optional[str]
        :param client: Client used to talk to the API.
        :type client: Optional[SmileSourceClient]
        :return: The comment retrieved from the API.
        :rtype: Comment
        :raises NotFoundError: If no comment has this ID.
        :raises TransportError: If the request fails.
        """
        client = client or SmileSourceClient(api_url)
        raw = await asyncio.to_thread(client.get_comment_by_id, comment_id)
        return cls.from_record(raw, api_url, users, auth_token, client)

    @classmethod
    async def create(
        cls,
        body: str,
        settings: CommentSettings,
        parent_id: int,
        auth_token: Optional[str],
        api_url: str,
        client: Optional[SmileSourceClient] = None,
    ) -> "Comment":
        """Post a new comment under a room or page.

        :param body: The text of the comment.
        :type body: str
        :param settings: The metadata of the comment.
        :type settings: CommentSettings
        :param parent_id: The room or page ID where the comment will be sent.
        :type parent_id: int
        :param auth_token: Token used to make authorized API requests.
        :type auth_token: Optional[str]
        :param api_url: The API URL where the comment will be created.
        :type api_url: str
        :param client: Client used to talk to the API.
        :type client: Optional[SmileSourceClient]
        :return: The newly created comment.
        :rtype: Comment
        :raises AuthenticationRequiredError: If no auth token is given.
        :raises TransportError: If the request fails.
        """
        if not auth_token:
            raise AuthenticationRequiredError(
                "A valid auth token isn't available to create the comment."
            )

        record = {
            "parentId": parent_id,
            "content": MetadataCodec.encode(settings, body),
        }
        client = client or SmileSourceClient(api_url)
        raw = await asyncio.to_thread(client.post_comment, record, auth_token)
        return cls.from_record(raw, api_url, auth_token=auth_token, client=client)

    async def edit(
        self,
        body: str,
        settings: Optional[CommentSettings] = None,
        auth_token: Optional[str] = None,
    ) -> "Comment":
        """Edit the comment and return the updated copy.

        This instance is left unchanged whether the request succeeds or not.

        :param body: The new text of the comment.
        :type body: str
        :param settings: New settings, the current ones if omitted.
        :type settings: Optional[CommentSettings]
        :param auth_token: Token to use instead of the stored one.
        :type auth_token: Optional[str]
        :return: The comment as returned by the API after the edit.
        :rtype: Comment
        :raises AuthenticationRequiredError: If no auth token is available.
        :raises TransportError: If the request fails.
        """
        if auth_token is None:
            auth_token = self._auth_token
        if not auth_token:
            raise AuthenticationRequiredError(
                "A valid auth token isn't available to edit the comment."
            )

        if settings is None:
            settings = self.settings
        record = self.to_record()
        record["content"] = MetadataCodec.encode(settings, body)

        client = self._client or SmileSourceClient(self._api_url)
        raw = await asyncio.to_thread(client.put_comment, self.id, record, auth_token)
        return Comment.from_record(
            raw,
            self._api_url,
            users=[self.create_user, self.edit_user],
            auth_token=auth_token,
            client=client,
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def settings(self) -> CommentSettings:
        """The metadata included in the comment content."""
        return self._settings.copy()

    @property
    def text_content(self) -> str:
        """The content of the comment with the settings line stripped out."""
        return self._text_content

    @property
    def markup_type(self) -> Optional[str]:
        return self._settings.get("m")

    @property
    def nickname(self) -> Optional[str]:
        return self._settings.get("n")

    @property
    def bridge_display_name(self) -> Optional[str]:
        return self._settings.get("b")

    @property
    def display_name(self) -> Optional[str]:
        """Name to show for the comment's author.

        Nickname first, then the bridge name, then the creator's username.
        """
        if self.nickname:
            return self.nickname
        if self.bridge_display_name:
            return self.bridge_display_name
        return self.create_user.username if self.create_user else None

    def get_avatar_link(self, size: int = 256) -> Optional[str]:
        """Generate the avatar link shown next to the comment.

        :param size: The size of the avatar in pixels.
        :type size: int
        :return: A URL to the avatar, or None if no avatar is known.
        :rtype: Optional[str]
        """
        if "a" in self._settings:
            return build_avatar_link(self._api_url, self._settings["a"], size)
        if self.create_user:
            return self.create_user.get_avatar_link(size)
        return None

    def to_record(self) -> dict[str, Any]:
        """Return the comment in the API's record format.

        :return: Raw comment record, without the attached users.
        :rtype: dict[str, Any]
        """
        return self.model_dump(by_alias=True)


def _find_user(roster: list[User], user_id: Optional[int]) -> Optional[User]:
    if user_id is None:
        return None
    return next((user for user in roster if user.id == user_id), None)
