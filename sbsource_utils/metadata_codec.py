"""Encoding of comment settings into the comment content field."""

import json
from enum import Enum
from typing import TypedDict


class MarkupType(str, Enum):
    """Known values of the ``m`` settings key."""

    PLAIN = "t"
    TWELVE_Y = "12y"
    BBCODE = "bbcode"


class CommentSettings(TypedDict, total=False):
    """Metadata stored on the first line of a comment.

    :ivar m: The markup type of the comment.
    :ivar b: The display username as determined by a bridge.
    :ivar n: Nickname.
    :ivar a: Avatar file ID overriding the user's avatar.
    """

    m: str
    b: str
    n: str
    a: int


class MetadataCodec:
    """Pack settings and a text body into a single content string.

    The wire format is ``<settings as JSON>\\n<body>``. Clients that do not
    know about the settings line simply show it as the first line of text.
    """

    DEFAULT_SETTINGS: CommentSettings = {"m": MarkupType.PLAIN.value}

    @classmethod
    def default_settings(cls) -> CommentSettings:
        """Return a fresh copy of the fallback settings.

        :return: Settings used when content carries no metadata.
        :rtype: CommentSettings
        """
        return CommentSettings(**cls.DEFAULT_SETTINGS)

    @staticmethod
    def encode(settings: CommentSettings, body: str) -> str:
        """Serialize settings and prepend them to the body.

        :param settings: The metadata of the comment.
        :type settings: CommentSettings
        :param body: The text of the comment.
        :type body: str
        :return: The content string as stored by the API.
        :rtype: str
        :raises ValueError: If the settings hold NaN or infinite numbers.
        """
        # Same output as JSON.stringify so other clients re-encode identically.
        header = json.dumps(
            settings, ensure_ascii=False, separators=(",", ":"), allow_nan=False
        )
        return f"{header}\n{body}"

    @classmethod
    def decode(cls, wire: str) -> tuple[CommentSettings, str]:
        """Split content into its settings and body.

        Content without a valid settings line is returned whole as the body,
        together with the default settings. This never raises.

        :param wire: The content string as stored by the API.
        :type wire: str
        :return: Tuple of (settings, body).
        :rtype: tuple[CommentSettings, str]
        """
        first_newline = wire.find("\n")
        if first_newline == -1:
            return cls.default_settings(), wire

        try:
            settings = json.loads(
                wire[:first_newline], parse_constant=_reject_constant
            )
        except (ValueError, RecursionError):
            return cls.default_settings(), wire

        if not isinstance(settings, dict):
            return cls.default_settings(), wire

        return settings, wire[first_newline + 1 :]

    @classmethod
    def has_metadata(cls, wire: str) -> bool:
        """Check whether content starts with a decodable settings line.

        :param wire: The content string as stored by the API.
        :type wire: str
        :return: True if the first line was read as settings.
        :rtype: bool
        """
        _, body = cls.decode(wire)
        return len(body) < len(wire)


def _reject_constant(name: str) -> None:
    # JSON.parse rejects NaN and Infinity, so such a line is plain text.
    raise ValueError(f"Invalid JSON constant: {name}")
