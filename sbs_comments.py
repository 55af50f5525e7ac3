#!/usr/bin/env python3
"""
Command line tool to read, post and edit SmileBASIC Source comments.
"""

import asyncio
from typing import List, Optional

import typer
from alive_progress import alive_bar

from sbsource.api_client import SmileSourceClient
from sbsource.comment import Comment
from sbsource.errors import SmileSourceError
from sbsource.secrets import Secrets
from sbsource_utils.metadata_codec import CommentSettings, MarkupType

app = typer.Typer(help=__doc__)


def _build_settings(
    markup: Optional[MarkupType],
    nickname: Optional[str],
    avatar: Optional[int],
    base: Optional[CommentSettings] = None,
) -> CommentSettings:
    """Merge the settings given on the command line into existing ones.

    :param markup: Optional markup type.
    :type markup: Optional[MarkupType]
    :param nickname: Optional nickname.
    :type nickname: Optional[str]
    :param avatar: Optional avatar override file ID.
    :type avatar: Optional[int]
    :param base: Settings to start from, plain text if omitted.
    :type base: Optional[CommentSettings]
    :return: The merged settings.
    :rtype: CommentSettings
    """
    settings = base.copy() if base else CommentSettings(m=MarkupType.PLAIN.value)
    if markup:
        settings["m"] = markup.value
    if nickname:
        settings["n"] = nickname
    if avatar is not None:
        settings["a"] = avatar
    return settings


def _print_comment(comment: Comment) -> None:
    author = comment.display_name or f"User {comment.create_user_id}"
    print("=" * 50)
    print(f"#{comment.id} in {comment.parent_id} by {author} at {comment.create_date}")
    if comment.edit_date and comment.edit_date != comment.create_date:
        editor = comment.edit_user.username if comment.edit_user else comment.edit_user_id
        print(f"Edited by {editor} at {comment.edit_date}")
    if comment.deleted:
        print("[deleted]")
    print(f"Settings: {comment.settings}")
    avatar_link = comment.get_avatar_link()
    if avatar_link:
        print(f"Avatar: {avatar_link}")
    print(comment.text_content)


def _require_token(secrets: Secrets) -> str:
    if not secrets.auth_token:
        print(
            "Error: Auth token is not set. Provide it via --token, .secrets.json, or SBS_AUTH_TOKEN environment variable."
        )
        raise typer.Exit(code=1)
    return secrets.auth_token


@app.command()
def show(
    comment_ids: List[int] = typer.Argument(..., help="IDs of the comments to show."),
    with_users: bool = typer.Option(
        False,
        "--users",
        help="Also fetch the users who created and edited the comments.",
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        help="API URL (overrides .secrets.json and env vars).",
    ),
):
    """
    Fetch comments by ID and print their text and settings.
    """
    secrets = Secrets.load(api_url)
    client = SmileSourceClient(secrets.api_url)

    comments = []
    with alive_bar(len(comment_ids), title="Fetching comments") as bar:
        for comment_id in comment_ids:
            bar.text(f"-> Fetching comment: {comment_id}")
            try:
                comments.append(
                    asyncio.run(
                        Comment.fetch_by_id(comment_id, secrets.api_url, client=client)
                    )
                )
            except SmileSourceError as e:
                print(f"Could not fetch comment {comment_id}: {e}")
            bar()

    if with_users and comments:
        user_ids = {c.create_user_id for c in comments} | {c.edit_user_id for c in comments}
        try:
            users = client.get_users(user_ids)
        except SmileSourceError as e:
            print(f"Warning: Could not fetch users: {e}")
            users = []
        comments = [
            Comment.from_record(c.to_record(), secrets.api_url, users, client=client)
            for c in comments
        ]

    for comment in comments:
        _print_comment(comment)

    if not comments:
        raise typer.Exit(code=1)


@app.command()
def post(
    parent_id: int = typer.Argument(..., help="The room or page ID to post under."),
    body: str = typer.Argument(..., help="The text of the comment."),
    markup: Optional[MarkupType] = typer.Option(
        None, "--markup", help="Markup type of the comment (plain text by default)."
    ),
    nickname: Optional[str] = typer.Option(
        None, "--nickname", help="Nickname to display instead of the username."
    ),
    avatar: Optional[int] = typer.Option(
        None, "--avatar", help="File ID of an avatar to display instead of the user's."
    ),
    auth_token: Optional[str] = typer.Option(
        None, "--token", help="Auth token (overrides .secrets.json and env vars)."
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="API URL (overrides .secrets.json and env vars)."
    ),
):
    """
    Post a new comment.
    """
    secrets = Secrets.load(api_url, auth_token)
    token = _require_token(secrets)
    settings = _build_settings(markup, nickname, avatar)

    try:
        comment = asyncio.run(
            Comment.create(body, settings, parent_id, token, secrets.api_url)
        )
    except SmileSourceError as e:
        print(f"Error: Could not post comment: {e}")
        raise typer.Exit(code=1)

    print("✓ Comment posted!")
    _print_comment(comment)


@app.command()
def edit(
    comment_id: int = typer.Argument(..., help="ID of the comment to edit."),
    body: str = typer.Argument(..., help="The new text of the comment."),
    markup: Optional[MarkupType] = typer.Option(
        None, "--markup", help="New markup type (keeps the current one by default)."
    ),
    nickname: Optional[str] = typer.Option(
        None, "--nickname", help="New nickname (keeps the current one by default)."
    ),
    avatar: Optional[int] = typer.Option(
        None, "--avatar", help="New avatar override file ID."
    ),
    auth_token: Optional[str] = typer.Option(
        None, "--token", help="Auth token (overrides .secrets.json and env vars)."
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="API URL (overrides .secrets.json and env vars)."
    ),
):
    """
    Replace the text of an existing comment, keeping its settings unless overridden.
    """
    secrets = Secrets.load(api_url, auth_token)
    token = _require_token(secrets)

    async def _edit() -> Comment:
        comment = await Comment.fetch_by_id(comment_id, secrets.api_url, auth_token=token)
        settings = _build_settings(markup, nickname, avatar, base=comment.settings)
        return await comment.edit(body, settings)

    try:
        edited = asyncio.run(_edit())
    except SmileSourceError as e:
        print(f"Error: Could not edit comment {comment_id}: {e}")
        raise typer.Exit(code=1)

    print("✓ Comment edited!")
    _print_comment(edited)


if __name__ == "__main__":
    app()
