"""Transcript rendering.

The transcript is plain text meant to be fed to a summarization model:
post metadata, the post body, then one line per comment indented two spaces
per nesting level.
"""

from collections.abc import Iterable
from datetime import datetime

from urlsum.domain.model import Comment, ListingPost, Post
from urlsum.util.format import format_abbreviated, format_relative

COMMENTS_HEADER = "\n\n--- Comments ---"
EMPTY_LISTING_MESSAGE = "This subreddit appears to be empty or has no accessible posts."
INDENT = "  "


def format_comment(comment: Comment) -> str:
    """Render one comment line: ``<indent>u/<author>: <body> [<score> points]``."""
    line = INDENT * comment.depth
    if comment.author is not None:
        line += f"u/{comment.author}: "
    line += comment.body
    if comment.score is not None:
        line += f" [{comment.score} points]"
    return line


def format_post_metadata(post: Post, now: datetime | None = None) -> list[str]:
    """Metadata lines for a post, skipping fields Reddit did not send."""
    lines: list[str] = []

    if post.title is not None:
        lines.append(f"📌 {post.title}")
    if post.author is not None:
        lines.append(f"👤 u/{post.author}")
    if post.subreddit is not None:
        lines.append(f"🏷️ r/{post.subreddit}")
    if post.created_utc is not None:
        lines.append(f"🕒 {format_relative(post.created_utc, now=now)}")
    if post.score is not None:
        lines.append(f"⭐ {format_abbreviated(post.score)}")
    if post.num_comments is not None:
        lines.append(f"💬 {format_abbreviated(post.num_comments)}")
    if post.over_18:
        lines.append("🔞 NSFW")

    return lines


def render_post(
    post: Post, comments: Iterable[Comment], now: datetime | None = None
) -> str:
    """Render the full transcript of a post view.

    Args:
        post: The post
        comments: Comments in pre-order with final depths
        now: Reference time for the relative age

    Returns:
        Transcript text
    """
    parts = format_post_metadata(post, now=now)
    if post.selftext:
        parts.append(f"\n{post.selftext}")
    parts.append(COMMENTS_HEADER)
    parts.extend(format_comment(comment) for comment in comments)
    return "\n".join(parts)


def format_listing_post(post: ListingPost) -> str:
    lines: list[str] = []
    if post.title is not None:
        lines.append(f"📌 {post.title}")
    if post.author is not None:
        lines.append(f"👤 u/{post.author}")
    if post.score is not None:
        lines.append(f"⭐ {post.score}")
    if post.num_comments is not None:
        lines.append(f"💬 {post.num_comments}")
    if post.link is not None:
        lines.append(f"🔗 {post.link}")
    return "\n".join(lines)


def render_listing(posts: Iterable[ListingPost]) -> str:
    """Render a subreddit listing, one block per post."""
    return "\n\n".join(format_listing_post(post) for post in posts)
