"""Renderer: turns thread records into a Markdown document."""

from typing import Sequence

from src.core.types import CommentRecord, PostRecord

INDENT_UNIT = "  "
COMMENTS_SEPARATOR = "---\n\n## Comments\n\n"


def comment_indent(depth: int) -> str:
    """Indentation prefix for a comment at the given depth.

    Each nesting level takes two indent units, so a reply at depth d is
    prefixed by 4 * d spaces. Existing exports rely on this width.
    """
    return INDENT_UNIT * (depth * 2)


def render_post(post: PostRecord) -> str:
    """Heading, metadata lines, then the body paragraph when there is one."""
    out = f"# {post.title}\n\n"
    out += f"**Subreddit:** r/{post.subreddit}\n"
    out += f"**Author:** u/{post.author}\n"
    out += f"**Score:** {post.score}\n\n"
    if post.body:
        out += f"{post.body}\n\n"
    return out


def render_comment(comment: CommentRecord) -> str:
    """Bullet line with author and score, then the body as one blockquote."""
    indent = comment_indent(comment.depth)
    quote = f"{indent}{INDENT_UNIT}> "
    body = comment.body.replace("\n", "\n" + quote)
    return (
        f"{indent}- **u/{comment.author}** (*{comment.score} points*):\n"
        f"{quote}{body}\n\n"
    )


def render_thread(post: PostRecord, comments: Sequence[CommentRecord]) -> str:
    """Render the full document. Comments keep their input order."""
    parts = [render_post(post), COMMENTS_SEPARATOR]
    parts.extend(render_comment(c) for c in comments)
    return "".join(parts)
