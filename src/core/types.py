"""Data Transfer Objects for ThreadScribe."""

from dataclasses import dataclass
from typing import Union

from src.adapters.node_reader import NodeReader


@dataclass
class PostRecord:
    """Root post of a thread, read once per export run."""

    title: str
    author: str
    subreddit: str = ""
    score: Union[str, int] = ""      # host-supplied, rendered verbatim
    body: str = ""                   # empty when the post has no body node


@dataclass
class CommentRecord:
    """One reply in document (pre-order) order."""

    author: str
    body: str
    score: Union[str, int] = 0
    depth: int = 0                   # nesting depth (0 = top-level)


@dataclass
class HostPage:
    """A loaded thread page: its title plus a reader over the document root."""

    title: str
    root: NodeReader


@dataclass
class MarkdownDocument:
    """Finished export handed to a sink."""

    filename: str
    content: str
    mime_type: str = "text/markdown"
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ThreadSelectors:
    """CSS selectors locating thread parts in the host tree."""

    post: str = "shreddit-post"
    post_body: str = '[id$="-post-rtjson-content"]'
    comment_tree: str = "shreddit-comment-tree"
    comment: str = "shreddit-comment"
    comment_body: str = '[id$="-comment-rtjson-content"] > div'


DEFAULT_SELECTORS = ThreadSelectors()
