"""Extractor: reads a post record and comment records out of the host tree."""

import logging
import re
from typing import Any, Optional

from src.adapters.node_reader import NodeReader
from src.core.exceptions import MissingCommentContainerError, MissingPostError
from src.core.types import DEFAULT_SELECTORS, CommentRecord, PostRecord, ThreadSelectors

logger = logging.getLogger("threadscribe")

# optional sign, ASCII digits only
_INTEGER = re.compile(r"\s*-?\d+\s*", re.ASCII)


def _read_field(node: NodeReader, prop: str, attr: str) -> Any:
    """Typed property first, then string attribute."""
    value = node.property(prop)
    if value is None or value == "":
        value = node.attribute(attr)
    return value


def _parse_int(value: Any) -> int:
    """Parse an integer attribute, mapping anything non-numeric to 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not _INTEGER.fullmatch(value):
        return 0
    return int(value)


def extract_post(root: NodeReader,
                 selectors: ThreadSelectors = DEFAULT_SELECTORS) -> PostRecord:
    """Read the thread's root post.

    Metadata that cannot be found resolves to an empty value; a missing body
    node leaves the body empty.

    Raises:
        MissingPostError: The post container is absent
    """
    post = root.query(selectors.post)
    if post is None:
        logger.error(f"Execution stopped: no post element matches '{selectors.post}'")
        raise MissingPostError()
    logger.info("Found post element")

    title = _read_field(post, "postTitle", "post-title")
    author = _read_field(post, "author", "author")
    subreddit = _read_field(post, "subredditName", "subreddit-name")
    score = _read_field(post, "score", "score")

    logger.debug(f"Post fields: title={title!r}, author={author!r}, "
                 f"subreddit={subreddit!r}, score={score!r}")

    body_node = post.query(selectors.post_body)
    if body_node is not None:
        body = body_node.text()
        logger.info(f"Post body found with length: {len(body)}")
    else:
        body = ""
        logger.warning("Post body content element not found; continuing without body")

    return PostRecord(
        title="" if title is None else str(title),
        author="" if author is None else str(author),
        subreddit="" if subreddit is None else str(subreddit),
        score="" if score is None else score,
        body=body,
    )


def extract_comments(root: NodeReader,
                     selectors: ThreadSelectors = DEFAULT_SELECTORS) -> list[CommentRecord]:
    """Read every comment under the comment tree, in document order.

    Items lacking an author or a body node are skipped; the rest are kept
    in the order the host lays them out.

    Raises:
        MissingCommentContainerError: The comment tree is absent
    """
    container = root.query(selectors.comment_tree)
    if container is None:
        logger.error(f"Execution stopped: no comment tree matches '{selectors.comment_tree}'")
        raise MissingCommentContainerError()

    items = container.query_all(selectors.comment)
    logger.info(f"Found {len(items)} comment elements to process")

    comments: list[CommentRecord] = []
    for index, item in enumerate(items, start=1):
        logger.debug(f"Processing comment {index} of {len(items)}")
        record = _extract_comment(item, index, selectors)
        if record is not None:
            comments.append(record)

    skipped = len(items) - len(comments)
    if skipped:
        logger.warning(f"Skipped {skipped} of {len(items)} comments with missing details")
    return comments


def _extract_comment(item: NodeReader, index: int,
                     selectors: ThreadSelectors) -> Optional[CommentRecord]:
    author = item.attribute("author")
    body_node = item.query(selectors.comment_body)

    if not author or body_node is None:
        logger.warning(f"Skipped comment {index}: author={author!r}, "
                       f"has_body={body_node is not None}")
        return None

    return CommentRecord(
        author=author,
        body=body_node.text(),
        score=_parse_int(item.attribute("score")),
        depth=max(_parse_int(item.attribute("depth")), 0),
    )
