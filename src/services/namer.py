"""Namer: derives a filesystem-safe export filename from a page title."""

import re

_SUBREDDIT_SUFFIX = re.compile(r" : r/.*")
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def derive_filename(page_title: str) -> str:
    """Slug a page title into "<slug>.md".

    Reddit titles pages "<thread title> : r/<subreddit>"; the suffix is
    dropped before slugging. Never fails: "" becomes ".md".
    """
    slug = _SUBREDDIT_SUFFIX.sub("", page_title or "", count=1)
    slug = _UNSAFE_CHARS.sub("_", slug).lower()
    return f"{slug}.md"
