"""Shared test fixtures for ThreadScribe tests."""

import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from src.core.config_manager import ConfigManager, DEFAULT_CONFIG


THREAD_HTML = """<!DOCTYPE html>
<html>
<head><title>My Thread : r/test</title></head>
<body>
<shreddit-post post-title="My Thread" author="alice" subreddit-name="test" score="42">
  <div id="t3_abc-post-rtjson-content"><p>First paragraph.</p><p>Second   paragraph.</p></div>
</shreddit-post>
<shreddit-comment-tree>
  <shreddit-comment author="bob" score="5" depth="0">
    <div id="t1_a-comment-rtjson-content"><div><p>Hi</p></div></div>
    <shreddit-comment author="carol" score="2" depth="1">
      <div id="t1_b-comment-rtjson-content"><div><p>Re: hi</p><p>Line two</p></div></div>
    </shreddit-comment>
  </shreddit-comment>
  <shreddit-comment author="dave" score="abc" depth="0">
  </shreddit-comment>
  <shreddit-comment score="1" depth="0">
    <div id="t1_d-comment-rtjson-content"><div><p>orphan</p></div></div>
  </shreddit-comment>
  <shreddit-comment author="erin" depth="x">
    <div id="t1_e-comment-rtjson-content"><div>Plain</div></div>
  </shreddit-comment>
</shreddit-comment-tree>
</body>
</html>
"""

THREAD_MARKDOWN = (
    "# My Thread\n\n"
    "**Subreddit:** r/test\n"
    "**Author:** u/alice\n"
    "**Score:** 42\n\n"
    "First paragraph.\n\nSecond paragraph.\n\n"
    "---\n\n## Comments\n\n"
    "- **u/bob** (*5 points*):\n"
    "  > Hi\n\n"
    "    - **u/carol** (*2 points*):\n"
    "      > Re: hi\n"
    "      > \n"
    "      > Line two\n\n"
    "- **u/erin** (*0 points*):\n"
    "  > Plain\n\n"
)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset all singletons after each test."""
    yield
    ConfigManager.reset()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def config_file(tmp_dir):
    """Create a temporary settings.yaml and return its path."""
    config_dir = tmp_dir / "config"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "settings.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(dict(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)

    return config_path


@pytest.fixture
def thread_html():
    """A saved thread page with a post, nested replies and malformed comments."""
    return THREAD_HTML


@pytest.fixture
def thread_markdown():
    """The document expected from thread_html."""
    return THREAD_MARKDOWN


@pytest.fixture
def thread_file(tmp_dir, thread_html):
    """thread_html written to disk."""
    path = tmp_dir / "thread.html"
    path.write_text(thread_html, encoding="utf-8")
    return path
