"""Tests for FileSink and LocalFilePageSource."""

import pytest
from unittest.mock import patch

from src.adapters.markdown_sink import FileSink, write_document
from src.adapters.page_source import LocalFilePageSource
from src.core.exceptions import PageFetchError, SinkError
from src.core.types import MarkdownDocument


def make_document(content="# Título\n"):
    return MarkdownDocument(filename="thread.md", content=content)


class TestFileSink:
    def test_writes_utf8(self, tmp_dir):
        path = FileSink(tmp_dir).save(make_document())
        assert path == tmp_dir / "thread.md"
        assert path.read_bytes() == "# Título\n".encode("utf-8")

    def test_creates_output_dir(self, tmp_dir):
        out = tmp_dir / "nested" / "exports"
        path = FileSink(out).save(make_document())
        assert path.exists()

    def test_overwrites_by_default(self, tmp_dir):
        sink = FileSink(tmp_dir)
        sink.save(make_document("old"))
        sink.save(make_document("new"))
        assert (tmp_dir / "thread.md").read_text(encoding="utf-8") == "new"

    def test_refuses_overwrite_when_disabled(self, tmp_dir):
        (tmp_dir / "thread.md").write_text("keep", encoding="utf-8")
        with pytest.raises(SinkError):
            FileSink(tmp_dir, overwrite=False).save(make_document())
        assert (tmp_dir / "thread.md").read_text(encoding="utf-8") == "keep"

    def test_write_failure_raises_sink_error(self, tmp_dir):
        with patch("pathlib.Path.write_bytes", side_effect=OSError("disk full")):
            with pytest.raises(SinkError):
                write_document(make_document(), tmp_dir / "thread.md")


class TestLocalFilePageSource:
    def test_loads_saved_page(self, thread_file):
        page = LocalFilePageSource(thread_file).load()
        assert page.title == "My Thread : r/test"
        assert page.root.query("shreddit-comment-tree") is not None

    def test_missing_file_raises(self, tmp_dir):
        with pytest.raises(PageFetchError):
            LocalFilePageSource(tmp_dir / "missing.html").load()

    def test_describe_is_path(self, thread_file):
        assert LocalFilePageSource(thread_file).describe() == str(thread_file)
