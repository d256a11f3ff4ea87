"""Export service: load page -> extract -> render -> name -> sink."""

import logging
import threading
from pathlib import Path
from typing import Optional

from src.adapters.http_page_source import HttpPageSource
from src.adapters.markdown_sink import MarkdownSink
from src.adapters.page_source import LocalFilePageSource, PageSource
from src.core.exceptions import RunInProgressError
from src.core.types import DEFAULT_SELECTORS, HostPage, MarkdownDocument, ThreadSelectors
from src.services.extractor import extract_comments, extract_post
from src.services.namer import derive_filename
from src.services.renderer import render_thread

logger = logging.getLogger("threadscribe")


def page_source_for(location: str, timeout: float = 30, max_retries: int = 3,
                    user_agent: Optional[str] = None) -> PageSource:
    """Pick a page source: http(s) URLs are fetched, anything else is a file path."""
    location = location.strip()
    if location.lower().startswith(("http://", "https://")):
        kwargs = {"timeout": timeout, "max_retries": max_retries}
        if user_agent:
            kwargs["user_agent"] = user_agent
        return HttpPageSource(location, **kwargs)
    return LocalFilePageSource(Path(location).expanduser())


def build_document(page: HostPage,
                   selectors: ThreadSelectors = DEFAULT_SELECTORS) -> MarkdownDocument:
    """Run the extraction-and-render pipeline over a loaded page.

    Both the post and the comment tree are read before anything is
    rendered, so a fatal extraction error produces no document.

    Raises:
        MissingPostError: The post container is absent
        MissingCommentContainerError: The comment tree is absent
    """
    logger.info("Step 1: Scraping main post...")
    post = extract_post(page.root, selectors)

    logger.info("Step 2: Scraping comments...")
    comments = extract_comments(page.root, selectors)

    content = render_thread(post, comments)
    filename = derive_filename(page.title)
    logger.info(f"Step 3: Rendered {len(comments)} comments into {filename} "
                f"({len(content)} chars)")
    return MarkdownDocument(filename=filename, content=content)


class ExportService:
    """Runs one export per trigger and refuses re-entrant triggers.

    Responsibilities:
    - Load the page from a PageSource
    - Build the Markdown document
    - Hand it to a MarkdownSink exactly once per successful run
    """

    def __init__(self, selectors: ThreadSelectors = DEFAULT_SELECTORS):
        self._selectors = selectors
        self._run_lock = threading.Lock()

    def is_running(self) -> bool:
        """Check if an export is currently in progress."""
        return self._run_lock.locked()

    def build(self, source: PageSource) -> MarkdownDocument:
        """Load the page and build its document without persisting it.

        Raises:
            RunInProgressError: Another run is still executing
            ExtractionError: Post or comment tree missing
            NetworkError: The page could not be loaded
        """
        self._acquire()
        try:
            return self._build(source)
        finally:
            self._run_lock.release()

    def export(self, source: PageSource, sink: MarkdownSink) -> Path:
        """Build the document and hand it to the sink.

        Returns:
            Path the sink wrote to

        Raises:
            RunInProgressError: Another run is still executing
            ExtractionError: Post or comment tree missing
            NetworkError: The page could not be loaded
            SinkError: The sink failed to persist the document
        """
        self._acquire()
        try:
            document = self._build(source)
            path = sink.save(document)
            logger.info(f"--- EXPORT COMPLETE: {path} ---")
            return path
        finally:
            self._run_lock.release()

    def _acquire(self) -> None:
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Export triggered while a run is active; ignoring")
            raise RunInProgressError()

    def _build(self, source: PageSource) -> MarkdownDocument:
        logger.info(f"--- EXPORT INITIATED: {source.describe()} ---")
        page = source.load()
        return build_document(page, self._selectors)
