"""The reader-view pipeline: acquire, extract, render, write, open."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .environment import UserscriptEnvironment
from .exceptions import ReadabilityError
from .extractor import ReadabilityExtractor
from .host import HostCommands
from .models import Article
from .template import render_page
from .theme import Theme, load_theme

logger = logging.getLogger(__name__)


def write_page(page: str, path: Union[str, Path]) -> Path:
    """Write ``page`` as UTF-8, creating parent directories as needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(page, encoding="utf-8")
    except OSError as e:
        raise ReadabilityError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote %s", path)
    return path


class ReaderView:
    """Runs the userscript once for a resolved environment."""

    def __init__(
        self,
        environment: UserscriptEnvironment,
        extractor: Optional[ReadabilityExtractor] = None,
        host: Optional[HostCommands] = None,
        theme: Optional[Theme] = None,
    ):
        self.environment = environment
        self.extractor = extractor or ReadabilityExtractor()
        self.host = host or HostCommands(environment.fifo)
        self.theme = theme or load_theme(environment.config_dir)

    def load_article(self) -> Article:
        env = self.environment
        if env.fetches_url:
            self.host.message_info(f"readability: fetching {env.url}")
            return self.extractor.extract_from_url(env.url)
        return self.extractor.extract_from_file(env.html_path, env.url)

    def run(self) -> Path:
        article = self.load_article()
        page = render_page(article, self.theme)
        path = write_page(page, self.environment.output_path)
        self.host.open_tab(path)
        return path
