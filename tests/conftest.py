"""Shared fixtures for the reader-view tests."""

from __future__ import annotations

import pytest

ARTICLE_URL = "https://news.example.com/science/rivers"

PARAGRAPH = (
    "Rivers carve valleys over thousands of years, carrying sediment downstream, "
    "depositing it in deltas, and reshaping the coastline as they go. "
)

ARTICLE_HTML = f"""<!DOCTYPE html>
<html>
<head>
  <title>How Rivers Shape the Land | Example News</title>
  <meta property="og:site_name" content="Example News">
  <script>var tracking = true;</script>
</head>
<body>
  <nav class="menu"><a href="/">Home</a> <a href="/science">Science</a></nav>
  <article>
    <h1>How Rivers Shape the Land</h1>
    <div class="article-body">
      <p>{PARAGRAPH * 3}</p>
      <p>{PARAGRAPH * 3} Read the <a href="/science/erosion">erosion primer</a>, too.</p>
      <p>{PARAGRAPH * 3}</p>
    </div>
  </article>
  <footer>Copyright Example News</footer>
</body>
</html>
"""


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(ARTICLE_HTML, encoding="utf-8")
    return path


@pytest.fixture
def fifo(tmp_path):
    """A regular file standing in for qutebrowser's command FIFO."""
    path = tmp_path / "fifo"
    path.touch()
    return path


@pytest.fixture
def qute_env(monkeypatch, tmp_path, page_file, fifo):
    """Environment of a userscript spawned in command mode."""
    for name in ("QUTE_MODE", "QUTE_CONFIG_DIR", "QUTE_READABILITY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    data_dir = tmp_path / "data"
    monkeypatch.setenv("QUTE_URL", ARTICLE_URL)
    monkeypatch.setenv("QUTE_HTML", str(page_file))
    monkeypatch.setenv("QUTE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("QUTE_FIFO", str(fifo))
    return {"data_dir": data_dir, "fifo": fifo, "page_file": page_file}
