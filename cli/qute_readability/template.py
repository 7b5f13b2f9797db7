"""Rendering of the extracted article."""

from __future__ import annotations

from html import escape

from markdownify import markdownify as md

from .models import Article
from .theme import LIGHT_THEME, Theme

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style type="text/css">
        body {{
            margin: 40px auto;
            max-width: 650px;
            line-height: 1.4;
            padding: 0 10px;
            font-family: {font_family};
            background-color: {background};
            color: {foreground};
        }}
        h1, h2, h3 {{
            line-height: 1.2;
        }}
        a, a:visited {{
            color: {link};
        }}
        img, video, figure {{
            max-width: 100%;
            height: auto;
        }}
        pre {{
            overflow-x: auto;
        }}
        .qute-readability-source {{
            font-style: italic;
        }}
    </style>
</head>
<body class="qute-readability">
    <h1>{title}</h1>
    <p class="qute-readability-source">From <a href="{url}">{subtitle}</a></p>
    <hr>
    {content}
</body>
</html>
"""


def render_page(article: Article, theme: Theme = LIGHT_THEME) -> str:
    """Substitute the article into the reader page template."""
    return PAGE_TEMPLATE.format(
        title=escape(article.title),
        url=escape(article.url, quote=True),
        subtitle=escape(article.subtitle),
        content=article.content,
        font_family=theme.font_family,
        background=theme.background,
        foreground=theme.foreground,
        link=theme.link,
    )


def render_markdown(article: Article) -> str:
    body = md(article.content, heading_style="ATX", bullets="-")
    return f"# {article.title}\n\n**Source**: [{article.subtitle}]({article.url})\n\n---\n\n{body.strip()}\n"


def render_text(article: Article) -> str:
    from html2text import HTML2Text

    h = HTML2Text()
    h.ignore_links = True
    h.ignore_images = True
    h.body_width = 0
    body = h.handle(article.content)
    return f"{article.title}\n{article.subtitle} <{article.url}>\n\n{body.strip()}\n"
