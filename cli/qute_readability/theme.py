"""Reader-view colors scraped from the qutebrowser config file."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.py"

# c.colors.webpage.bg = '#1d2021'
_ASSIGN_RE = re.compile(r"""^\s*c\.(?P<option>[\w.]+)\s*=\s*(?P<value>['"][^'"\n]*['"]|\w+)""", re.MULTILINE)
# config.set('colors.webpage.bg', '#1d2021')
_SET_RE = re.compile(
    r"""^\s*config\.set\(\s*['"](?P<option>[\w.]+)['"]\s*,\s*(?P<value>['"][^'"\n]*['"]|\w+)""",
    re.MULTILINE,
)
_COLOR_RE = re.compile(
    r"^(#[0-9a-fA-F]{3,4}|#[0-9a-fA-F]{6}|#[0-9a-fA-F]{8}"
    r"|(?:rgb|rgba|hsl|hsla)\(\s*[\d.%\s,/]+\)"
    r"|[a-zA-Z]+)$"
)

_COLOR_OPTIONS = {
    "colors.webpage.bg": "background",
    "colors.webpage.fg": "foreground",
    "colors.webpage.link": "link",
}


@dataclass(frozen=True)
class Theme:
    background: str = "#fefefe"
    foreground: str = "#333333"
    link: str = "#1a55a3"
    font_family: str = "Georgia, 'Times New Roman', serif"


LIGHT_THEME = Theme()
DARK_THEME = Theme(background="#1d2021", foreground="#d5c4a1", link="#83a598")


def is_css_color(value: str) -> bool:
    return bool(_COLOR_RE.match(value.strip()))


def scrape_options(text: str) -> Dict[str, str]:
    """Collect ``option -> value`` pairs from a config.py source.

    Later assignments win, like they do when qutebrowser executes the file.
    """
    found = []
    for pattern in (_ASSIGN_RE, _SET_RE):
        for match in pattern.finditer(text):
            value = match.group("value").strip("'\"")
            found.append((match.start(), match.group("option"), value))
    found.sort()
    return {option: value for _, option, value in found}


def _prefers_dark(options: Dict[str, str]) -> bool:
    if options.get("colors.webpage.preferred_color_scheme", "").lower() == "dark":
        return True
    return options.get("colors.webpage.darkmode.enabled", "").lower() == "true"


def theme_from_options(options: Dict[str, str]) -> Theme:
    theme = DARK_THEME if _prefers_dark(options) else LIGHT_THEME
    overrides = {}
    for option, field_name in _COLOR_OPTIONS.items():
        value = options.get(option)
        if value is None:
            continue
        if not is_css_color(value):
            logger.debug("Ignoring %s = %r: not a CSS color", option, value)
            continue
        overrides[field_name] = value
    return replace(theme, **overrides)


def load_theme(config_dir: Optional[Union[str, Path]]) -> Theme:
    """Build the reader theme from ``<config_dir>/config.py``.

    Any problem reading the file falls back to the light theme.
    """
    if config_dir is None:
        logger.debug("No config directory given, using default theme")
        return LIGHT_THEME

    config_file = Path(config_dir) / CONFIG_FILENAME
    if not config_file.is_file():
        logger.debug("No %s found, using default theme", config_file)
        return LIGHT_THEME

    try:
        text = config_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", config_file, e)
        return LIGHT_THEME

    theme = theme_from_options(scrape_options(text))
    logger.debug("Theme from %s: %s", config_file, theme)
    return theme
