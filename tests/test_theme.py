"""Tests for scraping reader colors from config.py."""

import logging

from qute_readability.theme import (
    DARK_THEME,
    LIGHT_THEME,
    is_css_color,
    load_theme,
    scrape_options,
    theme_from_options,
)

CONFIG = """
config.load_autoconfig(False)
c.colors.webpage.bg = '#282828'
config.set("colors.webpage.link", "rgb(131, 165, 152)")
c.colors.webpage.darkmode.enabled = True
c.fonts.default_size = '11pt'
"""


class TestScrapeOptions:
    def test_both_assignment_forms(self):
        options = scrape_options(CONFIG)
        assert options["colors.webpage.bg"] == "#282828"
        assert options["colors.webpage.link"] == "rgb(131, 165, 152)"
        assert options["colors.webpage.darkmode.enabled"] == "True"
        assert options["fonts.default_size"] == "11pt"

    def test_later_assignment_wins(self):
        text = "c.colors.webpage.bg = '#000000'\nconfig.set('colors.webpage.bg', '#111111')\n"
        assert scrape_options(text)["colors.webpage.bg"] == "#111111"

    def test_commented_lines_are_skipped(self):
        assert scrape_options("# c.colors.webpage.bg = '#000000'\n") == {}


class TestThemeFromOptions:
    def test_defaults_to_light(self):
        assert theme_from_options({}) == LIGHT_THEME

    def test_preferred_dark_scheme(self):
        theme = theme_from_options({"colors.webpage.preferred_color_scheme": "dark"})
        assert theme == DARK_THEME

    def test_colors_override_palette(self):
        theme = theme_from_options(scrape_options(CONFIG))
        assert theme.background == "#282828"
        assert theme.link == "rgb(131, 165, 152)"
        assert theme.foreground == DARK_THEME.foreground

    def test_foreground_override(self):
        options = scrape_options("c.colors.webpage.fg = '#eeeeee'\n")
        theme = theme_from_options(options)
        assert theme.foreground == "#eeeeee"
        assert theme.background == LIGHT_THEME.background

    def test_rejects_values_that_are_not_colors(self):
        theme = theme_from_options({"colors.webpage.bg": "red; } body { display: none"})
        assert theme.background == LIGHT_THEME.background


class TestIsCssColor:
    def test_accepts(self):
        for value in ("#fff", "#ffffff", "#ffffff80", "rgba(0, 0, 0, 0.5)", "hsl(120, 50%, 50%)", "black"):
            assert is_css_color(value), value

    def test_rejects(self):
        for value in ("#ggg", "url(x)", "red;", "", "#12345"):
            assert not is_css_color(value), value


class TestLoadTheme:
    def test_no_config_dir(self, caplog):
        caplog.set_level(logging.DEBUG, logger="qute_readability.theme")
        assert load_theme(None) == LIGHT_THEME
        assert "No config directory" in caplog.text

    def test_missing_config_file(self, tmp_path):
        assert load_theme(tmp_path) == LIGHT_THEME

    def test_reads_config_py(self, tmp_path):
        (tmp_path / "config.py").write_text(CONFIG, encoding="utf-8")
        theme = load_theme(str(tmp_path))
        assert theme.background == "#282828"
