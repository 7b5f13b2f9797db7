"""Exceptions raised by the reader-view pipeline."""


class ReadabilityError(Exception):
    """Base class for every error the userscript reports to the browser."""


class EnvironmentConfigError(ReadabilityError):
    """The userscript environment is missing a variable or holds a bad value."""


class FetchError(ReadabilityError):
    """The page could not be downloaded or read from disk."""


class ExtractionError(ReadabilityError):
    """Readability produced no usable article."""


class HostCommandError(ReadabilityError):
    """A command could not be delivered to the browser."""
