"""Failure signals raised by the external provider clients."""


class LyricsProviderError(Exception):
    """The lyrics provider could not be queried or answered unexpectedly."""


class LyricsNotFoundError(LyricsProviderError):
    """The lyrics provider has no lyrics for the requested track."""


class TranslatorError(Exception):
    """The translation provider could not be reached or failed internally."""


class TranslationFailedError(TranslatorError):
    """The translation provider refused or was unable to translate the text."""
