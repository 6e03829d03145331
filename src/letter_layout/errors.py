"""Exception types raised by the letter layout engine."""


class LetterLayoutError(Exception):
    """Base class for all layout engine errors."""


class LayoutConfigError(LetterLayoutError, ValueError):
    """Page geometry or typography settings that cannot produce a layout."""


class MissingAnnexError(LetterLayoutError, ValueError):
    """An annex was requested but its content was not supplied."""


class FontsNotInitializedError(LetterLayoutError, RuntimeError):
    """Text was measured or drawn before the fonts were loaded."""


class ContentError(LetterLayoutError, ValueError):
    """Letter content could not be built from the supplied data."""


class LayoutOverflowError(LetterLayoutError, RuntimeError):
    """A primitive was placed below the bottom margin without a page break."""


class NoCurrentPageError(LetterLayoutError, RuntimeError):
    """The page manager was asked for its page before any page was started."""
