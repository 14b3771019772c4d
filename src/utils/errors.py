"""Exception types raised around the grouping core.

The similarity metric and grouping engine never raise for valid input;
these errors come from the file, settings and session layers.
"""


class GrouperError(Exception):
    """Base class for fuzzy row grouper errors."""


class TableReadError(GrouperError):
    """A delimited input file could not be opened or parsed."""


class TableWriteError(GrouperError):
    """A grouped export could not be written."""


class SettingsError(GrouperError):
    """A settings file exists but could not be parsed."""


class SessionError(GrouperError):
    """A session operation was requested in an invalid state."""
