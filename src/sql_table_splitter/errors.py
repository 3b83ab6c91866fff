"""Exceptions raised when a split run cannot continue."""


class SplitError(Exception):
    """Base class for fatal split failures."""


class SetupError(SplitError):
    """The input could not be opened or the output directory could not be created."""


class ReadError(SplitError):
    """Reading the input failed before end of stream."""


class WriteError(SplitError):
    """A table file could not be created, written or closed."""
