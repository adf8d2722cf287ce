"""Exceptions raised by the pager."""


class PagerError(Exception):
    """Base class for fatal pager errors."""


class NoInputError(PagerError):
    """No file was given and standard input is a terminal."""


class InputStreamError(PagerError):
    """Reading or decoding the input stream failed."""


class UnsupportedEventError(PagerError):
    """The terminal backend delivered an event the pager never enables.

    Mouse reporting is never turned on, so a mouse event reaching the
    dispatcher means the backend broke its contract.
    """
