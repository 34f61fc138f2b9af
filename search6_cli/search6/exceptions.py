"""Errors raised by the search6 lookup pipeline."""


class Search6Error(Exception):
    """Base error, ``exit_code`` is the process status for the failing step."""

    exit_code = 1


class ArgumentError(Search6Error):
    """The identifier argument is missing or is not a base-10 integer."""

    exit_code = 1


class TransportError(Search6Error):
    """The request could not be sent or no response was received."""

    exit_code = 2


class BodyReadError(Search6Error):
    """The response body could not be read to the end."""

    exit_code = 3


class DecodeError(Search6Error):
    """The response body is not a JSON object of the expected shape."""

    exit_code = 4
