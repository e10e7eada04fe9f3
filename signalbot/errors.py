"""Exceptions raised by the I/O adapters.

None of these is fatal: the orchestrator turns each one into a log record
and the scheduler keeps running.
"""


class SignalBotError(Exception):
    """Base class for bot errors."""


class DataUnavailableError(SignalBotError):
    """Market data could not be fetched or decoded."""


class DispatchError(SignalBotError):
    """An alert could not be delivered."""
