"""Error taxonomy shared by the engines, the record store and the API."""

from __future__ import annotations


class FastTrackError(Exception):
    """Base class; nothing raised from here is fatal to the process."""


class ValidationFailed(FastTrackError, ValueError):
    """Input rejected before any remote call."""


class StoreWriteError(FastTrackError):
    """The record store rejected an insert / update / delete."""


class ActiveFastExistsError(FastTrackError):
    def __init__(self, fast_id: str) -> None:
        super().__init__("A fast is already in progress")
        self.fast_id = fast_id


class NoActiveFastError(FastTrackError):
    def __init__(self) -> None:
        super().__init__("No fast is in progress")


class NotFound(FastTrackError):
    pass
