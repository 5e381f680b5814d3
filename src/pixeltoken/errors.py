"""
Errors raised by the token image pipeline.

Every failure is reported to the caller; nothing falls back to placeholder output.
"""


class PixelTokenError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationLocked(PixelTokenError):
    """Asset population attempted after the store was locked."""


class EmptyAssetCollection(PixelTokenError):
    """Seed requested while a trait collection has no parts."""


class MalformedRecord(PixelTokenError):
    """A part record does not describe exactly width x height pixels."""


class LayerBoundsMismatch(PixelTokenError):
    """Layers composed together declare different grid bounds."""


class UnknownToken(PixelTokenError, KeyError):
    """No seed has been persisted for the requested token id."""

    def __init__(self, token_id):
        super().__init__(token_id)
        self.token_id = token_id

    def __str__(self):
        return f"unknown token id: {self.token_id}"
