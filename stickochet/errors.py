"""Exceptions raised by the stickochet core."""


class StickochetError(Exception):
    """Base class for every error raised by this package."""


class AssetError(StickochetError):
    """A required asset is missing or the asset index is malformed."""


class GenerationError(StickochetError):
    """The board generator gave up after its maximum number of attempts."""
