"""Exception hierarchy for Mockup Studio.

Every error carries a plain-language message that is safe to show to the
user directly.  No error codes are exposed; callers distinguish error kinds
by exception class.

Hierarchy
---------
::

    MockupError
    ├── MissingInputError
    ├── OutOfCreditsError
    ├── ImageDataError (also a ValueError)
    ├── GenerationError
    │   ├── NoImageReturnedError
    │   └── TransportError
    └── UnlockKeyError
        ├── AlreadyUsedError
        ├── MalformedKeyError
        ├── InvalidAmountError
        ├── HashMismatchError
        └── DeviceIdMissingError
"""

from __future__ import annotations


class MockupError(Exception):
    """Base class for all Mockup Studio errors."""


class MissingInputError(MockupError):
    """The user has not supplied a required selection or image."""

    def __init__(self, message: str = "Could not generate a prompt for the selected options."):
        super().__init__(message)


class OutOfCreditsError(MockupError):
    """No generation credits are left on this device."""

    def __init__(self, message: str = "You're out of credits!"):
        super().__init__(message)


class ImageDataError(MockupError, ValueError):
    """An uploaded image or data URL could not be decoded."""


# ---------------------------------------------------------------------------
# Generation errors.
# ---------------------------------------------------------------------------


class GenerationError(MockupError):
    """The remote image generation call did not produce an image."""


class NoImageReturnedError(GenerationError):
    """The response contained no part with inline image bytes."""

    def __init__(
        self,
        message: str = "The AI did not return an image. Please try a different prompt or design.",
    ):
        super().__init__(message)


class TransportError(GenerationError):
    """A lower-level failure (network, auth, quota) while calling the API.

    The underlying exception is always chained as ``__cause__``.
    """


# ---------------------------------------------------------------------------
# Unlock key errors.
# ---------------------------------------------------------------------------


class UnlockKeyError(MockupError):
    """Base class for unlock key rejections."""


class AlreadyUsedError(UnlockKeyError):
    def __init__(self, message: str = "This key has already been used."):
        super().__init__(message)


class MalformedKeyError(UnlockKeyError):
    def __init__(self, message: str = "Invalid key format. Expected: UNLOCK-AMOUNT-HASH"):
        super().__init__(message)


class InvalidAmountError(UnlockKeyError):
    def __init__(self, message: str = "Invalid credit amount in key."):
        super().__init__(message)


class HashMismatchError(UnlockKeyError):
    def __init__(self, message: str = "Invalid key for this device."):
        super().__init__(message)


class DeviceIdMissingError(UnlockKeyError):
    def __init__(self, message: str = "Device ID not found. Please refresh."):
        super().__init__(message)
