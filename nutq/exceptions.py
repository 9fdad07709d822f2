"""
Exception hierarchy for Nutq library.
"""


class NutqError(Exception):
    """Base class for all Nutq errors."""


class ContentError(NutqError):
    """The bundled sound content is malformed."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class UnknownSoundError(NutqError, KeyError):
    """A sound id or letter is not present in the sound table."""

    def __init__(self, sound: str):
        self.sound = sound
        super().__init__(f"Unknown sound: {sound!r}")

    def __str__(self) -> str:
        return self.args[0]


class StorageError(NutqError):
    """A storage backend could not read or write a value."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Storage failure for {key!r}: {reason}")
