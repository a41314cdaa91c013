"""
Error taxonomy for the mood loop.

Startup errors carry their user-facing message as ``str(err)``.
"""


class MoodCamError(RuntimeError):
    """Base class for mood loop failures."""


class PlatformUnsupported(MoodCamError):
    """The camera capture API is not available on this host."""


class AcquisitionError(MoodCamError):
    """Neither the default nor the fallback camera request produced a frame."""


class ModelLoadError(MoodCamError):
    """At least one inference model could not be fetched or built."""


class InferenceError(MoodCamError):
    """A single inference pass failed; recovered by the polling loop."""
