"""Exception types raised by VoiceAction collaborators."""


class VoiceActionError(Exception):
    """Base class for VoiceAction errors."""


class CaptureUnavailableError(VoiceActionError):
    """Raised when speech capture is unsupported or microphone access is denied."""


class AgentInvocationError(VoiceActionError):
    """Raised when the agent transport fails before a response payload is available."""
