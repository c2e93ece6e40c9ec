"""VoiceAction: voice and text commands fulfilled by a remote agent."""

__version__ = "0.1.0"
