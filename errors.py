class RadarError(Exception):
    """Base exception for a failed radar command."""


class FetchError(RadarError):
    """Raised when a radar frame could not be downloaded."""

    def __init__(self, url, reason):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class DecodeError(RadarError):
    """Raised when fetched bytes are not a readable image."""

    def __init__(self, index, reason):
        super().__init__(f"Failed to decode frame {index}: {reason}")
        self.index = index
        self.reason = reason


class ChatApiError(RadarError):
    """Raised when a Discord call we depend on fails."""

    def __init__(self, operation, reason):
        super().__init__(f"Discord {operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class EncoderStateError(RuntimeError):
    """Raised when a GIF encoder is used after it was finished."""
