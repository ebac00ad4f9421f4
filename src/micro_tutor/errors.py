"""Exceptions raised while resolving content."""


class ContentError(Exception):
    """Base exception for content resolution errors."""
    pass


class RemoteUnavailable(ContentError):
    """Remote generation is unconfigured, unreachable, timed out or returned an error status."""
    pass


class MalformedResponse(ContentError):
    """Remote generation returned an empty, non-text or unparseable payload."""
    pass


class UnknownTopic(ContentError):
    """No canned entry exists for the requested topic."""

    def __init__(self, topic: str):
        super().__init__(f"No canned content for topic: {topic}")
        self.topic = topic
