# exceptions raised at the session boundary
# NOTE: rejections never add messages to the session; model and media failures are reported as System messages instead.

class DiscussionError(Exception):
    """Base class for discussion/session errors."""

class SessionBusyError(DiscussionError):
    """A discussion is already in flight for this session."""

class CredentialsUnavailableError(DiscussionError):
    """The API key is missing or was rejected; submissions are blocked."""

class EmptySubmissionError(DiscussionError):
    """Neither text nor an image was submitted."""

class UnknownModelError(DiscussionError):
    """The requested model is not in the registry."""

class ThinkingBudgetUnsupportedError(DiscussionError):
    """The selected model has no extended reasoning toggle."""

class ImageConversionError(DiscussionError):
    """An uploaded image could not be turned into a model input."""

class ModelInvocationError(DiscussionError):
    """
    A model call reported an error; aborts the rest of the discussion.
    Carries the InvocationResult so the orchestrator can report it.
    """

    def __init__(self, result) -> None:
        super().__init__(result.error)
        self.result = result
