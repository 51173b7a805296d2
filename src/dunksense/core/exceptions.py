"""Custom exceptions for DunkSense."""


class DunkSenseError(Exception):
    """Base exception for all DunkSense errors."""

    pass


class FrameValidationError(DunkSenseError):
    """A pose frame was malformed or out of timestamp order.

    Raised by the frame validator and always handled inside the session,
    which drops the frame and keeps going.
    """

    def __init__(self, message: str = "Invalid pose frame") -> None:
        self.message = message
        super().__init__(self.message)


class AnalysisError(DunkSenseError):
    """Analysis of a finished session could not produce a result."""

    def __init__(self, message: str = "Jump analysis failed") -> None:
        self.message = message
        super().__init__(self.message)


class InsufficientFramesError(AnalysisError):
    """Too few frames with a usable hip position were retained."""

    def __init__(self, valid_frames: int = 0, required: int = 10) -> None:
        self.valid_frames = valid_frames
        self.required = required
        super().__init__(
            f"Insufficient frames: {valid_frames} usable, at least {required} required"
        )


class NoJumpDetectedError(AnalysisError):
    """The phase state machine never left preparation."""

    def __init__(self, message: str = "No jump detected") -> None:
        super().__init__(message)


class SessionNotActiveError(AnalysisError):
    """stop() was called without a running session."""

    def __init__(self, message: str = "No active analysis session") -> None:
        super().__init__(message)
