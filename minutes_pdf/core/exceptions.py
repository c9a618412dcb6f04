"""
Application-specific exceptions to keep error handling consistent.
"""

class AppError(Exception):
    """Base app error."""
    pass

class InvalidRecord(AppError):
    """Raised when a meeting/minutes payload does not match the input contract."""
    pass

class NotGenerated(AppError):
    """Raised when a report is requested for a meeting without minutes."""
    pass

class Forbidden(AppError):
    """Raised when the requester may not view a private meeting."""
    pass

class RenderFailed(AppError):
    """Raised for drawing-surface or layout failures during a build."""
    pass

class RenderCancelled(RenderFailed):
    """Raised when the caller cancels a build that is in progress."""
    pass
