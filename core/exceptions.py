"""Custom exceptions for the application."""


class CommandError(Exception):
    """Base exception for command-related errors."""
    pass


class RepositoryError(CommandError):
    """Exception raised for repository operation errors."""
    pass


class DuplicateClientError(RepositoryError):
    """Exception raised when adding a client whose id is already stored."""
    pass


class NothingToUndoError(CommandError):
    """Exception raised when undo is requested with an empty history."""
    pass


class NothingToRedoError(CommandError):
    """Exception raised when redo is requested with nothing undone."""
    pass
