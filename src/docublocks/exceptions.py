#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the docublocks library.

Parsing and serialization never raise: malformed Markdown degrades to plain
text and every tree renders. The exceptions below cover misuse of the
editing API, invalid configuration and failures of the file collaborator.

Exception Hierarchy
-------------------
- DocublocksError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser/renderer)

  - EditError (editor session failures)
    - InvalidEditError (command cannot be applied to the current tree)
    - SessionClosedError (session already disposed)

  - FileError (file access and I/O)
    - DocumentNotFoundError (file doesn't exist)
    - FileAccessError (permissions, locked files)
    - MalformedFileError (unreadable JSON / encoding problems)

"""

from __future__ import annotations

from typing import Any


class DocublocksError(Exception):
    """Base exception class for all docublocks-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocublocksError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is handed to a converter.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the error with converter and options type details."""
        if message is None:
            message = (
                f"'{converter_name}' expects options of type '{expected_type.__name__}', "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message,
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class EditError(DocublocksError):
    """Base class for errors raised by the interactive editor session."""

    pass


class InvalidEditError(EditError):
    """Exception raised when an edit command cannot be applied.

    The tree is left untouched when this is raised.

    Parameters
    ----------
    message : str
        Description of why the command was rejected
    command : Any, optional
        The rejected command value
    path : tuple of int, optional
        Path of the node the command addressed

    """

    def __init__(
        self,
        message: str,
        command: Any = None,
        path: tuple[int, ...] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the error with the rejected command and path."""
        super().__init__(message, original_error=original_error)
        self.command = command
        self.path = path


class SessionClosedError(EditError):
    """Exception raised when a closed editor session is used."""

    def __init__(self, message: str = "Editor session has been closed"):
        """Initialize with a default message."""
        super().__init__(message)


class FileError(DocublocksError):
    """Base exception for file access problems in the file collaborator.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with an optional path."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class DocumentNotFoundError(FileError):
    """Exception raised when a requested document does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize with the missing path."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file exists but cannot be read or written."""

    pass


class MalformedFileError(FileError):
    """Exception raised when a file's contents cannot be decoded."""

    pass


__all__ = [
    "DocublocksError",
    "ValidationError",
    "InvalidOptionsError",
    "EditError",
    "InvalidEditError",
    "SessionClosedError",
    "FileError",
    "DocumentNotFoundError",
    "FileAccessError",
    "MalformedFileError",
]
