#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the adfmd library.

This module defines the exception classes raised by the conversion engine
and its command-line front end. Malformed document *content* never raises
through the public conversion entry points (unknown nodes fall back to a
labelled rendering); these exceptions cover configuration problems, strict
decoding paths and I/O.

Exception Hierarchy
-------------------
- AdfMdError (base exception)

  - ValidationError (invalid values or options)

  - DocumentFormatError (ADF JSON that cannot be decoded)

  - RegistryError (missing root handler, invalid handler registration)

  - ParsingError (Markdown input could not be read)

  - RenderingError (output generation or write failures)

  - ConfigError (configuration file discovery and loading)

  - InputError (command-line input that cannot be read)

"""

from __future__ import annotations

from typing import Any


class AdfMdError(Exception):
    """Base exception class for all adfmd-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AdfMdError):
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


class DocumentFormatError(AdfMdError):
    """Exception raised when ADF JSON cannot be decoded into a document.

    Parameters
    ----------
    message : str
        Description of what is malformed
    path : str, optional
        Location of the offending value inside the JSON structure
        (e.g. ``content[2].marks[0]``)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, path: str | None = None, original_error: Exception | None = None):
        """Initialize the document format error."""
        if path:
            message = f"{message} (at {path})"
        super().__init__(message, original_error=original_error)
        self.path = path


class RegistryError(AdfMdError):
    """Exception raised for component registry misconfiguration.

    Raised when a conversion needs a handler that is structurally required
    (the ``doc`` root handler) or when a handler registration is invalid.
    Unknown node types inside a document never raise this error.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    node_type : str, optional
        The node type involved

    """

    def __init__(self, message: str, node_type: str | None = None, original_error: Exception | None = None):
        """Initialize the registry error."""
        super().__init__(message, original_error=original_error)
        self.node_type = node_type


class ParsingError(AdfMdError):
    """Exception raised when Markdown input cannot be read.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    original_error : Exception, optional
        The original exception that caused this error

    """


class RenderingError(AdfMdError):
    """Exception raised when output cannot be generated or written.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    output_path : str, optional
        Destination that could not be written
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, output_path: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.output_path = output_path


class ConfigError(AdfMdError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path to the configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class InputError(AdfMdError):
    """Exception raised when a command-line input file cannot be read.

    Parameters
    ----------
    message : str
        Description of the read failure
    input_path : str, optional
        The input that was requested
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, input_path: str | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.input_path = input_path
