"""
Custom exceptions and error context for geomagnetic snapshot operations.
"""

from dataclasses import dataclass
from enum import Enum
import json
import logging
from typing import Callable, Dict, Optional, TextIO

logger = logging.getLogger(__name__)

class ReturnCode(Enum):
    """Return codes of snapshot operations."""
    SUCCESS = 0
    DOMAIN_ERROR = 1
    FORMAT_ERROR = 2
    MEMORY_ERROR = 3
    MISSING_DATA = 4
    PATH_ERROR = 5

class Operation(Enum):
    """Library operations that can report an error."""
    SNAPSHOT_CREATE = "snapshot_create"
    SNAPSHOT_FIELD = "snapshot_field"

_ERROR_STRINGS: Dict[ReturnCode, str] = {
    ReturnCode.SUCCESS: "Operation succeeded",
    ReturnCode.DOMAIN_ERROR: "Value is out of validity range",
    ReturnCode.FORMAT_ERROR: "Invalid file format",
    ReturnCode.MEMORY_ERROR: "Could not allocate memory",
    ReturnCode.MISSING_DATA: "No data for the requested date",
    ReturnCode.PATH_ERROR: "No such file or directory",
}

def error_string(code: ReturnCode) -> str:
    """Return a string describing a return code."""
    return _ERROR_STRINGS[code]

def error_function(operation: Optional[Operation]) -> Optional[str]:
    """Return the name of a library operation, for verbosing errors."""
    if operation is None:
        return None
    return f"gull_{operation.value}"

@dataclass(frozen=True)
class ErrorContext:
    """
    Description of a failed operation.

    Attributes:
        code: Kind of failure
        function: Operation that detected the failure
        message: Detailed, human readable, message
        file: Faulty data file, if any
        line: Faulty line in the data file, or 0
    """
    code: ReturnCode
    function: Optional[Operation]
    message: str
    file: Optional[str] = None
    line: int = 0

    def format(self) -> str:
        """Format the context as a one-line summary."""
        header = f"{error_function(self.function)} [#{self.code.value}]"
        if self.file is not None:
            location = f"{self.file}:{self.line}" if self.line else self.file
            header = f"{header}, {location}"
        return f"{{ {header} }} {self.message}"

ErrorHandler = Callable[[ErrorContext], None]

class GullError(Exception):
    """Base exception for all geomagnetic snapshot errors."""
    code = ReturnCode.SUCCESS

    def __init__(self, message: str, function: Optional[Operation] = None,
                 file: Optional[str] = None, line: int = 0):
        self.context = ErrorContext(
            code=self.code,
            function=function,
            message=message,
            file=file,
            line=line
        )
        super().__init__(self.context.format())

    @property
    def message(self) -> str:
        return self.context.message

    @property
    def function(self) -> Optional[Operation]:
        return self.context.function

    @property
    def file(self) -> Optional[str]:
        return self.context.file

    @property
    def line(self) -> int:
        return self.context.line

    def with_function(self, function: Operation) -> "GullError":
        """Return a copy of this error attributed to another operation."""
        return type(self)(self.message, function, self.file, self.line)

class DomainError(GullError):
    """Exception for input values outside of their validity range."""
    code = ReturnCode.DOMAIN_ERROR

class FormatError(GullError):
    """Exception for malformed data files."""
    code = ReturnCode.FORMAT_ERROR

class AllocationError(GullError, MemoryError):
    """Exception for failed memory allocations."""
    code = ReturnCode.MEMORY_ERROR

class MissingDataError(GullError):
    """Exception raised when no data set covers the requested date."""
    code = ReturnCode.MISSING_DATA

class PathError(GullError):
    """Exception for data files that cannot be opened."""
    code = ReturnCode.PATH_ERROR

def report_error(error: GullError, function: Operation,
                 handler: Optional[ErrorHandler] = None) -> GullError:
    """
    Attribute an error to an operation and notify the optional handler.

    The handler is called synchronously. It cannot alter the error, which is
    returned for the caller to raise.
    """
    if error.function is None:
        error = error.with_function(function)
    logger.debug(error.context.format())
    if handler is not None:
        handler(error.context)
    return error

def _error_dict(code: ReturnCode, function: Optional[Operation] = None,
                file: Optional[str] = None, line: int = 0) -> dict:
    data = {"code": code.value, "message": error_string(code)}
    if function is not None:
        data["function"] = error_function(function)
    if file is not None:
        data["file"] = file
        if line:
            data["line"] = line
    return data

def error_print(stream: TextIO, code: ReturnCode,
                function: Optional[Operation] = None,
                file: Optional[str] = None, line: int = 0):
    """
    Print a JSON summary of error data.

    Args:
        stream: Output stream
        code: Error return code
        function: Faulty operation, if known
        file: Faulty data file, if any
        line: Faulty line in the data file, or 0
    """
    stream.write(json.dumps(_error_dict(code, function, file, line)))
    stream.write("\n")
