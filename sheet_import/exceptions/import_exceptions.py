"""
Custom exceptions for spreadsheet import operations.

This module defines a hierarchy of exceptions for the error conditions that
can occur while turning a worksheet into typed records. All exceptions
inherit from SheetImportBaseError for consistent error handling.

Errors raised while an import is running are surfaced to the caller wrapped
in ImportError, so a failed import never returns a partial record list.

Example:
    try:
        records = service.import_all(stream, Person, file_name="people.xlsx")
    except ImportError as e:
        if isinstance(e.cause, RequiredFieldError):
            logger.error(f"Missing value in column {e.cause.column}")
        raise
"""

from typing import Any


class SheetImportBaseError(Exception):
    """
    Base exception for all spreadsheet import errors.

    All custom exceptions in this module inherit from this class,
    allowing consumers to catch all import-related errors with a single
    except clause.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Optional additional context about the error.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SHEET_IMPORT_ERROR",
        details: dict | None = None,
    ) -> None:
        """
        Initialize the SheetImportBaseError.

        Args:
            message: Human-readable error description.
            error_code: Machine-readable error code.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """
        Convert exception to a dictionary for structured reporting.

        Returns:
            Dictionary containing error_code, message, and details.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ArgumentError(SheetImportBaseError):
    """
    Raised when an import is called with unusable arguments.

    Raised before any I/O happens, e.g. for a missing input stream,
    a missing record type or a record type without a schema.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, argument: str, reason: str) -> None:
        """
        Initialize the ArgumentError.

        Args:
            argument: Name of the offending argument.
            reason: Why the argument was rejected.
        """
        self.argument = argument
        self.reason = reason
        super().__init__(
            message=f"Invalid argument '{argument}': {reason}",
            error_code="INVALID_ARGUMENT",
            details={"argument": argument, "reason": reason},
        )


class FileNotFoundError(SheetImportBaseError):
    """
    Raised when the spreadsheet file to import does not exist.

    Attributes:
        file_path: Path to the file that was not found.
    """

    def __init__(self, file_path: str) -> None:
        """
        Initialize the FileNotFoundError.

        Args:
            file_path: Path to the file that was not found.
        """
        self.file_path = file_path
        super().__init__(
            message=f"Spreadsheet file not found: {file_path}",
            error_code="FILE_NOT_FOUND",
            details={"file_path": file_path},
        )


class InvalidFileFormatError(SheetImportBaseError):
    """
    Raised when the source cannot be decoded as a spreadsheet.

    Attributes:
        file_name: Name (or hint) of the invalid source.
        expected_formats: List of formats the reader supports.
    """

    def __init__(
        self,
        file_name: str,
        expected_formats: list[str] | None = None,
        reason: str | None = None,
    ) -> None:
        """
        Initialize the InvalidFileFormatError.

        Args:
            file_name: Name (or hint) of the invalid source.
            expected_formats: List of formats the reader supports.
            reason: Specific reason for the format error.
        """
        self.file_name = file_name
        self.expected_formats = expected_formats or [".xlsx", ".xlsm", ".xls", ".xlsb", ".ods"]
        self.reason = reason

        message = f"Invalid spreadsheet format: {file_name}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="INVALID_FILE_FORMAT",
            details={
                "file_name": file_name,
                "expected_formats": self.expected_formats,
                "reason": reason,
            },
        )


class ReadError(SheetImportBaseError):
    """
    Raised when the spreadsheet reader fails for a reason not covered
    by a more specific exception.

    Attributes:
        file_name: Name (or hint) of the source being read.
        operation: The read operation that failed.
    """

    def __init__(
        self,
        file_name: str,
        operation: str = "read",
        reason: str | None = None,
    ) -> None:
        """
        Initialize the ReadError.

        Args:
            file_name: Name (or hint) of the source being read.
            operation: The read operation that failed.
            reason: Specific reason for the read failure.
        """
        self.file_name = file_name
        self.operation = operation
        self.reason = reason

        message = f"Failed to {operation} spreadsheet: {file_name}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="READ_ERROR",
            details={
                "file_name": file_name,
                "operation": operation,
                "reason": reason,
            },
        )


class EmptySheetError(SheetImportBaseError):
    """
    Raised when the workbook has no first sheet or the first sheet
    contains no rows.

    Attributes:
        file_name: Name (or hint) of the source.
        sheet_name: Name of the empty sheet, if one exists.
    """

    def __init__(self, file_name: str, sheet_name: str | None = None) -> None:
        """
        Initialize the EmptySheetError.

        Args:
            file_name: Name (or hint) of the source.
            sheet_name: Name of the empty sheet, if one exists.
        """
        self.file_name = file_name
        self.sheet_name = sheet_name

        if sheet_name is None:
            message = f"Workbook has no sheets: {file_name}"
        else:
            message = f"Sheet '{sheet_name}' is empty: {file_name}"

        super().__init__(
            message=message,
            error_code="EMPTY_SHEET",
            details={"file_name": file_name, "sheet_name": sheet_name},
        )


class ConversionError(SheetImportBaseError):
    """
    Raised when a converter cannot parse an extracted cell value.

    Attributes:
        value: The text that could not be converted.
        target: Name of the target type or converter.
    """

    def __init__(self, value: str | None, target: str, reason: str | None = None) -> None:
        """
        Initialize the ConversionError.

        Args:
            value: The text that could not be converted.
            target: Name of the target type or converter.
            reason: Specific reason for the failure.
        """
        self.value = value
        self.target = target
        self.reason = reason

        message = f"Cannot convert {value!r} to {target}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="CONVERSION_ERROR",
            details={"value": value, "target": target, "reason": reason},
        )


class ConverterNotFoundError(SheetImportBaseError):
    """
    Raised when a schema references a converter identifier that is not
    registered.

    Attributes:
        name: The unknown converter identifier.
        available: Identifiers registered at lookup time.
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        """
        Initialize the ConverterNotFoundError.

        Args:
            name: The unknown converter identifier.
            available: Identifiers registered at lookup time.
        """
        self.name = name
        self.available = available or []

        message = f"Converter not found: {name}"
        if available:
            message += f". Available converters: {', '.join(available)}"

        super().__init__(
            message=message,
            error_code="CONVERTER_NOT_FOUND",
            details={"name": name, "available": self.available},
        )


class RowMappingError(SheetImportBaseError):
    """
    Raised when a sheet row cannot be turned into a record.

    Attributes:
        row_index: Zero-based sheet row index of the failing row.
        column: Column label involved, if the failure is column specific.
        field: Record field involved, if the failure is field specific.
    """

    def __init__(
        self,
        row_index: int,
        reason: str,
        column: str | None = None,
        field: str | None = None,
        error_code: str = "ROW_MAPPING_ERROR",
    ) -> None:
        """
        Initialize the RowMappingError.

        Args:
            row_index: Zero-based sheet row index of the failing row.
            reason: Why the row could not be mapped.
            column: Column label involved, if any.
            field: Record field involved, if any.
            error_code: Machine-readable error code.
        """
        self.row_index = row_index
        self.reason = reason
        self.column = column
        self.field = field

        super().__init__(
            message=f"Row {row_index}: {reason}",
            error_code=error_code,
            details={
                "row_index": row_index,
                "column": column,
                "field": field,
                "reason": reason,
            },
        )


class RequiredFieldError(RowMappingError):
    """
    Raised when a required column is blank or missing in a row.

    Attributes:
        column: Label of the required column.
    """

    def __init__(self, column: str, row_index: int, field: str | None = None) -> None:
        """
        Initialize the RequiredFieldError.

        Args:
            column: Label of the required column.
            row_index: Zero-based sheet row index of the failing row.
            field: Record field mapped to the column.
        """
        super().__init__(
            row_index=row_index,
            reason=f"required column '{column}' is empty",
            column=column,
            field=field,
            error_code="REQUIRED_FIELD_MISSING",
        )


class ImportError(SheetImportBaseError):
    """
    Raised when an import fails as a whole.

    Wraps the error that aborted the import. The import is atomic: when
    this is raised no records are returned.

    Attributes:
        file_name: Name (or hint) of the source.
        cause: The underlying error, also chained as __cause__.
    """

    def __init__(
        self,
        file_name: str,
        reason: str,
        cause: BaseException | None = None,
        state: str | None = None,
    ) -> None:
        """
        Initialize the ImportError.

        Args:
            file_name: Name (or hint) of the source.
            reason: Why the import failed.
            cause: The underlying error.
            state: Import state the failure happened in.
        """
        self.file_name = file_name
        self.reason = reason
        self.cause = cause

        details: dict[str, Any] = {"file_name": file_name, "reason": reason, "state": state}
        if isinstance(cause, SheetImportBaseError):
            details["cause"] = cause.to_dict()

        super().__init__(
            message=f"Import of {file_name} failed - {reason}",
            error_code="IMPORT_FAILED",
            details=details,
        )


class WriteError(SheetImportBaseError):
    """
    Raised when writing an import template fails.

    Attributes:
        file_path: Path to the file being written.
        operation: The write operation that failed.
    """

    def __init__(
        self,
        file_path: str,
        operation: str = "write",
        reason: str | None = None,
    ) -> None:
        """
        Initialize the WriteError.

        Args:
            file_path: Path to the file being written.
            operation: The write operation that failed.
            reason: Specific reason for the write failure.
        """
        self.file_path = file_path
        self.operation = operation
        self.reason = reason

        message = f"Failed to {operation} template: {file_path}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="WRITE_ERROR",
            details={
                "file_path": file_path,
                "operation": operation,
                "reason": reason,
            },
        )


class PermissionError(SheetImportBaseError):
    """
    Raised when file access is denied due to permissions.

    Attributes:
        file_path: Path to the file with permission issues.
        operation: The operation that was denied.
    """

    def __init__(
        self,
        file_path: str,
        operation: str = "access",
    ) -> None:
        """
        Initialize the PermissionError.

        Args:
            file_path: Path to the file with permission issues.
            operation: The operation that was denied.
        """
        self.file_path = file_path
        self.operation = operation

        super().__init__(
            message=f"Permission denied for {operation} on: {file_path}",
            error_code="PERMISSION_DENIED",
            details={
                "file_path": file_path,
                "operation": operation,
            },
        )
