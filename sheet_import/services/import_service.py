"""
Import service: spreadsheet in, typed records out.

This module provides the ImportService class, the single entry point of the
package. It selects a reader adapter from the file name, materializes the
first worksheet, resolves its header row once and maps every data row to a
record, either sequentially or in fixed-size batches on a thread pool.

Dispatch:
    Sheets with at most `large_file_threshold` data rows are mapped in one
    sequential pass and the records keep sheet row order. Larger sheets are
    split into batches of `batch_size` rows that are all submitted at once;
    each finished batch is appended to the shared result list, so on this
    path the record order follows batch completion and is NOT sheet row
    order.

Failure:
    Imports are all-or-nothing. The first row that cannot be mapped fails
    the whole import with ImportError; on the batched path batches that
    have not started yet are cancelled and running ones are awaited before
    the error is raised.

Example:
    service = ImportService()

    with open("/path/to/people.xlsx", "rb") as f:
        people = service.import_all(f, Person, PERSON_SCHEMA, file_name="people.xlsx")

    result = service.import_with_result(data, Person, PERSON_SCHEMA, file_name="people.xlsx")
    print(result.strategy, result.row_count)
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from threading import Lock
from typing import Any, BinaryIO

from sheet_import.adapters.base import SheetReader
from sheet_import.adapters.calamine_adapter import CalamineAdapter
from sheet_import.adapters.openpyxl_adapter import OpenpyxlAdapter
from sheet_import.config import Settings, get_settings
from sheet_import.exceptions.import_exceptions import (
    ArgumentError,
    EmptySheetError,
    FileNotFoundError as ImportFileNotFoundError,
    ImportError as SheetImportError,
    ReadError,
    SheetImportBaseError,
)
from sheet_import.models.cell_models import SheetRows
from sheet_import.models.import_models import DispatchStrategy, ImportResult, ImportState
from sheet_import.models.schema_models import RecordSchema
from sheet_import.services.header_resolver import resolve_header
from sheet_import.services.row_mapper import RowMapper
from sheet_import.services.schema_registry import SchemaRegistry, schema_registry

logger = logging.getLogger(__name__)

DispatchHook = Callable[[DispatchStrategy, int], None]


class _ImportRun:
    """State of one import call, used for logging and error reporting."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        self.state = ImportState.IDLE
        self.started = time.perf_counter()

    def transition(self, state: ImportState) -> None:
        logger.debug("%s: %s -> %s", self.file_name, self.state.value, state.value)
        self.state = state

    def fail(self, reason: str, cause: BaseException | None = None) -> SheetImportError:
        failed_in = self.state
        self.transition(ImportState.FAILED)
        logger.error("Import of %s failed during %s: %s", self.file_name, failed_in.value, reason)
        return SheetImportError(
            file_name=self.file_name,
            reason=reason,
            cause=cause,
            state=failed_in.value,
        )

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000


class ImportService:
    """
    Import the first worksheet of a spreadsheet into typed records.

    The service uses:
        - OpenpyxlAdapter: for .xlsx/.xlsm sources
        - CalamineAdapter: for every other source (.xls, .xlsb, .ods, ...)

    Attributes:
        settings: Dispatch settings (threshold, batch size, pool size).
        xml_reader: Reader used for .xlsx/.xlsm sources.
        binary_reader: Reader used for everything else.
        schemas: Registry consulted when no schema is passed.

    Example:
        service = ImportService()
        records = service.import_all(stream, Person, file_name="people.xls")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        xml_reader: SheetReader | None = None,
        binary_reader: SheetReader | None = None,
        schemas: SchemaRegistry | None = None,
    ) -> None:
        """
        Initialize the ImportService.

        Args:
            settings: Optional settings. If None, the process-wide settings
                are used.
            xml_reader: Optional reader for XML workbooks.
                        If None, creates an OpenpyxlAdapter.
            binary_reader: Optional reader for other workbooks.
                           If None, creates a CalamineAdapter.
            schemas: Optional schema registry. If None, the module-level
                registry is used.
        """
        self.settings = settings or get_settings()
        self.xml_reader = xml_reader or OpenpyxlAdapter()
        self.binary_reader = binary_reader or CalamineAdapter()
        self.schemas = schemas if schemas is not None else schema_registry

    def select_reader(self, file_name: str) -> SheetReader:
        """Pick the reader for a file name: XML workbooks vs everything else."""
        if self.xml_reader.supports(file_name):
            return self.xml_reader
        return self.binary_reader

    def _resolve_schema(self, record_type: Any, schema: RecordSchema | None) -> RecordSchema:
        if record_type is None:
            raise ArgumentError("record_type", "a record type is required")
        if schema is None:
            schema = self.schemas.get(record_type)
            if schema is None:
                raise ArgumentError(
                    "schema",
                    f"no schema given and none registered for {getattr(record_type, '__name__', record_type)!r}",
                )
        elif schema.record_type is not record_type:
            raise ArgumentError("schema", "schema was declared for a different record type")
        return schema

    def choose_strategy(self, data_rows: int) -> DispatchStrategy:
        """Sequential up to the threshold (inclusive), batched above it."""
        if data_rows <= self.settings.large_file_threshold:
            return DispatchStrategy.SEQUENTIAL
        return DispatchStrategy.BATCHED

    def import_all(
        self,
        source: BinaryIO | bytes,
        record_type: Any,
        schema: RecordSchema | None = None,
        *,
        file_name: str,
        on_dispatch: DispatchHook | None = None,
    ) -> list[Any]:
        """
        Import all data rows of the first worksheet.

        Args:
            source: Workbook bytes or a binary stream.
            record_type: Record class (or factory) to construct.
            schema: Mapping for the record type. If None, the schema
                registered for record_type is used.
            file_name: Source file name; its extension selects the reader.
            on_dispatch: Optional callback receiving the chosen strategy
                and the data-row count.

        Returns:
            The records. Order matches sheet rows only for sheets processed
            sequentially.

        Raises:
            ArgumentError: If source or record_type is None, or no schema
                is available.
            ImportError: If reading or mapping fails.
        """
        return self.import_with_result(
            source,
            record_type,
            schema,
            file_name=file_name,
            on_dispatch=on_dispatch,
        ).records

    def import_with_result(
        self,
        source: BinaryIO | bytes,
        record_type: Any,
        schema: RecordSchema | None = None,
        *,
        file_name: str,
        on_dispatch: DispatchHook | None = None,
    ) -> ImportResult:
        """
        Import all data rows and return them with run metadata.

        Same arguments and errors as import_all().

        Returns:
            ImportResult with records, strategy and counts.
        """
        if source is None:
            raise ArgumentError("source", "an input stream is required")
        if not file_name:
            raise ArgumentError("file_name", "a file name is required to pick the reader")
        schema = self._resolve_schema(record_type, schema)

        run = _ImportRun(file_name)
        run.transition(ImportState.READING_HEADER)
        try:
            sheet = self.select_reader(file_name).read_first_sheet(source, file_name)
        except SheetImportBaseError as e:
            raise run.fail(e.message, e) from e
        return self._run(run, sheet, schema, on_dispatch)

    def import_file(
        self,
        file_path: str | Path,
        record_type: Any,
        schema: RecordSchema | None = None,
        on_dispatch: DispatchHook | None = None,
    ) -> list[Any]:
        """
        Import a spreadsheet file from disk.

        Args:
            file_path: Path to the spreadsheet; its extension selects the reader.
            record_type: Record class (or factory) to construct.
            schema: Mapping for the record type, or None for the registered one.
            on_dispatch: Optional dispatch callback.

        Returns:
            The records.

        Raises:
            ArgumentError: If arguments are missing.
            ImportError: If the file is missing, unreadable, or a row fails.
        """
        if file_path is None:
            raise ArgumentError("file_path", "a file path is required")
        self._resolve_schema(record_type, schema)

        path = Path(file_path)
        if not path.is_file():
            error = ImportFileNotFoundError(str(path))
            raise _ImportRun(path.name).fail(error.message, error) from error
        try:
            with path.open("rb") as f:
                data = f.read()
        except OSError as e:
            error = ReadError(file_name=str(path), operation="open", reason=str(e))
            raise _ImportRun(path.name).fail(error.message, error) from e

        return self.import_all(
            data,
            record_type,
            schema,
            file_name=path.name,
            on_dispatch=on_dispatch,
        )

    def import_rows(
        self,
        sheet: SheetRows,
        record_type: Any,
        schema: RecordSchema | None = None,
        on_dispatch: DispatchHook | None = None,
    ) -> ImportResult:
        """
        Run the mapping pipeline over an already materialized sheet.

        Args:
            sheet: Sheet content, row 0 being the header.
            record_type: Record class (or factory) to construct.
            schema: Mapping for the record type, or None for the registered one.
            on_dispatch: Optional dispatch callback.

        Returns:
            ImportResult with records, strategy and counts.

        Raises:
            ArgumentError: If sheet or record_type is None, or no schema
                is available.
            ImportError: If the sheet is empty or a row fails.
        """
        if sheet is None:
            raise ArgumentError("sheet", "sheet rows are required")
        schema = self._resolve_schema(record_type, schema)
        return self._run(_ImportRun(sheet.sheet_name), sheet, schema, on_dispatch)

    def _run(
        self,
        run: _ImportRun,
        sheet: SheetRows,
        schema: RecordSchema,
        on_dispatch: DispatchHook | None,
    ) -> ImportResult:
        if run.state == ImportState.IDLE:
            run.transition(ImportState.READING_HEADER)
        if sheet.total_rows == 0:
            error = EmptySheetError(run.file_name, sheet.sheet_name)
            raise run.fail(error.message, error) from error

        header_map = resolve_header(sheet.header)
        missing = [c for c in schema.columns if c not in header_map]
        if missing:
            logger.warning(
                "%s: columns not in header, fields keep defaults: %s",
                run.file_name,
                ", ".join(missing),
            )

        data_rows = sheet.total_rows - 1
        strategy = self.choose_strategy(data_rows)
        if on_dispatch is not None:
            on_dispatch(strategy, data_rows)

        mapper = RowMapper(schema)
        if strategy == DispatchStrategy.SEQUENTIAL:
            run.transition(ImportState.SEQUENTIAL)
            logger.info("Importing %s: %d data rows sequentially", run.file_name, data_rows)
            try:
                records = mapper.map_rows(sheet.rows[1:], header_map)
            except SheetImportBaseError as e:
                raise run.fail(e.message, e) from e
            batch_count = 1
        else:
            run.transition(ImportState.BATCHED)
            records, batch_count = self._run_batches(run, sheet, mapper, header_map)

        run.transition(ImportState.MERGED)
        result = ImportResult(
            records=records,
            sheet_name=sheet.sheet_name,
            strategy=strategy,
            row_count=len(records),
            batch_count=batch_count,
            processing_time_ms=run.elapsed_ms,
        )
        run.transition(ImportState.DONE)
        logger.info(
            "Imported %d records from %s in %.1f ms",
            result.row_count,
            run.file_name,
            result.processing_time_ms,
        )
        return result

    def _run_batches(
        self,
        run: _ImportRun,
        sheet: SheetRows,
        mapper: RowMapper,
        header_map: dict[str, int],
    ) -> tuple[list[Any], int]:
        """
        Map rows [1, total_rows) in fixed-size batches on a thread pool.

        Returns:
            The merged records (completion order) and the batch count.
        """
        batch_size = self.settings.batch_size
        bounds = [
            (start, min(start + batch_size, sheet.total_rows))
            for start in range(1, sheet.total_rows, batch_size)
        ]
        logger.info(
            "Importing %s: %d data rows in %d batches of %d",
            run.file_name,
            sheet.total_rows - 1,
            len(bounds),
            batch_size,
        )

        results: list[Any] = []
        results_lock = Lock()

        def run_batch(start: int, end: int) -> int:
            batch = mapper.map_rows(sheet.rows[start:end], header_map)
            with results_lock:
                results.extend(batch)
            return len(batch)

        with ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="sheet-import",
        ) as executor:
            futures: list[Future[int]] = [
                executor.submit(run_batch, start, end) for start, end in bounds
            ]
            _, not_done = wait(futures, return_when=FIRST_EXCEPTION)
            for future in not_done:
                future.cancel()
        # Leaving the executor block waits for every started batch

        for index, future in enumerate(futures):
            if future.cancelled():
                continue
            error = future.exception()
            if error is None:
                continue
            start, end = bounds[index]
            if isinstance(error, SheetImportBaseError):
                raise run.fail(f"batch {index} (rows {start}-{end - 1}): {error.message}", error) from error
            run.fail(f"batch {index} (rows {start}-{end - 1}): {error}", error)
            raise error

        if any(future.cancelled() for future in futures):
            raise run.fail("batch processing was cancelled")

        return results, len(bounds)
