from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from csv2workbook.cellwriter.api import DestinationRow, WriteMode, write_cell
from csv2workbook.fieldsplitter.api import SplitOptions, iter_records
from csv2workbook.templatecopier.api import clear_unfilled, example_width, finalize, prepare_row
from csv2workbook.workbookio.api import (
    OpenedWorkbook,
    autosize_columns,
    create_workbook,
    open_template,
    save_workbook,
)
from .model import TEMPLATE_SKIP_ROWS, ConversionOptions, ConversionResult

logger = logging.getLogger(__name__)


class AssemblerError(RuntimeError):
    pass


class Assembler:
    def convert(self, options: ConversionOptions) -> ConversionResult:
        input_path = Path(options.input_path)
        output_path = Path(options.output_path)

        # OPEN / LOAD TEMPLATE
        opened, template_mode = self._open_or_create(options)
        sheet = opened.sheet
        example_row = options.template_example_row

        # READ
        text = self._read_input(input_path, options.encoding)
        skip = self._resolve_skip_rows(options, template_mode)
        mode = self._write_mode(options, template_mode)
        logger.debug("mode=%s skip_rows=%d template=%s", mode.value, skip, template_mode)

        # SPLIT + WRITE
        split_options = SplitOptions(
            column_delimiter=options.column_delimiter,
            line_delimiter=options.line_delimiter,
            honor_quotes=options.honor_quotes,
        )
        next_row = example_row + 1 if template_mode else 0
        written = 0
        skipped = 0
        for record in iter_records(text, split_options):
            if skipped < skip:
                skipped += 1
                logger.debug("skipping record %d: %r", skipped, record)
                continue

            if template_mode:
                row = prepare_row(sheet, example_row, next_row)
            else:
                row = DestinationRow(sheet=sheet, index=next_row)
            for col_index, field in enumerate(record):
                write_cell(row, col_index, field, mode)
            if template_mode:
                clear_unfilled(row, len(record))

            next_row += 1
            written += 1
            if written % 10000 == 0:
                logger.debug("%d rows written", written)

        # FINALIZE
        if template_mode:
            finalize(sheet, example_row, next_row - 1)
        if options.resize_columns:
            widths = autosize_columns(sheet)
            logger.debug("column widths: %s", widths)

        # SERIALIZE
        output_path.unlink(missing_ok=True)
        save_workbook(opened.workbook, output_path, options.output_format)
        logger.info(
            "converted %d record(s) from %s into %s (sheet %r, %d skipped)",
            written, input_path, output_path, sheet.title, skipped,
        )

        return ConversionResult(
            output_path=str(output_path),
            sheet_name=sheet.title,
            format=options.output_format,
            rows_written=written,
            records_skipped=skipped,
            template_used=template_mode,
        )

    def _open_or_create(self, options: ConversionOptions) -> Tuple[OpenedWorkbook, bool]:
        template = options.template_path
        if template is None:
            return create_workbook(options.output_format), False

        template = Path(template)
        if not template.exists():
            logger.warning("template %s not found, creating a new workbook", template)
            return create_workbook(options.output_format), False

        if options.template_example_row < 0:
            raise AssemblerError(f"invalid template example row: {options.template_example_row}")
        opened = open_template(template, options.template_sheet)
        if example_width(opened.sheet, options.template_example_row) == 0:
            raise AssemblerError(
                f"template example row {options.template_example_row} of sheet "
                f"{opened.sheet.title!r} in {template.name} is empty"
            )
        return opened, True

    def _read_input(self, path: Path, encoding: str) -> str:
        try:
            return path.read_text(encoding=encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise AssemblerError(f"cannot decode {path} as {encoding}: {e}") from e

    def _resolve_skip_rows(self, options: ConversionOptions, template_mode: bool) -> int:
        if options.skip_rows is not None:
            if options.skip_rows < 0:
                raise AssemblerError(f"skip rows must not be negative: {options.skip_rows}")
            return options.skip_rows
        return TEMPLATE_SKIP_ROWS if template_mode else 0

    def _write_mode(self, options: ConversionOptions, template_mode: bool) -> WriteMode:
        if options.force_text:
            return WriteMode.FORCED_TEXT
        if template_mode:
            return WriteMode.TEMPLATE_COPY
        return WriteMode.PLAIN
