from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import xlrd
import xlwt
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .model import (
    DEFAULT_SHEET_NAME,
    XLS_MAX_COLUMNS,
    XLS_MAX_ROWS,
    OpenedWorkbook,
    WorkbookFormat,
)

logger = logging.getLogger(__name__)

MAX_COLUMN_WIDTH = 255
COLUMN_PADDING = 2
TWIPS_PER_POINT = 20
XLS_WIDTH_UNITS = 256


class WorkbookIOError(RuntimeError):
    pass


class WorkbookIO:
    def create(self, fmt: WorkbookFormat, sheet_name: str = DEFAULT_SHEET_NAME) -> OpenedWorkbook:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name
        return OpenedWorkbook(workbook=wb, sheet=ws, source_format=fmt)

    def open_template(self, path: Path, sheet_index: int) -> OpenedWorkbook:
        fmt = WorkbookFormat.from_suffix(path.suffix)
        if fmt is None:
            raise WorkbookIOError(f"unsupported template type: {path.name}")

        if fmt is WorkbookFormat.XLSX:
            try:
                wb = load_workbook(path)
            except OSError:
                raise
            except Exception as e:
                raise WorkbookIOError(f"cannot read template {path}: {e}") from e
        else:
            wb = self._load_xls(path)

        if not 0 <= sheet_index < len(wb.worksheets):
            raise WorkbookIOError(
                f"template {path.name} has {len(wb.worksheets)} sheet(s); sheet {sheet_index} does not exist"
            )
        ws = wb.worksheets[sheet_index]
        logger.info("loaded template %s, sheet %d (%r)", path, sheet_index, ws.title)
        return OpenedWorkbook(workbook=wb, sheet=ws, source_format=fmt)

    def save(self, wb: Workbook, path: Path, fmt: WorkbookFormat) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt is WorkbookFormat.XLSX:
            with open(path, "wb") as fh:
                wb.save(fh)
        else:
            book = self._to_xls(wb)
            with open(path, "wb") as fh:
                book.save(fh)
        logger.debug("wrote %s (%s)", path, fmt.value)

    def autosize_columns(self, ws: Worksheet) -> Dict[str, float]:
        widths: Dict[int, int] = {}
        for row in ws.iter_rows():
            for cell in row:
                if cell.value is None:
                    continue
                length = max(len(line) for line in self._render(cell.value).splitlines() or [""])
                widths[cell.column] = max(widths.get(cell.column, 0), length)

        applied: Dict[str, float] = {}
        for col, length in sorted(widths.items()):
            letter = get_column_letter(col)
            width = float(min(length + COLUMN_PADDING, MAX_COLUMN_WIDTH))
            ws.column_dimensions[letter].width = width
            applied[letter] = width
        return applied

    # ---- .xls input ------------------------------------------------------

    def _load_xls(self, path: Path) -> Workbook:
        try:
            book = xlrd.open_workbook(str(path), formatting_info=True)
        except OSError:
            raise
        except Exception as e:
            raise WorkbookIOError(f"cannot read template {path}: {e}") from e

        wb = Workbook()
        wb.remove(wb.active)
        fonts: Dict[int, Font] = {}
        for rd_sheet in book.sheets():
            ws = wb.create_sheet(title=rd_sheet.name)
            for r in range(rd_sheet.nrows):
                for c in range(rd_sheet.ncols):
                    rd_cell = rd_sheet.cell(r, c)
                    if rd_cell.ctype == xlrd.XL_CELL_EMPTY:
                        continue
                    cell = ws.cell(row=r + 1, column=c + 1)
                    cell.value = self._xls_value(rd_cell)
                    if rd_cell.ctype == xlrd.XL_CELL_TEXT:
                        cell.data_type = "s"
                    self._apply_xls_format(book, rd_cell.xf_index, cell, fonts)

            for r, info in rd_sheet.rowinfo_map.items():
                if info.height:
                    ws.row_dimensions[r + 1].height = info.height / TWIPS_PER_POINT
            for c, info in rd_sheet.colinfo_map.items():
                if info.width:
                    ws.column_dimensions[get_column_letter(c + 1)].width = info.width / XLS_WIDTH_UNITS
        return wb

    def _xls_value(self, rd_cell: Any) -> Any:
        if rd_cell.ctype == xlrd.XL_CELL_TEXT:
            return rd_cell.value
        if rd_cell.ctype in (xlrd.XL_CELL_NUMBER, xlrd.XL_CELL_DATE):
            return float(rd_cell.value)
        if rd_cell.ctype == xlrd.XL_CELL_BOOLEAN:
            return bool(rd_cell.value)
        if rd_cell.ctype == xlrd.XL_CELL_ERROR:
            return xlrd.error_text_from_code.get(rd_cell.value, "#ERR")
        return None

    def _apply_xls_format(self, book: Any, xf_index: Any, cell: Any, fonts: Dict[int, Font]) -> None:
        if xf_index is None:
            return
        xf = book.xf_list[xf_index]
        fmt = book.format_map.get(xf.format_key)
        if fmt is not None and fmt.format_str:
            cell.number_format = fmt.format_str
        if xf.font_index not in fonts:
            rd_font = book.font_list[xf.font_index]
            fonts[xf.font_index] = Font(
                name=rd_font.name,
                size=rd_font.height / TWIPS_PER_POINT,
                bold=bool(rd_font.bold),
                italic=bool(rd_font.italic),
            )
        cell.font = fonts[xf.font_index]

    # ---- .xls output -----------------------------------------------------

    def _to_xls(self, wb: Workbook) -> xlwt.Workbook:
        book = xlwt.Workbook(encoding="utf-8")
        styles: Dict[Tuple[Any, ...], xlwt.XFStyle] = {}
        for ws in wb.worksheets:
            if ws.max_row > XLS_MAX_ROWS or ws.max_column > XLS_MAX_COLUMNS:
                raise WorkbookIOError(
                    f"sheet {ws.title!r} has {ws.max_row} rows x {ws.max_column} columns; "
                    f".xls allows at most {XLS_MAX_ROWS} x {XLS_MAX_COLUMNS}"
                )
            out = book.add_sheet(ws.title, cell_overwrite_ok=True)
            for row in ws.iter_rows():
                for cell in row:
                    if cell.value is None and not cell.has_style:
                        continue
                    style = self._xls_style(cell, styles)
                    out.write(cell.row - 1, cell.column - 1, self._xls_label(cell), style)

            for letter, dim in ws.column_dimensions.items():
                if dim.width:
                    idx = column_index_from_string(letter) - 1
                    out.col(idx).width = min(int(dim.width * XLS_WIDTH_UNITS), 65535)
            for r, dim in ws.row_dimensions.items():
                if dim.height:
                    xls_row = out.row(r - 1)
                    xls_row.height = int(dim.height * TWIPS_PER_POINT)
                    xls_row.height_mismatch = True
        return book

    def _xls_label(self, cell: Any) -> Any:
        if cell.data_type == "f":
            try:
                return xlwt.Formula(str(cell.value).lstrip("="))
            except Exception as e:
                raise WorkbookIOError(f"{cell.coordinate}: formula not supported in .xls: {cell.value}") from e
        return cell.value

    def _xls_style(self, cell: Any, styles: Dict[Tuple[Any, ...], xlwt.XFStyle]) -> xlwt.XFStyle:
        f = cell.font
        key = (cell.number_format, f.name, f.sz, bool(f.b), bool(f.i))
        if key not in styles:
            style = xlwt.XFStyle()
            style.num_format_str = cell.number_format or "General"
            font = xlwt.Font()
            if f.name:
                font.name = f.name
            if f.sz:
                font.height = int(float(f.sz) * TWIPS_PER_POINT)
            font.bold = bool(f.b)
            font.italic = bool(f.i)
            style.font = font
            styles[key] = style
        return styles[key]

    def _render(self, value: Any) -> str:
        if isinstance(value, float):
            return format(value, "g")
        return str(value)
