"""
csv2workbook: command-line entry point.

Usage:
    csv2workbook -i input.csv [-o output.xlsx] [-f xls|xlsx] [-c DELIM] [-l DELIM]
                 [-tem template.xlsx [-temSheet N] [-temEx N]] [-skip N] [-t] [-q] [-r] [-v]

Reads a delimited text file and writes every record as one worksheet row.
Numeric-looking fields become number cells unless -t is given. With a
template, each row is cloned from the template's example row, which is
removed once all data rows are written.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from csv2workbook.assembler.api import AssemblerError, ConversionOptions, convert
from csv2workbook.assembler.model import (
    DEFAULT_ENCODING,
    DEFAULT_TEMPLATE_EXAMPLE_ROW,
    DEFAULT_TEMPLATE_SHEET,
)
from csv2workbook.cellwriter.api import CellWriteError
from csv2workbook.fieldsplitter.api import FieldSplitError
from csv2workbook.templatecopier.api import TemplateCopyError
from csv2workbook.workbookio.api import WorkbookFormat, WorkbookIOError

PROG = "csv2workbook"
LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

EXIT_OK = 0
EXIT_ERROR = 1

logger = logging.getLogger(__name__)

EXAMPLES = f"""\
e.g.: {PROG} -i input.csv
e.g.: {PROG} -i input.csv -c \\t
e.g.: {PROG} -i input.txt -l ; -c "|" -f xls
e.g.: {PROG} -i input.csv -tem report.xlsx -temEx 3
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.exit(
            EXIT_ERROR,
            f"{self.prog}: {message}\nTry `{self.prog} --help' for more information.\n",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Converts a given delimited file to an Excel format.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-i", "--in", dest="input", metavar="INPUTFILE",
                        help="the inputfile to convert. (REQUIRED)")
    parser.add_argument("-o", "--out", dest="output", metavar="OUTPUTFILE",
                        help="the path of the outputfile.")
    parser.add_argument("-tem", "--template", dest="template", metavar="TEMPLATE",
                        help="an existing workbook whose example row supplies formats and cell types.")
    parser.add_argument("-temSheet", "--templateSheetNumber", dest="template_sheet", type=int,
                        default=DEFAULT_TEMPLATE_SHEET, metavar="N",
                        help="the 0-based sheet index within the template (default: %(default)s).")
    parser.add_argument("-temEx", "--templateExampleRow", dest="template_example_row", type=int,
                        default=DEFAULT_TEMPLATE_EXAMPLE_ROW, metavar="N",
                        help="the 0-based example row within the template sheet (default: %(default)s).")
    parser.add_argument("-skip", "--skipRows", dest="skip_rows", type=int, default=None, metavar="N",
                        help="number of leading input records to discard (default: 0, or 1 with a template).")
    parser.add_argument("-c", "--coldel", dest="column_delimiter", default=",", metavar="DELIMITER",
                        help="the delimiter separating columns of inputfile (default: %(default)s).")
    parser.add_argument("-l", "--linedel", dest="line_delimiter", default="\\r\\n", metavar="DELIMITER",
                        help="the delimiter separating lines of inputfile (default: %(default)s).")
    parser.add_argument("-f", "--format", dest="format", default=None, metavar="FORMAT",
                        help="the format for the output file [xls|xlsx] (default: xlsx, "
                             "or the template's format).")
    parser.add_argument("-e", "--encoding", dest="encoding", default=DEFAULT_ENCODING,
                        help="the text encoding of inputfile (default: %(default)s).")
    parser.add_argument("-t", dest="text_only", action="store_true",
                        help="force all cells in output worksheet to be of type Text")
    parser.add_argument("-q", dest="ignore_quotes", action="store_true",
                        help="ignore double-quotes")
    parser.add_argument("-r", dest="resize_columns", action="store_true",
                        help="resize width of worksheet columns to fit data")
    parser.add_argument("-v", dest="verbosity", action="count", default=0,
                        help="increase debug message verbosity")
    return parser


def unescape(value: str) -> str:
    """Decode backslash escapes such as ``\\t`` or ``\\x1f`` in a delimiter."""
    return value.encode("latin-1", "backslashreplace").decode("unicode_escape")


def verbosity_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int) -> None:
    logging.basicConfig(level=verbosity_level(verbosity), format=LOG_FORMAT, force=True)


def resolve_format(requested: Optional[str], template: Optional[Path]) -> WorkbookFormat:
    if requested:
        return WorkbookFormat.from_name(requested)
    if template is not None and template.exists():
        fmt = WorkbookFormat.from_suffix(template.suffix)
        if fmt is not None:
            return fmt
    return WorkbookFormat.XLSX


def default_output_path(input_path: Path, fmt: WorkbookFormat) -> Path:
    return input_path.with_suffix(fmt.extension)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    show_help = False
    # this is the only required argument
    if not args.input or not args.input.strip():
        show_help = True

    template = Path(args.template) if args.template else None
    fmt: Optional[WorkbookFormat] = None
    try:
        fmt = resolve_format(args.format, template)
    except ValueError:
        print(f"Unrecognized format: {args.format}")
        show_help = True

    if show_help or fmt is None:
        parser.print_help()
        return EXIT_OK

    try:
        column_delimiter = unescape(args.column_delimiter)
        line_delimiter = unescape(args.line_delimiter)
    except UnicodeDecodeError as e:
        parser.error(f"invalid escape sequence in delimiter: {e.reason}")

    configure_logging(args.verbosity)

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else default_output_path(input_path, fmt)

    logger.debug("outputFile: \t\t%s", args.output)
    logger.debug("inputFile: \t\t%s", input_path)
    logger.debug("columnDelimiter: \t%r", column_delimiter)
    logger.debug("lineDelimiter: \t%r", line_delimiter)
    logger.debug("format: \t\t%s", fmt.value)
    logger.debug("textOnly: \t\t%s", args.text_only)
    logger.debug("ignoreQuotes: \t\t%s", args.ignore_quotes)
    logger.debug("resizeColumns: \t\t%s", args.resize_columns)
    logger.debug("template: \t\t%s", template)
    logger.debug("templateSheet: \t\t%d", args.template_sheet)
    logger.debug("templateExampleRow: \t%d", args.template_example_row)
    logger.debug("skipRows: \t\t%s", args.skip_rows)
    logger.debug("outputFile (calcd): \t%s", output_path)

    options = ConversionOptions(
        input_path=input_path,
        output_path=output_path,
        output_format=fmt,
        column_delimiter=column_delimiter,
        line_delimiter=line_delimiter,
        honor_quotes=not args.ignore_quotes,
        force_text=args.text_only,
        resize_columns=args.resize_columns,
        template_path=template,
        template_sheet=args.template_sheet,
        template_example_row=args.template_example_row,
        skip_rows=args.skip_rows,
        encoding=args.encoding,
    )

    try:
        result = convert(options)
    except (
        OSError,
        AssemblerError,
        FieldSplitError,
        CellWriteError,
        TemplateCopyError,
        WorkbookIOError,
    ) as e:
        logger.error("conversion failed: %s", e)
        return EXIT_ERROR

    logger.info("%d row(s) written to %s", result.rows_written, result.output_path)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
