"""
Spreadsheet import of inventory rows.

The first worksheet is read, its first row is treated as the header and the
columns are taken positionally: material, specification, quantity, density.
"""
import logging
import zipfile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

COLUMNS = ('material', 'specification', 'quantity', 'density')


class SpreadsheetImportError(Exception):
    pass


def _cell_value(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, float) and value == int(value):
        return int(value)
    return value


def parse_inventory_workbook(file):
    """
    Parse an uploaded .xlsx into inventory rows ready for /inventory/import.

    Rows missing material, specification or quantity are dropped.

    Raises:
        SpreadsheetImportError: the file is not a readable workbook
    """
    try:
        workbook = openpyxl.load_workbook(file, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as error:
        raise SpreadsheetImportError(f'Could not read spreadsheet: {error}') from error

    try:
        sheet = workbook.worksheets[0]
        rows = []
        skipped = 0
        for values in sheet.iter_rows(min_row=2, max_col=len(COLUMNS), values_only=True):
            values = list(values) + [None] * (len(COLUMNS) - len(values))
            row = dict(zip(COLUMNS, (_cell_value(v) for v in values)))
            if row['material'] and row['specification'] and row['quantity']:
                rows.append(row)
            else:
                skipped += 1
    finally:
        workbook.close()

    logger.info(f'Parsed {len(rows)} inventory rows from spreadsheet ({skipped} skipped)')
    return rows
