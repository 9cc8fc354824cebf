import csv
from io import BytesIO, StringIO
from typing import Iterable, Sequence

from openpyxl import Workbook


def write_rows_to_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> StringIO:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(list(headers))
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    buffer.seek(0)
    return buffer


def write_rows_to_xlsx(headers: Sequence[str], rows: Iterable[Sequence], title: str = "Data") -> BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    ws.append(list(headers))
    for row in rows:
        ws.append(list(row))
    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
