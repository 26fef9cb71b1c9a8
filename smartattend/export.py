import logging
import os

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import PatternFill, Alignment, Font, Border, Side
from openpyxl.worksheet.page import PageMargins

from smartattend.constants import EXPORT_COLUMNS, RECORDS_FOLDER
from smartattend.errors import ValidationError
from smartattend.ledger import as_iso_date

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["No", "Name", "Roll No", "Class", "Date", "Status", "Confidence", "Time"]


def export_students_csv(roster, folder, today):
    students = roster.all()
    if not students:
        raise ValidationError("No students to export")

    rows = [
        [s.id, s.name, s.roll_no, s.student_class, s.parent_phone]
        for s in students
    ]
    os.makedirs(folder, exist_ok=True)
    file_path = os.path.join(folder, f"students_export_{as_iso_date(today)}.csv")

    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    df.to_csv(file_path, index=False)
    logger.info("Exported %d students to %s", len(rows), file_path)
    return file_path


def _report_rows(roster, ledger, day):
    session = ledger.session_for_date(day)
    entries = {r.student_id: r for r in session.records} if session else {}

    data = []
    for student in roster.all():
        entry = entries.get(student.id)
        if entry is not None and entry.is_present:
            status = "Present"
            confidence = f"{entry.confidence:.1f}%"
            time_text = entry.timestamp[11:16]
        else:
            status = "Absent"
            confidence = ""
            time_text = entry.timestamp[11:16] if entry is not None else ""
        data.append([
            student.name,
            student.roll_no,
            student.student_class,
            day,
            status,
            confidence,
            time_text,
        ])

    data.sort(key=lambda x: x[0])
    return [[i] + row for i, row in enumerate(data, 1)]


def export_attendance_report(roster, ledger, day, folder=RECORDS_FOLDER):
    day = as_iso_date(day)
    if not len(roster):
        raise ValidationError("No students to export")

    os.makedirs(folder, exist_ok=True)
    file_path = os.path.join(folder, f"attendance_{day}.xlsx")

    df = pd.DataFrame(_report_rows(roster, ledger, day), columns=REPORT_COLUMNS)
    df.to_excel(file_path, index=False, engine="openpyxl")

    wb = load_workbook(file_path)
    ws = wb.active
    ws.title = day

    header_fill_yellow = PatternFill("solid", start_color="FFFF00")
    header_fill_gray = PatternFill("solid", start_color="D3D3D3")
    header_fill_green = PatternFill("solid", start_color="9BBB59")
    header_fill_blue = PatternFill("solid", start_color="87CEEB")
    absent_fill = PatternFill("solid", start_color="F4CCCC")
    data_fill = PatternFill("solid", start_color="F0F8FF")

    header_font = Font(bold=True, size=14)
    data_font = Font(size=12)

    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    for col_idx, header in enumerate(REPORT_COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = border

        if header == "No":
            cell.fill = header_fill_yellow
        elif header == "Status":
            cell.fill = header_fill_green
        elif header in ["Confidence", "Time"]:
            cell.fill = header_fill_blue
        else:
            cell.fill = header_fill_gray

    status_col = REPORT_COLUMNS.index("Status") + 1
    for row in ws.iter_rows(min_row=2, max_row=ws.max_row, min_col=1, max_col=len(REPORT_COLUMNS)):
        absent = row[status_col - 1].value == "Absent"
        for cell in row:
            cell.font = data_font
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.fill = absent_fill if absent else data_fill
            cell.border = border

    for letter, width in zip("ABCDEFGH", [5, 25, 12, 12, 12, 12, 12, 10]):
        ws.column_dimensions[letter].width = width

    ws.page_margins = PageMargins(
        left=0.3, right=0.3,
        top=0.4, bottom=0.4,
        header=0.3, footer=0.3
    )
    ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
    ws.page_setup.paperSize = ws.PAPERSIZE_A4
    ws.page_setup.fitToWidth = 1
    ws.page_setup.fitToHeight = 0

    wb.save(file_path)
    logger.info("Exported attendance report for %s to %s", day, file_path)
    return file_path
