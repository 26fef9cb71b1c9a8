import io
import logging

import pandas as pd

from smartattend.constants import IMPORT_COLUMNS
from smartattend.errors import ValidationError, DuplicateRollNumber
from smartattend.models import ImportResult

logger = logging.getLogger(__name__)

# rows built by hand carry no line number; number them as if the header sat on line 1
FIRST_DATA_ROW = 2


def _field_count(values):
    count = 0
    for value in values:
        if pd.isna(value):
            break
        count += 1
    return count


def read_student_table(filepath):
    """Read a student CSV into row dicts keyed by the lower-cased header.

    Every row carries the file ``line`` it came from. A row whose field
    count differs from the header's carries an ``error`` instead of values.
    """
    try:
        with open(filepath, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except OSError as e:
        raise ValidationError(f"Error reading CSV file: {e}") from e

    lines = text.splitlines()
    if not any(line.strip() for line in lines):
        raise ValidationError("CSV file must have at least a header and one data row")

    # no header row and more names than any line has fields, so pandas never
    # folds leading fields into an index and short rows are padded with NaN
    width = max(line.count(",") + 1 for line in lines)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            index_col=False,
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ValidationError(f"Error parsing CSV file: {e}") from e

    line_numbers = [n for n, line in enumerate(lines, 1) if line.strip()]

    header_values = df.iloc[0].tolist()
    header_width = _field_count(header_values)
    headers = [str(h).strip().lower() for h in header_values[:header_width]]
    missing = [c for c in IMPORT_COLUMNS if c not in headers]
    if missing:
        raise ValidationError(f"Missing required columns: {', '.join(missing)}")
    if len(df) < 2:
        raise ValidationError("CSV file must have at least a header and one data row")

    positions = {column: headers.index(column) for column in IMPORT_COLUMNS}
    rows = []
    for i in range(1, len(df)):
        values = df.iloc[i].tolist()
        line = line_numbers[i] if i < len(line_numbers) else i + 1
        found = _field_count(values)
        if found != header_width:
            rows.append({"line": line, "error": f"Expected {header_width} fields, found {found}"})
            continue
        row = {column: str(values[pos]).strip() for column, pos in positions.items()}
        row["line"] = line
        rows.append(row)
    return rows


def import_students(roster, rows):
    result = ImportResult()

    for offset, row in enumerate(rows):
        row_no = row.get("line", FIRST_DATA_ROW + offset)
        if "error" in row:
            result.errors.append(f"Row {row_no}: {row['error']}")
            continue

        name = row.get("name", "")
        roll_no = row.get("roll no", "")
        student_class = row.get("class", "")
        parent_phone = row.get("parent phone", "")

        if not name or not roll_no or not student_class or not parent_phone:
            result.errors.append(f"Row {row_no}: Missing required fields")
            continue

        try:
            student = roster.add_student(name, roll_no, student_class, parent_phone)
        except DuplicateRollNumber as e:
            result.errors.append(f"Row {row_no}: Roll number {e.roll_no} already exists")
            continue
        except ValidationError as e:
            result.errors.append(f"Row {row_no}: {e}")
            continue

        result.imported.append(student)

    if result.errors:
        logger.warning("Import completed with %d errors: %s", len(result.errors), result.errors)
    logger.info("Successfully imported %d students", result.success_count)
    return result
