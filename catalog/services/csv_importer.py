import csv
import io
from typing import Dict, List, Optional

REQUIRED_COLUMNS = ("name", "category")
OPTIONAL_COLUMNS = ("imageurl", "comment")


class CSVImportError(ValueError):
    """Raised when an uploaded CSV cannot be turned into inventory rows."""


class CSVImporter:
    """
    Converts an uploaded CSV document into insertable inventory rows.
    Header names are matched case-insensitively; rows without a name or
    category are skipped.
    """

    @staticmethod
    def parse(content: bytes, encoding: str = "utf-8-sig") -> List[Dict[str, Optional[str]]]:
        try:
            text = content.decode(encoding)
        except UnicodeDecodeError as e:
            raise CSVImportError(f"CSV is not valid {encoding}: {e}") from e

        reader = csv.DictReader(io.StringIO(text))
        if not reader.fieldnames:
            raise CSVImportError("CSV is empty or invalid.")

        items = []
        for record in reader:
            row = {
                (key or "").strip().lower(): (value or "").strip()
                for key, value in record.items()
                if isinstance(value, str)
            }
            if not all(row.get(column) for column in REQUIRED_COLUMNS):
                continue

            item = {column: row[column] for column in REQUIRED_COLUMNS}
            for column in OPTIONAL_COLUMNS:
                item[column] = row.get(column) or None
            items.append(item)

        if not items:
            raise CSVImportError("CSV is empty or invalid.")
        return items
