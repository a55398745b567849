"""CSV exporter."""

import csv
import logging
from pathlib import Path

from rolodex.domain.errors import ExportFailedError

logger = logging.getLogger(__name__)


class CsvExporter:
    """Writes export rows to a CSV file, one list per line. Empty rows separate persons."""

    def export(self, path: Path, rows: list[list[str]]) -> None:
        path = Path(path).expanduser()
        try:
            with path.open("w", newline="", encoding="utf-8") as f:
                csv.writer(f).writerows(rows)
        except OSError as e:
            logger.warning("Export to %s failed: %s", path, e)
            raise ExportFailedError() from e
        logger.info("Exported %d rows to %s", len(rows), path)
