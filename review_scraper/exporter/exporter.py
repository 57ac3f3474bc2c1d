"""Flatten page records into review rows and write them as CSV or JSON."""
import logging
from itertools import zip_longest
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from ..domain import ReviewPageRecord
from ..errors import ExportError, PersistenceError
from ..fs import atomic_write_text

FIELDS = ("title", "content")


class ReviewExporter:
    """Writes the review dataset to a single output file."""
    
    def __init__(
        self,
        output_path: str | Path = "review.csv",
        output_format: str = "csv",
        logger: Optional[logging.Logger] = None
    ):
        self.output_path = Path(output_path)
        self.output_format = output_format
        self.logger = logger or logging.getLogger("review_scraper")
    
    @staticmethod
    def flatten(records: Iterable[ReviewPageRecord]) -> list[dict]:
        """
        One row per (title, content) pair, pages in order.
        
        When a page has more titles than contents (or the reverse) the
        missing side of the trailing rows is an empty string.
        """
        rows = []
        for record in records:
            for title, content in zip_longest(record.titles, record.content, fillvalue=""):
                rows.append({"title": title, "content": content})
        return rows
    
    def encode(self, rows: list[dict]) -> str:
        """
        Encode rows with exactly the ``title`` and ``content`` columns.
        
        Raises:
            ExportError: If a value is not a string or the format is unknown
        """
        for index, row in enumerate(rows):
            for name in FIELDS:
                if not isinstance(row.get(name), str):
                    raise ExportError(
                        f"Row {index}: field {name!r} must be a string, "
                        f"got {type(row.get(name)).__name__}"
                    )
        
        frame = pd.DataFrame(rows, columns=list(FIELDS))
        
        try:
            if self.output_format == "csv":
                return frame.to_csv(index=False)
            if self.output_format == "json":
                return frame.to_json(orient="records", force_ascii=False)
        except (ValueError, TypeError) as e:
            raise ExportError(f"Cannot encode reviews as {self.output_format}: {e}") from e
        
        raise ExportError(f"Unsupported output format: {self.output_format}")
    
    def export(self, records: Iterable[ReviewPageRecord]) -> Path:
        """
        Flatten, encode and write the dataset, replacing any previous output.
        
        Returns:
            Path of the written file
            
        Raises:
            ExportError: If encoding fails
            PersistenceError: If the file cannot be written
        """
        rows = self.flatten(records)
        text = self.encode(rows)
        
        try:
            atomic_write_text(self.output_path, text)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.output_path}: {e}") from e
        
        self.logger.info(f"Wrote {len(rows)} reviews to {self.output_path}")
        return self.output_path
