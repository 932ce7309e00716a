"""Export of article collections."""

from .csv_export import export_filename, to_csv, write_csv

__all__ = ["to_csv", "export_filename", "write_csv"]
