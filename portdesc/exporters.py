"""
Export registry entries to various formats.
"""

import csv
import json
from typing import Iterable, Union
from pathlib import Path

from .models import PortDescEntry


class RegistryExporter:
    """Export registry entries to different formats"""

    @staticmethod
    def export_to_csv(entries: Iterable[PortDescEntry],
                      filename: Union[str, Path],
                      include_header: bool = True) -> int:
        """
        Export entries to CSV file using the IANA column names.

        Args:
            entries: Iterable of PortDescEntry objects
            filename: Output CSV filename
            include_header: Whether to include CSV header row

        Returns:
            Number of entries written
        """
        count = 0
        with open(filename, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            if include_header:
                writer.writerow(PortDescEntry.csv_header())

            for entry in entries:
                writer.writerow(entry.to_csv_row())
                count += 1

        return count

    @staticmethod
    def export_to_json(entries: Iterable[PortDescEntry],
                       filename: Union[str, Path],
                       pretty: bool = True) -> int:
        """
        Export entries to JSON file.

        Args:
            entries: Iterable of PortDescEntry objects
            filename: Output JSON filename
            pretty: Whether to use pretty formatting

        Returns:
            Number of entries written
        """
        entry_list = [entry.to_dict() for entry in entries]

        with open(filename, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(entry_list, f, indent=2)
            else:
                json.dump(entry_list, f)

        return len(entry_list)

    @staticmethod
    def export_to_jsonlines(entries: Iterable[PortDescEntry],
                            filename: Union[str, Path]) -> int:
        """
        Export entries to JSON Lines format (one JSON object per line).

        Returns:
            Number of entries written
        """
        count = 0
        with open(filename, 'w', encoding='utf-8') as f:
            for entry in entries:
                f.write(json.dumps(entry.to_dict()) + '\n')
                count += 1

        return count


def export_csv(entries: Iterable[PortDescEntry],
               filename: Union[str, Path],
               include_header: bool = True) -> int:
    """
    Convenience function to export entries to CSV.

    Returns:
        Number of entries written
    """
    return RegistryExporter.export_to_csv(entries, filename, include_header)


def export_json(entries: Iterable[PortDescEntry],
                filename: Union[str, Path],
                pretty: bool = True) -> int:
    """
    Convenience function to export entries to JSON.

    Returns:
        Number of entries written
    """
    return RegistryExporter.export_to_json(entries, filename, pretty)


def export_jsonlines(entries: Iterable[PortDescEntry],
                     filename: Union[str, Path]) -> int:
    """
    Convenience function to export entries to JSON Lines format.

    Returns:
        Number of entries written
    """
    return RegistryExporter.export_to_jsonlines(entries, filename)
