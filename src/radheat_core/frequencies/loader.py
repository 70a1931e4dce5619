# src/radheat_core/frequencies/loader.py
import logging
from pathlib import Path
from typing import List, Union

from ..config.values import parse_complex_literal
from .exceptions import InvalidInputFile

logger = logging.getLogger(__name__)


def load_frequency_file(path: Union[str, Path]) -> List[complex]:
    """
    Reads a text file holding one real or complex frequency per line.

    Blank lines and '#' comments are skipped. The returned list preserves file order.

    Raises:
        InvalidInputFile: if the file cannot be read or a line is not a frequency.
    """
    source = Path(path)
    if not source.is_file():
        raise InvalidInputFile(details=f"Frequency file not found at path: {source}", file_path=source)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInputFile(details=f"Could not read file: {e}", file_path=source) from e

    frequencies: List[complex] = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            frequencies.append(parse_complex_literal(line))
        except ValueError as e:
            raise InvalidInputFile(
                details=f"'{line}' is not a real or complex number ({e}).",
                file_path=source,
                line_number=line_number,
            ) from e

    if not frequencies:
        raise InvalidInputFile(details="The file contains no frequencies.", file_path=source)
    logger.info(f"Read {len(frequencies)} frequencies from file {source}.")
    return frequencies
