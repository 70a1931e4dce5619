# src/radheat_core/sweep/output.py
"""
Result sinks: consumers of the per-frequency result vectors.

The engine calls `begin` once before the first frequency, `accept` once per
frequency in evaluation order and `end` once after the last one (also when the
sweep is aborted). Sinks write or keep results; the engine does not.
"""
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import List, Protocol, Sequence, Union, runtime_checkable

from ..constants import FLUX_SUFFIX
from .results import FrequencyResult

logger = logging.getLogger(__name__)


@runtime_checkable
class ResultSink(Protocol):
    def begin(self, transformation_names: Sequence[str]) -> None:
        ...

    def accept(self, result: FrequencyResult) -> None:
        ...

    def end(self) -> None:
        ...


def format_frequency(omega: complex) -> str:
    """A compact, file-name safe rendering of a frequency ('3e+14', '2+0.5j')."""
    omega = complex(omega)
    if omega.imag == 0.0:
        return f"{omega.real:g}"
    return f"{omega.real:g}{omega.imag:+g}j"


def _format_value(value: float) -> str:
    return "nan" if math.isnan(value) else f"{value:.8e}"


class ResultCollector:
    """Keeps every result in memory, in the order received."""

    def __init__(self):
        self.results: List[FrequencyResult] = []

    def begin(self, transformation_names: Sequence[str]) -> None:
        self.results = []

    def accept(self, result: FrequencyResult) -> None:
        self.results.append(result)

    def end(self) -> None:
        pass


class ByOmegaWriter:
    """
    Writes the frequency-resolved output file.

    The file starts with '#' header lines naming the columns, followed by one line
    per (frequency, transformation): `re(omega) im(omega) transform value`.
    Unavailable values are written as 'nan'. Each frequency is flushed as soon as
    it is complete, so an aborted run leaves every finished frequency on disk.
    """

    def __init__(self, path: Union[str, Path], geometry_name: str = ""):
        self.path = Path(path)
        self.geometry_name = geometry_name
        self._handle = None

    def begin(self, transformation_names: Sequence[str]) -> None:
        self._handle = self.path.open("w", encoding="utf-8")
        self._handle.write(f"# radheat frequency-resolved output, {datetime.now().isoformat(timespec='seconds')}\n")
        if self.geometry_name:
            self._handle.write(f"# geometry: {self.geometry_name}\n")
        self._handle.write(f"# transformations: {' '.join(transformation_names)}\n")
        self._handle.write("# columns:\n")
        self._handle.write("# 1 2 real, imaginary part of angular frequency (rad/s)\n")
        self._handle.write("# 3   transformation name\n")
        self._handle.write("# 4   spectral power (W s/rad)\n")
        self._handle.flush()
        logger.info(f"Writing frequency-resolved output to '{self.path}'.")

    def accept(self, result: FrequencyResult) -> None:
        omega = complex(result.frequency)
        for name, value in zip(result.transformation_names, result.values):
            self._handle.write(f"{omega.real:.8e} {omega.imag:.8e} {name} {_format_value(float(value))}\n")
        self._handle.flush()

    def end(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


class FluxWriter:
    """
    Writes one spatially-resolved flux file per frequency, named
    `<stem>.<omega>.flux` in `directory`, with one line per (transformation, body):
    `transform label x y z power`.

    Results without flux records are skipped.
    """

    def __init__(self, directory: Union[str, Path], stem: str):
        self.directory = Path(directory)
        self.stem = stem
        self.written: List[Path] = []

    def path_for(self, omega: complex) -> Path:
        return self.directory / f"{self.stem}.{format_frequency(omega)}{FLUX_SUFFIX}"

    def begin(self, transformation_names: Sequence[str]) -> None:
        self.written = []

    def accept(self, result: FrequencyResult) -> None:
        if result.flux is None:
            return
        path = self.path_for(result.frequency)
        with path.open("w", encoding="utf-8") as f:
            f.write(f"# omega = {format_frequency(result.frequency)} rad/s\n")
            f.write("# transform label x y z power\n")
            for name, records in zip(result.transformation_names, result.flux):
                for rec in records:
                    x, y, z = (float(c) for c in rec.position)
                    f.write(f"{name} {rec.label} {x:.8e} {y:.8e} {z:.8e} {_format_value(float(rec.power))}\n")
        self.written.append(path)
        logger.debug(f"Wrote flux file '{path}'.")

    def end(self) -> None:
        if self.written:
            logger.info(f"Wrote {len(self.written)} flux file(s) to '{self.directory}'.")
