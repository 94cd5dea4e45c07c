"""Output locations and the column-aligned global data table."""

from __future__ import annotations

import numbers
import os
from pathlib import Path
from typing import Iterable, Sequence

__all__ = [
    "output_directory",
    "global_data_filename",
    "global_data_columns",
    "write_global_data_header",
    "append_global_data_row",
]

_SHEAR_MODES = frozenset({"stepShear", "surfaceShear", "continuousShear"})
_SPACING = 26
_HEADER_SECOND_WIDTH = 25
_ROW_SECOND_WIDTH = 30

_BASE_COLUMNS = (
    "step", "totalEnergy", "contactEnergy", "shearVirial", "pressureVirial",
    "maxResidual", "meanResidual", "residualL2Norm",
    "pressure_BW", "pressure_BB", "KWpressure_BW",
    "shearStress_BW", "shearStress_BB", "shearStress_BB_CSxy", "KWshearStress_BW",
    "boxArea", "materialArea", "phi", "phi_B", "e0_W", "e1_W", "e0_B", "e1_B",
    "Fh_B", "Fv_B", "Fh_B_CSxy", "Fv_B_CSxy",
    "LXref_B", "LYref_B", "LX_B", "LY_B",
    "DPOverDe0_BW", "DSOverDe1_BW", "DPOverDe0_BB", "DSOverDe1_BB",
)
_WALL_COLUMNS = (
    "pressure_WW", "shearStress_WW", "Fh_W", "Fv_W",
    "topForce", "botForce", "rightForce", "leftForce",
)
_GD_COLUMNS = ("dt", "defRate")
_NTS_COLUMNS = ("penalty",)


def output_directory(output_folder, run_mode, output_subfolder, starting_step) -> Path:
    """Directory that the dump files of a run go into."""
    folder = Path(output_folder)
    if run_mode not in _SHEAR_MODES:
        return folder
    if output_subfolder == "none":
        return folder / f"step-{int(starting_step)}"
    return folder / output_subfolder


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def global_data_filename(name, time_step, split_every, purpose) -> str:
    """File name of the global data table for a running block or the final table."""
    if purpose == "running":
        first = _trunc_div(int(time_step), int(split_every)) * int(split_every)
        last = first + int(split_every) - 1
        return f"{name}-steps-{first}-{last}.txt"
    if purpose == "final":
        return "final-data.txt"
    raise ValueError(f"unknown global data purpose: {purpose!r}")


def global_data_columns(boundary_type, solver, contact_method) -> list[str]:
    """Column names of the global data table for the given run settings."""
    columns = list(_BASE_COLUMNS)
    if boundary_type == "walls":
        columns.extend(_WALL_COLUMNS)
    if solver == "GD":
        columns.extend(_GD_COLUMNS)
    if contact_method == "nts":
        columns.extend(_NTS_COLUMNS)
    columns.append("interactions")
    return columns


def _align(items: Sequence[str], second_width: int) -> str:
    parts = []
    for index, item in enumerate(items):
        if index == 0:
            parts.append(item)
        elif index == 1:
            parts.append(item.rjust(second_width))
        else:
            parts.append(item.rjust(_SPACING))
    return "".join(parts) + "\n"


def _format_value(value) -> str:
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return "%.15g" % float(value)


def write_global_data_header(path, columns: Iterable[str]) -> None:
    """Create (or truncate) the table at path and write its header line."""
    with open(os.fspath(path), "w", encoding="utf-8") as handle:
        handle.write(_align(list(columns), _HEADER_SECOND_WIDTH))


def append_global_data_row(path, values: Iterable) -> None:
    """Append one row: integers as written, reals with 15 significant digits."""
    formatted = [_format_value(value) for value in values]
    with open(os.fspath(path), "a", encoding="utf-8") as handle:
        handle.write(_align(formatted, _ROW_SECOND_WIDTH))