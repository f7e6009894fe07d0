from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Union

from tiasset.core.errors import AssetBuildError

log = logging.getLogger("tiasset.output")

_BYTES_PER_LINE = 16


class OutputType(str, Enum):
    # raw binary asset with no header
    BINARY = "binary"
    # fasmg compatible assembly listing
    ASSEMBLY = "assembly"
    # C header file
    C = "c"

    @property
    def extension(self) -> str:
        return {OutputType.BINARY: ".bin", OutputType.ASSEMBLY: ".asm", OutputType.C: ".h"}[self]


def to_identifier(name: str) -> str:
    ident = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if not ident or ident[0].isdigit():
        ident = "_" + ident
    return ident


def _hex_rows(data: bytes):
    for start in range(0, len(data), _BYTES_PER_LINE):
        yield ", ".join(f"0x{b:02X}" for b in data[start:start + _BYTES_PER_LINE])


def render_assembly(name: str, data: bytes) -> str:
    label = to_identifier(name)
    lines = [f"; {label}: {len(data)} bytes", f"{label}:"]
    lines.extend(f"\tdb\t{row}" for row in _hex_rows(data))
    return "\n".join(lines) + "\n"


def render_c(name: str, data: bytes) -> str:
    ident = to_identifier(name)
    guard = f"{ident.upper()}_H"
    body = ",\n".join(f"    {row}" for row in _hex_rows(data))
    return (
        f"#ifndef {guard}\n"
        f"#define {guard}\n"
        "\n"
        f"#define {ident.upper()}_SIZE {len(data)}\n"
        "\n"
        f"static const unsigned char {ident}[{len(data)}] = {{\n"
        f"{body}\n"
        "};\n"
        "\n"
        f"#endif /* {guard} */\n"
    )


def render(output_type: OutputType, name: str, data: bytes) -> bytes:
    if output_type == OutputType.BINARY:
        return data
    if output_type == OutputType.ASSEMBLY:
        return render_assembly(name, data).encode("utf-8")
    return render_c(name, data).encode("utf-8")


def resolve_output_path(output: Union[str, Path], output_type: OutputType, default_stem: str) -> Path:
    """A directory gets `<default_stem><ext>` inside it; anything else is the file itself."""
    path = Path(output)
    if path.is_dir():
        return path / f"{default_stem}{output_type.extension}"
    return path


def write_asset(output: Union[str, Path], data: bytes, output_type: OutputType, default_stem: str) -> Path:
    path = resolve_output_path(output, output_type, default_stem)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(render(output_type, path.stem, data))
    except OSError as exc:
        raise AssetBuildError(f"Failed to write output file {path}: {exc}") from exc
    log.info("Wrote %s asset (%d bytes of data) to %s", output_type.value, len(data), path)
    return path
