from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Protocol, Sequence, Union

from .errors import RenderError

if TYPE_CHECKING:
    from .model import Bound, Type

DEFAULT_INDENT = "    "


class Sink(Protocol):
    def write(self, text: str) -> object: ...


@dataclass
class Formatter:
    """
    Indentation- and brace-aware writer shared by every renderer during one
    render pass. Lines are indented lazily: the prefix is only emitted when
    a non-empty line starts, so blank lines never carry trailing spaces.
    """
    sink: Sink = field(default_factory=io.StringIO)
    indent_unit: str = DEFAULT_INDENT
    _level: int = 0
    _line_start: bool = True

    @property
    def level(self) -> int:
        return self._level

    def is_start_of_line(self) -> bool:
        return self._line_start

    def write_raw(self, text: str) -> None:
        if not text:
            return
        lines = text.split("\n")
        trailing_newline = text.endswith("\n")
        if trailing_newline:
            lines.pop()

        out: list[str] = []
        should_indent = self._line_start
        for i, line in enumerate(lines):
            if i:
                out.append("\n")
            if should_indent and line:
                out.append(self.indent_unit * self._level)
            should_indent = True
            out.append(line)
        if trailing_newline:
            out.append("\n")
        self._emit("".join(out))

    def writeln(self, text: str = "") -> None:
        self.write_raw(text + "\n")

    def indent(self) -> "_Indent":
        return _Indent(self)

    def scoped_block(
        self,
        body: Callable[["Formatter"], None],
        header: str | None = None,
        suffix: str = "",
    ) -> None:
        """Write ``header {``, run ``body`` one level deeper, then ``}suffix``."""
        if header:
            self.write_raw(header)
        if not self.is_start_of_line():
            self.write_raw(" ")
        self.write_raw("{\n")
        with self.indent():
            body(self)
        self.write_raw("}" + suffix + "\n")

    def _emit(self, chunk: str) -> None:
        if not chunk:
            return
        try:
            self.sink.write(chunk)
        except (OSError, ValueError) as e:
            raise RenderError(f"output sink rejected write: {e}") from e
        self._line_start = chunk.endswith("\n")


class _Indent:
    def __init__(self, fmt: Formatter) -> None:
        self.fmt = fmt

    def __enter__(self) -> None:
        self.fmt._level += 1

    def __exit__(self, exc_type, exc, tb) -> None:
        self.fmt._level -= 1


def _render_type(ty: Union[str, "Type"], fmt: Formatter) -> None:
    if isinstance(ty, str):
        fmt.write_raw(ty)
    else:
        ty.render(fmt)


def fmt_generics(generics: Sequence[Union[str, "Type"]], fmt: Formatter) -> None:
    if not generics:
        return
    fmt.write_raw("<")
    for i, ty in enumerate(generics):
        if i:
            fmt.write_raw(", ")
        _render_type(ty, fmt)
    fmt.write_raw(">")


def fmt_bound_rhs(tys: Sequence[Union[str, "Type"]], fmt: Formatter) -> None:
    for i, ty in enumerate(tys):
        if i:
            fmt.write_raw(" + ")
        _render_type(ty, fmt)


def fmt_bounds(bounds: Sequence["Bound"], fmt: Formatter) -> None:
    if not bounds:
        return
    fmt.write_raw("\n")
    first, *rest = bounds
    fmt.write_raw(f"where {first.name}: ")
    fmt_bound_rhs(first.bound, fmt)
    fmt.write_raw(",\n")
    for bound in rest:
        # aligned under the first bound's name
        fmt.write_raw(f"      {bound.name}: ")
        fmt_bound_rhs(bound.bound, fmt)
        fmt.write_raw(",\n")
