from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .formatter import Formatter, fmt_bounds, fmt_generics
from .model import Bound, Docs, Field, Type, TypeLike, as_type


@dataclass
class Block:
    """A braced block of lines, e.g. the body of an ``if`` or ``match`` arm."""
    header: str = ""
    trailer: str = ""
    body: list[Body] = field(default_factory=list)

    def line(self, line: str) -> Block:
        self.body.append(line)
        return self

    def push_block(self, block: Block) -> Block:
        self.body.append(block)
        return self

    def after(self, trailer: str) -> Block:
        """Text written right after the closing brace, e.g. ``;`` or ``)``."""
        self.trailer = trailer
        return self

    def render(self, fmt: Formatter) -> None:
        fmt.scoped_block(lambda f: render_body(self.body, f), header=self.header, suffix=self.trailer)


Body = Union[str, Block]


def render_body(body: list[Body], fmt: Formatter) -> None:
    for part in body:
        if isinstance(part, Block):
            part.render(fmt)
        else:
            fmt.write_raw(f"{part}\n")


@dataclass
class Function:
    name: str
    docs: Docs | None = None
    allowed: str | None = None
    visibility: str | None = None
    generics: list[str] = field(default_factory=list)
    self_arg: str | None = None
    args: list[Field] = field(default_factory=list)
    ret_type: Type | None = None
    bounds: list[Bound] = field(default_factory=list)
    body: list[Body] | None = None
    attributes: list[str] = field(default_factory=list)
    abi: str | None = None
    is_async: bool = False

    def doc(self, text: str) -> Function:
        self.docs = Docs(text)
        return self

    def allow(self, lint: str) -> Function:
        self.allowed = lint
        return self

    def vis(self, vis: str) -> Function:
        self.visibility = vis
        return self

    def generic(self, name: str) -> Function:
        self.generics.append(name)
        return self

    def arg_self(self) -> Function:
        self.self_arg = "self"
        return self

    def arg_ref_self(self) -> Function:
        self.self_arg = "&self"
        return self

    def arg_mut_self(self) -> Function:
        self.self_arg = "&mut self"
        return self

    def arg(self, name: str, ty: TypeLike) -> Function:
        self.args.append(Field(name, as_type(ty)))
        return self

    def ret(self, ty: TypeLike) -> Function:
        self.ret_type = as_type(ty)
        return self

    def bound(self, name: str, ty: TypeLike) -> Function:
        self.bounds.append(Bound(name, [as_type(ty)]))
        return self

    def line(self, line: str) -> Function:
        if self.body is None:
            self.body = []
        self.body.append(line)
        return self

    def push_block(self, block: Block) -> Function:
        if self.body is None:
            self.body = []
        self.body.append(block)
        return self

    def attr(self, attribute: str) -> Function:
        self.attributes.append(attribute)
        return self

    def set_async(self, is_async: bool = True) -> Function:
        self.is_async = is_async
        return self

    def extern_abi(self, abi: str) -> Function:
        self.abi = abi
        return self

    def render(self, fmt: Formatter, is_trait: bool = False) -> None:
        if is_trait and self.visibility:
            raise ValueError(f"trait fn `{self.name}` cannot have a visibility modifier")
        if not is_trait and self.body is None:
            raise ValueError(f"fn `{self.name}` outside a trait must define a body")

        if self.docs:
            self.docs.render(fmt)
        if self.allowed:
            fmt.write_raw(f"#[allow({self.allowed})]\n")
        for attr in self.attributes:
            fmt.write_raw(f"#[{attr}]\n")
        if self.visibility:
            fmt.write_raw(f"{self.visibility} ")
        if self.abi:
            fmt.write_raw(f'extern "{self.abi}" ')
        if self.is_async:
            fmt.write_raw("async ")

        fmt.write_raw(f"fn {self.name}")
        fmt_generics(self.generics, fmt)
        fmt.write_raw("(")
        if self.self_arg:
            fmt.write_raw(self.self_arg)
        for i, arg in enumerate(self.args):
            if i or self.self_arg:
                fmt.write_raw(", ")
            fmt.write_raw(f"{arg.name}: ")
            arg.ty.render(fmt)
        fmt.write_raw(")")
        if self.ret_type:
            fmt.write_raw(" -> ")
            self.ret_type.render(fmt)
        fmt_bounds(self.bounds, fmt)

        if self.body is None:
            fmt.write_raw(";\n")
        else:
            body = self.body
            fmt.scoped_block(lambda f: render_body(body, f))
