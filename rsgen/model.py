from __future__ import annotations

"""Declaration kinds rendered inside a scope.

Each node here is inert data plus a ``render(fmt)`` method. Rendering is a
pure function of the node's own fields: nodes never look at their siblings
and always leave the formatter at the indentation level they found it.
"""

from dataclasses import KW_ONLY, dataclass, field
from typing import Literal, Union

from .formatter import Formatter, fmt_bound_rhs, fmt_bounds

TypeLike = Union[str, "Type"]


def as_type(ty: TypeLike) -> "Type":
    return ty if isinstance(ty, Type) else Type(ty)


@dataclass
class Docs:
    text: str

    def render(self, fmt: Formatter) -> None:
        for line in self.text.splitlines():
            fmt.write_raw(f"/// {line}\n" if line else "///\n")


@dataclass
class Type:
    name: str
    generics: list[Type] = field(default_factory=list)

    def generic(self, ty: TypeLike) -> Type:
        if "<" in self.name:
            raise ValueError(f"type name `{self.name}` already includes generics")
        self.generics.append(as_type(ty))
        return self

    def path(self, path: str) -> Type:
        """Return a copy of this type qualified by ``path``."""
        if "::" in self.name:
            raise ValueError(f"type name `{self.name}` is already qualified")
        return Type(f"{path}::{self.name}", list(self.generics))

    def render(self, fmt: Formatter) -> None:
        fmt.write_raw(self.name)
        if self.generics:
            fmt.write_raw("<")
            for i, ty in enumerate(self.generics):
                if i:
                    fmt.write_raw(", ")
                ty.render(fmt)
            fmt.write_raw(">")


@dataclass
class Bound:
    name: str
    bound: list[Type] = field(default_factory=list)


@dataclass
class Field:
    name: str
    ty: Type
    documentation: list[str] = field(default_factory=list)
    annotations: list[str] = field(default_factory=list)
    value: str = ""
    visibility: str | None = None

    def __post_init__(self) -> None:
        self.ty = as_type(self.ty)

    def doc(self, *lines: str) -> Field:
        self.documentation.extend(lines)
        return self

    def annotation(self, *annotations: str) -> Field:
        self.annotations.extend(annotations)
        return self

    def vis(self, vis: str) -> Field:
        self.visibility = vis
        return self


@dataclass
class Fields:
    """Field list of a struct or enum variant: empty, tuple-like or named."""
    kind: Literal["empty", "tuple", "named"] = "empty"
    named: list[Field] = field(default_factory=list)
    tuple_types: list[Type] = field(default_factory=list)

    def push_named(self, fld: Field) -> Fields:
        if self.kind == "tuple":
            raise ValueError("field list is tuple-like; cannot add named field")
        self.kind = "named"
        self.named.append(fld)
        return self

    def push_tuple(self, ty: TypeLike) -> Fields:
        if self.kind == "named":
            raise ValueError("field list is named; cannot add tuple field")
        self.kind = "tuple"
        self.tuple_types.append(as_type(ty))
        return self

    def render(self, fmt: Formatter, suffix: str = "") -> None:
        if self.kind == "named":
            fmt.scoped_block(self._render_named, suffix=suffix)
        elif self.kind == "tuple":
            fmt.write_raw("(")
            for i, ty in enumerate(self.tuple_types):
                if i:
                    fmt.write_raw(", ")
                ty.render(fmt)
            fmt.write_raw(")")

    def _render_named(self, fmt: Formatter) -> None:
        for fld in self.named:
            for line in fld.documentation:
                fmt.write_raw(f"/// {line}\n" if line else "///\n")
            for ann in fld.annotations:
                fmt.write_raw(f"{ann}\n")
            if fld.visibility:
                fmt.write_raw(f"{fld.visibility} ")
            fmt.write_raw(f"{fld.name}: ")
            fld.ty.render(fmt)
            fmt.write_raw(",\n")


@dataclass
class TypeDef:
    """Shared head of struct, enum, trait and type alias declarations."""
    ty: Type
    _: KW_ONLY
    visibility: str | None = None
    docs: Docs | None = None
    derives: list[str] = field(default_factory=list)
    allows: list[str] = field(default_factory=list)
    representation: str | None = None
    bounds: list[Bound] = field(default_factory=list)
    macros: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ty = as_type(self.ty)

    @property
    def name(self) -> str:
        return self.ty.name

    def vis(self, vis: str):
        self.visibility = vis
        return self

    def doc(self, text: str):
        self.docs = Docs(text)
        return self

    def generic(self, name: TypeLike):
        self.ty.generic(name)
        return self

    def bound(self, name: str, ty: TypeLike):
        self.bounds.append(Bound(name, [as_type(ty)]))
        return self

    def derive(self, name: str):
        self.derives.append(name)
        return self

    def allow(self, lint: str):
        self.allows.append(lint)
        return self

    def repr(self, repr: str):
        self.representation = repr
        return self

    def macro(self, macro: str):
        """Add a verbatim line above the declaration, e.g. ``#[serde(untagged)]``."""
        self.macros.append(macro)
        return self

    def render_head(self, keyword: str, fmt: Formatter, parents: list[Type] | None = None) -> None:
        if self.docs:
            self.docs.render(fmt)
        for lint in self.allows:
            fmt.write_raw(f"#[allow({lint})]\n")
        if self.derives:
            fmt.write_raw(f"#[derive({', '.join(self.derives)})]\n")
        if self.representation:
            fmt.write_raw(f"#[repr({self.representation})]\n")
        for macro in self.macros:
            fmt.write_raw(f"{macro}\n")
        if self.visibility:
            fmt.write_raw(f"{self.visibility} ")
        fmt.write_raw(f"{keyword} ")
        self.ty.render(fmt)
        if parents:
            fmt.write_raw(": ")
            fmt_bound_rhs(parents, fmt)
        fmt_bounds(self.bounds, fmt)


@dataclass
class Struct(TypeDef):
    fields: Fields = field(default_factory=Fields)

    def push_field(self, fld: Field) -> Struct:
        self.fields.push_named(fld)
        return self

    def field(self, name: str, ty: TypeLike) -> Struct:
        return self.push_field(Field(name, as_type(ty)))

    def tuple_field(self, ty: TypeLike) -> Struct:
        self.fields.push_tuple(ty)
        return self

    def render(self, fmt: Formatter) -> None:
        self.render_head("struct", fmt)
        self.fields.render(fmt)
        if self.fields.kind != "named":
            fmt.write_raw(";\n")


@dataclass
class Variant:
    name: str
    fields: Fields = field(default_factory=Fields)
    annotations: list[str] = field(default_factory=list)

    def named(self, name: str, ty: TypeLike) -> Variant:
        self.fields.push_named(Field(name, as_type(ty)))
        return self

    def tuple(self, ty: TypeLike) -> Variant:
        self.fields.push_tuple(ty)
        return self

    def annotation(self, annotation: str) -> Variant:
        self.annotations.append(annotation)
        return self

    def render(self, fmt: Formatter) -> None:
        for ann in self.annotations:
            fmt.write_raw(f"{ann}\n")
        fmt.write_raw(self.name)
        if self.fields.kind == "named":
            self.fields.render(fmt, suffix=",")
        else:
            self.fields.render(fmt)
            fmt.write_raw(",\n")


@dataclass
class Enum(TypeDef):
    variants: list[Variant] = field(default_factory=list)

    def new_variant(self, name: str) -> Variant:
        self.variants.append(Variant(name))
        return self.variants[-1]

    def push_variant(self, variant: Variant) -> Enum:
        self.variants.append(variant)
        return self

    def render(self, fmt: Formatter) -> None:
        self.render_head("enum", fmt)
        fmt.scoped_block(self._render_variants)

    def _render_variants(self, fmt: Formatter) -> None:
        for variant in self.variants:
            variant.render(fmt)


@dataclass
class TypeAlias(TypeDef):
    target: Type = field(default_factory=lambda: Type("()"))

    def __post_init__(self) -> None:
        super().__post_init__()
        self.target = as_type(self.target)

    def render(self, fmt: Formatter) -> None:
        self.render_head("type", fmt)
        fmt.write_raw(" = ")
        self.target.render(fmt)
        fmt.write_raw(";\n")


@dataclass
class Const:
    name: str
    ty: Type
    expr: str = ""
    docs: Docs | None = None
    visibility: str | None = None

    def __post_init__(self) -> None:
        self.ty = as_type(self.ty)

    def doc(self, text: str) -> Const:
        self.docs = Docs(text)
        return self

    def vis(self, vis: str) -> Const:
        self.visibility = vis
        return self

    def value(self, expr: str) -> Const:
        self.expr = expr
        return self

    def render(self, fmt: Formatter) -> None:
        if self.docs:
            self.docs.render(fmt)
        if self.visibility:
            fmt.write_raw(f"{self.visibility} ")
        fmt.write_raw(f"const {self.name}: ")
        self.ty.render(fmt)
        fmt.write_raw(f" = {self.expr};\n")
