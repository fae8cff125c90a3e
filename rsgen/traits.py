from __future__ import annotations

from dataclasses import dataclass, field

from .formatter import Formatter, fmt_bound_rhs, fmt_bounds, fmt_generics
from .function import Function
from .model import Bound, Field, Type, TypeDef, TypeLike, as_type


@dataclass
class AssociatedType:
    inner: Bound

    def bound(self, ty: TypeLike) -> AssociatedType:
        self.inner.bound.append(as_type(ty))
        return self


@dataclass
class Trait(TypeDef):
    parents: list[Type] = field(default_factory=list)
    associated_types: list[AssociatedType] = field(default_factory=list)
    fns: list[Function] = field(default_factory=list)

    def parent(self, ty: TypeLike) -> Trait:
        self.parents.append(as_type(ty))
        return self

    def associated_type(self, name: str) -> AssociatedType:
        self.associated_types.append(AssociatedType(Bound(name)))
        return self.associated_types[-1]

    def new_fn(self, name: str) -> Function:
        self.fns.append(Function(name))
        return self.fns[-1]

    def push_fn(self, func: Function) -> Trait:
        self.fns.append(func)
        return self

    def render(self, fmt: Formatter) -> None:
        self.render_head("trait", fmt, parents=self.parents)
        fmt.scoped_block(self._render_body)

    def _render_body(self, fmt: Formatter) -> None:
        for assoc in self.associated_types:
            fmt.write_raw(f"type {assoc.inner.name}")
            if assoc.inner.bound:
                fmt.write_raw(": ")
                fmt_bound_rhs(assoc.inner.bound, fmt)
            fmt.write_raw(";\n")

        for i, func in enumerate(self.fns):
            if i or self.associated_types:
                fmt.write_raw("\n")
            func.render(fmt, is_trait=True)


@dataclass
class Impl:
    """An ``impl`` block, optionally implementing a trait for the target."""
    target: Type
    generics: list[str] = field(default_factory=list)
    trait_type: Type | None = None
    assoc_consts: list[Field] = field(default_factory=list)
    assoc_types: list[Field] = field(default_factory=list)
    bounds: list[Bound] = field(default_factory=list)
    fns: list[Function] = field(default_factory=list)
    macros: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.target = as_type(self.target)

    def generic(self, name: str) -> Impl:
        """Add a generic to the block itself (``impl<T>``), not the target."""
        self.generics.append(name)
        return self

    def target_generic(self, ty: TypeLike) -> Impl:
        self.target.generic(ty)
        return self

    def impl_trait(self, ty: TypeLike) -> Impl:
        self.trait_type = as_type(ty)
        return self

    def macro(self, macro: str) -> Impl:
        self.macros.append(macro)
        return self

    def associate_const(self, name: str, ty: TypeLike, value: str, visibility: str | None = None) -> Impl:
        self.assoc_consts.append(Field(name, as_type(ty), value=value, visibility=visibility))
        return self

    def associate_type(self, name: str, ty: TypeLike) -> Impl:
        self.assoc_types.append(Field(name, as_type(ty)))
        return self

    def bound(self, name: str, ty: TypeLike) -> Impl:
        self.bounds.append(Bound(name, [as_type(ty)]))
        return self

    def new_fn(self, name: str) -> Function:
        self.fns.append(Function(name))
        return self.fns[-1]

    def push_fn(self, func: Function) -> Impl:
        self.fns.append(func)
        return self

    def render(self, fmt: Formatter) -> None:
        for macro in self.macros:
            fmt.write_raw(f"{macro}\n")
        fmt.write_raw("impl")
        fmt_generics(self.generics, fmt)
        if self.trait_type:
            fmt.write_raw(" ")
            self.trait_type.render(fmt)
            fmt.write_raw(" for")
        fmt.write_raw(" ")
        self.target.render(fmt)
        fmt_bounds(self.bounds, fmt)
        fmt.scoped_block(self._render_body)

    def _render_body(self, fmt: Formatter) -> None:
        for cst in self.assoc_consts:
            if cst.visibility:
                fmt.write_raw(f"{cst.visibility} ")
            fmt.write_raw(f"const {cst.name}: ")
            cst.ty.render(fmt)
            fmt.write_raw(f" = {cst.value};\n")

        for ty in self.assoc_types:
            fmt.write_raw(f"type {ty.name} = ")
            ty.ty.render(fmt)
            fmt.write_raw(";\n")

        has_assoc = bool(self.assoc_consts or self.assoc_types)
        for i, func in enumerate(self.fns):
            if i or has_assoc:
                fmt.write_raw("\n")
            func.render(fmt)
