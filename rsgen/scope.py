from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Union

from .errors import DuplicateModuleError
from .formatter import DEFAULT_INDENT, Formatter
from .function import Function
from .imports import Import, ImportTable, consolidate_imports, insert_import
from .model import Const, Docs, Enum, Struct, TypeAlias, TypeLike
from .traits import Impl, Trait

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass
class Raw:
    """Verbatim text included as-is in the rendered scope."""
    text: str


Item = Union["Module", Struct, Function, Trait, Enum, Impl, TypeAlias, Const, Raw]


def render_item(item: Item, fmt: Formatter) -> None:
    match item:
        case Module():
            item.render(fmt)
        case Function():
            item.render(fmt, is_trait=False)
        case Struct() | Trait() | Enum() | Impl() | TypeAlias() | Const():
            item.render(fmt)
        case Raw(text=text):
            fmt.write_raw(f"{text}\n")
        case _:
            raise TypeError(f"not a scope item: {item!r}")


@dataclass
class Scope:
    """
    An ordered container of declarations plus their imports and docs.

    Rendered as: docs, consolidated ``use`` statements, a blank line between
    the imports and the first item, then the items in insertion order
    separated by single blank lines.
    """
    docs: Docs | None = None
    imports: ImportTable = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)

    def doc(self, text: str) -> Scope:
        self.docs = Docs(text)
        return self

    def import_type(self, path: str, ty: str, vis: str | None | _Unset = UNSET) -> Import:
        """Import ``ty`` from ``path``; re-importing returns the same entry.

        A given ``vis`` (``None`` included) replaces the stored visibility;
        leaving it out keeps whatever the entry already has.
        """
        entry = insert_import(self.imports, path, ty)
        if not isinstance(vis, _Unset):
            entry.visibility = vis
        return entry

    # ---------- items ----------

    def push(self, item: Item) -> Scope:
        if isinstance(item, Module):
            return self.push_module(item)
        self.items.append(item)
        return self

    def push_module(self, module: Module) -> Scope:
        """Append ``module``; its name must not already be used in this scope."""
        if self.get_module(module.name) is not None:
            raise DuplicateModuleError(module.name)
        self.items.append(module)
        return self

    def new_module(self, name: str) -> Module:
        self.push_module(Module(name))
        return self.items[-1]

    def get_module(self, name: str) -> Module | None:
        return next(
            (item for item in self.items if isinstance(item, Module) and item.name == name),
            None,
        )

    def get_module_mut(self, name: str) -> Module | None:
        """Same as ``get_module``; the returned module is live and may be mutated."""
        return self.get_module(name)

    def get_or_create_module(self, name: str) -> Module:
        existing = self.get_module(name)
        if existing is not None:
            return existing
        logger.debug("Creating module `%s` on first lookup.", name)
        return self.new_module(name)

    def new_struct(self, name: str) -> Struct:
        self.items.append(Struct(name))
        return self.items[-1]

    def new_fn(self, name: str) -> Function:
        self.items.append(Function(name))
        return self.items[-1]

    def new_trait(self, name: str) -> Trait:
        self.items.append(Trait(name))
        return self.items[-1]

    def new_enum(self, name: str) -> Enum:
        self.items.append(Enum(name))
        return self.items[-1]

    def new_impl(self, target: TypeLike) -> Impl:
        self.items.append(Impl(target))
        return self.items[-1]

    def new_const(self, name: str, ty: TypeLike, value: str = "") -> Const:
        self.items.append(Const(name, ty, value))
        return self.items[-1]

    def new_type_alias(self, name: str, target: TypeLike) -> TypeAlias:
        self.items.append(TypeAlias(name, target))
        return self.items[-1]

    def raw(self, text: str) -> Scope:
        self.items.append(Raw(text))
        return self

    # ---------- codegen ------------

    def render(self, fmt: Formatter) -> None:
        if self.docs:
            self.docs.render(fmt)

        statements = consolidate_imports(self.imports)
        for stmt in statements:
            fmt.write_raw(f"{stmt}\n")
        if statements and self.items:
            fmt.write_raw("\n")

        for i, item in enumerate(self.items):
            if i:
                fmt.write_raw("\n")
            render_item(item, fmt)

    def to_string(self, indent: str = DEFAULT_INDENT) -> str:
        buf = io.StringIO()
        self.render(Formatter(buf, indent))
        code = buf.getvalue()
        if code.endswith("\n"):
            code = code[:-1]
        return code

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class Module:
    """A named ``mod`` wrapping its own scope."""
    name: str
    visibility: str | None = None
    docs: Docs | None = None
    attributes: list[str] = field(default_factory=list)
    scope: Scope = field(default_factory=Scope)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("module name must not be empty")

    def scope_mut(self) -> Scope:
        return self.scope

    def doc(self, text: str) -> Module:
        self.docs = Docs(text)
        return self

    def vis(self, vis: str) -> Module:
        self.visibility = vis
        return self

    def attr(self, attribute: str) -> Module:
        """Add an attribute such as ``allow(unused_imports)``; rendered as ``#[...]``."""
        self.attributes.append(attribute)
        return self

    def import_type(self, path: str, ty: str, vis: str | None | _Unset = UNSET) -> Module:
        self.scope.import_type(path, ty, vis)
        return self

    def new_module(self, name: str) -> Module:
        return self.scope.new_module(name)

    def get_module(self, name: str) -> Module | None:
        return self.scope.get_module(name)

    def get_module_mut(self, name: str) -> Module | None:
        return self.scope.get_module_mut(name)

    def get_or_create_module(self, name: str) -> Module:
        return self.scope.get_or_create_module(name)

    def push_module(self, module: Module) -> Module:
        self.scope.push_module(module)
        return self

    def push(self, item: Item) -> Module:
        self.scope.push(item)
        return self

    def new_struct(self, name: str) -> Struct:
        return self.scope.new_struct(name)

    def new_fn(self, name: str) -> Function:
        return self.scope.new_fn(name)

    def new_enum(self, name: str) -> Enum:
        return self.scope.new_enum(name)

    def new_impl(self, target: TypeLike) -> Impl:
        return self.scope.new_impl(target)

    def new_trait(self, name: str) -> Trait:
        return self.scope.new_trait(name)

    def render(self, fmt: Formatter) -> None:
        if self.docs:
            self.docs.render(fmt)
        for attr in self.attributes:
            fmt.write_raw(f"#[{attr}]\n")
        if self.visibility:
            fmt.write_raw(f"{self.visibility} ")
        fmt.write_raw(f"mod {self.name}")
        fmt.scoped_block(self.scope.render)
