from .errors import DuplicateModuleError, RenderError
from .formatter import DEFAULT_INDENT, Formatter, fmt_bound_rhs, fmt_bounds, fmt_generics
from .model import (
    Bound, Const, Docs, Enum, Field, Fields, Struct, Type, TypeAlias, TypeDef, Variant,
)
from .function import Block, Function
from .traits import AssociatedType, Impl, Trait
from .imports import Import, consolidate_imports
from .scope import Item, Module, Raw, Scope, render_item
from .spec import build_scope

__all__ = [
    # formatting
    "Formatter", "DEFAULT_INDENT", "fmt_generics", "fmt_bounds", "fmt_bound_rhs",
    # declarations
    "Docs", "Type", "Bound", "Field", "Fields", "TypeDef", "Struct", "Variant", "Enum",
    "TypeAlias", "Const", "Block", "Function", "AssociatedType", "Trait", "Impl",
    # scope & imports
    "Scope", "Module", "Item", "Raw", "render_item", "Import", "consolidate_imports",
    # declarative input
    "build_scope",
    # errors
    "RenderError", "DuplicateModuleError",
]
