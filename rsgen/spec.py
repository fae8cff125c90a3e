from __future__ import annotations

"""JSON-friendly descriptions of a scope, and the builder that realizes them."""

import logging
from typing import Any, Literal, NotRequired, TypedDict

from .function import Function
from .model import Field
from .scope import Module, Scope

logger = logging.getLogger(__name__)

ItemKind = Literal["module", "struct", "enum", "fn", "trait", "impl", "const", "type", "raw"]


class ImportSpec(TypedDict):
    path: str
    name: str
    vis: NotRequired[str]


class FieldSpec(TypedDict):
    name: str
    type: str
    vis: NotRequired[str]
    doc: NotRequired[list[str]]
    annotations: NotRequired[list[str]]


class ArgSpec(TypedDict):
    name: str
    type: str


class FnSpec(TypedDict):
    name: str
    vis: NotRequired[str]
    doc: NotRequired[str]
    self_arg: NotRequired[Literal["self", "&self", "&mut self"]]
    args: NotRequired[list[ArgSpec]]
    ret: NotRequired[str]
    generics: NotRequired[list[str]]
    attrs: NotRequired[list[str]]
    is_async: NotRequired[bool]
    body: NotRequired[list[str]]


class VariantSpec(TypedDict):
    name: str
    tuple: NotRequired[list[str]]
    fields: NotRequired[list[FieldSpec]]


class ItemSpec(TypedDict, total=False):
    kind: ItemKind
    name: str
    vis: str
    doc: str
    generics: list[str]
    derive: list[str]
    attrs: list[str]
    # struct
    fields: list[FieldSpec]
    tuple: list[str]
    # enum
    variants: list[VariantSpec]
    # fn / trait / impl
    fn: FnSpec
    fns: list[FnSpec]
    parents: list[str]
    target: str
    trait: str
    # const / type alias
    type: str
    value: str
    # raw
    text: str
    # module
    imports: list[ImportSpec]
    items: list[ItemSpec]


class ScopeSpec(TypedDict, total=False):
    doc: str
    imports: list[ImportSpec]
    items: list[ItemSpec]


def mk_field(fd: FieldSpec) -> Field:
    fld = Field(fd["name"], fd["type"], visibility=fd.get("vis"))
    fld.doc(*fd.get("doc", []))
    fld.annotation(*fd.get("annotations", []))
    return fld


def mk_fn(fs: FnSpec, func: Function | None = None) -> Function:
    func = func or Function(fs["name"])
    if "vis" in fs:
        func.vis(fs["vis"])
    if "doc" in fs:
        func.doc(fs["doc"])
    if "self_arg" in fs:
        func.self_arg = fs["self_arg"]
    for g in fs.get("generics", []):
        func.generic(g)
    for a in fs.get("args", []):
        func.arg(a["name"], a["type"])
    if "ret" in fs:
        func.ret(fs["ret"])
    for attr in fs.get("attrs", []):
        func.attr(attr)
    func.set_async(bool(fs.get("is_async", False)))
    if "body" in fs:
        func.body = list(fs["body"])
    return func


def _apply_typedef(td: Any, spec: ItemSpec) -> None:
    if "vis" in spec:
        td.vis(spec["vis"])
    if "doc" in spec:
        td.doc(spec["doc"])
    for g in spec.get("generics", []):
        td.generic(g)
    for d in spec.get("derive", []):
        td.derive(d)
    for m in spec.get("attrs", []):
        td.macro(f"#[{m}]")


def _entries(spec: Any, key: str, where: str) -> list[Any]:
    value = spec.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"'{key}' in {where} must be a list, got {type(value).__name__}")
    for i, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ValueError(f"{where}.{key}[{i}] must be an object, got {entry!r}")
    return value


def add_item(scope: Scope, spec: ItemSpec) -> None:
    kind = spec.get("kind")
    where = f"{kind} '{spec.get('name', '?')}'"
    match kind:
        case "module":
            module = Module(spec["name"], visibility=spec.get("vis"))
            if "doc" in spec:
                module.doc(spec["doc"])
            for attr in spec.get("attrs", []):
                module.attr(attr)
            scope.push_module(module)
            populate_scope(module.scope, {"imports": spec.get("imports", []), "items": spec.get("items", [])})
        case "struct":
            st = scope.new_struct(spec["name"])
            _apply_typedef(st, spec)
            for fd in _entries(spec, "fields", where):
                st.push_field(mk_field(fd))
            for ty in spec.get("tuple", []):
                st.tuple_field(ty)
        case "enum":
            en = scope.new_enum(spec["name"])
            _apply_typedef(en, spec)
            for vs in _entries(spec, "variants", where):
                variant = en.new_variant(vs["name"])
                for ty in vs.get("tuple", []):
                    variant.tuple(ty)
                for fd in _entries(vs, "fields", f"{where}.{vs['name']}"):
                    variant.fields.push_named(mk_field(fd))
        case "fn":
            mk_fn(spec["fn"], scope.new_fn(spec["fn"]["name"]))
        case "trait":
            tr = scope.new_trait(spec["name"])
            _apply_typedef(tr, spec)
            for p in spec.get("parents", []):
                tr.parent(p)
            for fs in _entries(spec, "fns", where):
                tr.push_fn(mk_fn(fs))
        case "impl":
            im = scope.new_impl(spec["target"])
            for g in spec.get("generics", []):
                im.generic(g)
            if "trait" in spec:
                im.impl_trait(spec["trait"])
            for fs in _entries(spec, "fns", where):
                im.push_fn(mk_fn(fs))
        case "const":
            cst = scope.new_const(spec["name"], spec["type"], spec.get("value", ""))
            if "vis" in spec:
                cst.vis(spec["vis"])
            if "doc" in spec:
                cst.doc(spec["doc"])
        case "type":
            alias = scope.new_type_alias(spec["name"], spec["type"])
            _apply_typedef(alias, spec)
        case "raw":
            scope.raw(spec["text"])
        case _:
            raise ValueError(f"Unknown item kind '{kind}'")


def populate_scope(scope: Scope, spec: ScopeSpec) -> Scope:
    if "doc" in spec:
        scope.doc(spec["doc"])
    for imp in _entries(spec, "imports", "scope"):
        scope.import_type(imp["path"], imp["name"], imp.get("vis"))
    for item in _entries(spec, "items", "scope"):
        add_item(scope, item)
    return scope


def build_scope(spec: ScopeSpec) -> Scope:
    scope = populate_scope(Scope(), spec)
    logger.info("Built scope with %d items.", len(scope.items))
    return scope
