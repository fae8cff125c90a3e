from hypothesis import given, strategies as st

from rsgen import Scope, consolidate_imports

paths = st.sampled_from(["a", "b", "std::io", "crate::x"])
types = st.sampled_from(["X", "Y", "Z"])
visibilities = st.sampled_from([None, "pub", "pub(crate)"])
triples = st.lists(st.tuples(paths, types, visibilities), max_size=12)


def _scope(inserts: list[tuple[str, str, str | None]]) -> Scope:
    scope = Scope()
    for path, ty, vis in inserts:
        scope.import_type(path, ty, vis)
    return scope


def test_grouped_by_visibility_then_path() -> None:
    scope = _scope([("a", "X", None), ("b", "Y", "pub"), ("a", "Z", None)])
    assert consolidate_imports(scope.imports) == ["use a::{X, Z};", "pub use b::Y;"]
    assert scope.to_string() == "use a::{X, Z};\npub use b::Y;"


def test_same_path_under_two_visibilities_is_not_merged() -> None:
    scope = _scope([("a", "X", None), ("a", "Y", "pub")])
    assert consolidate_imports(scope.imports) == ["use a::X;", "pub use a::Y;"]


def test_later_visibility_wins() -> None:
    scope = _scope([("a", "X", "pub"), ("a", "X", "pub(crate)")])
    assert consolidate_imports(scope.imports) == ["pub(crate) use a::X;"]


def test_reimport_returns_same_entry() -> None:
    scope = Scope()
    entry = scope.import_type("a", "X")
    assert scope.import_type("a", "X") is entry
    entry.vis("pub")
    assert consolidate_imports(scope.imports) == ["pub use a::X;"]


def test_namespaced_type_imports_leading_segment() -> None:
    scope = _scope([("std", "io::Error", None), ("std", "io::Result", None)])
    assert consolidate_imports(scope.imports) == ["use std::io;"]


def test_order_follows_insertion_not_alphabet() -> None:
    scope = _scope([("z", "B", None), ("a", "C", None), ("z", "A", None)])
    assert consolidate_imports(scope.imports) == ["use z::{B, A};", "use a::C;"]


def test_empty_table() -> None:
    assert consolidate_imports({}) == []


@given(triples)
def test_reinserting_stored_entries_is_idempotent(inserts: list[tuple[str, str, str | None]]) -> None:
    scope = _scope(inserts)
    before = consolidate_imports(scope.imports)
    for path, entries in list(scope.imports.items()):
        for ty, entry in list(entries.items()):
            scope.import_type(path, ty, entry.visibility)
    assert consolidate_imports(scope.imports) == before


@given(triples)
def test_one_statement_per_visibility_and_path(inserts: list[tuple[str, str, str | None]]) -> None:
    scope = _scope(inserts)
    groups = {
        (entry.visibility, path)
        for path, entries in scope.imports.items()
        for entry in entries.values()
    }
    statements = consolidate_imports(scope.imports)
    assert len(statements) == len(groups)
    assert scope.to_string() == scope.to_string()


def test_imports_only_scope_has_no_trailing_blank_line() -> None:
    scope = _scope([("a", "X", "pub")])
    assert scope.to_string() == "pub use a::X;"


def test_explicit_none_visibility_overwrites() -> None:
    scope = _scope([("a", "X", "pub"), ("a", "X", None)])
    assert scope.to_string() == "use a::X;"


def test_omitted_visibility_keeps_stored_one() -> None:
    scope = Scope()
    scope.import_type("a", "X", "pub")
    scope.import_type("a", "X")
    assert scope.to_string() == "pub use a::X;"
