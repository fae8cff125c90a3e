import io
import json
from pathlib import Path

import pytest

from rsgen.cli import main
from rsgen.spec import build_scope

POINT_SPEC = {
    "doc": "Generated.",
    "imports": [
        {"path": "serde", "name": "Serialize"},
        {"path": "serde", "name": "Deserialize"},
    ],
    "items": [
        {
            "kind": "struct",
            "name": "Point",
            "vis": "pub",
            "derive": ["Serialize", "Deserialize"],
            "fields": [
                {"name": "x", "type": "i32", "vis": "pub"},
                {"name": "y", "type": "i32", "vis": "pub"},
            ],
        },
        {
            "kind": "module",
            "name": "consts",
            "items": [{"kind": "const", "name": "ORIGIN_X", "type": "i32", "value": "0", "vis": "pub"}],
        },
    ],
}

POINT_CODE = (
    "/// Generated.\n"
    "use serde::{Serialize, Deserialize};\n"
    "\n"
    "#[derive(Serialize, Deserialize)]\n"
    "pub struct Point {\n"
    "    pub x: i32,\n"
    "    pub y: i32,\n"
    "}\n"
    "\n"
    "mod consts {\n"
    "    pub const ORIGIN_X: i32 = 0;\n"
    "}"
)


def test_build_scope_from_description() -> None:
    assert build_scope(POINT_SPEC).to_string() == POINT_CODE


def test_build_enum_trait_impl_fn() -> None:
    spec = {
        "items": [
            {"kind": "enum", "name": "Op", "variants": [{"name": "Add"}, {"name": "Lit", "tuple": ["i64"]}]},
            {"kind": "trait", "name": "Eval", "fns": [{"name": "eval", "self_arg": "&self", "ret": "i64"}]},
            {
                "kind": "impl",
                "target": "Op",
                "trait": "Eval",
                "fns": [{"name": "eval", "self_arg": "&self", "ret": "i64", "body": ["0"]}],
            },
            {"kind": "type", "name": "Value", "type": "i64"},
            {"kind": "fn", "fn": {"name": "main", "body": ["run();"]}},
            {"kind": "raw", "text": "// end"},
        ]
    }
    assert build_scope(spec).to_string() == (
        "enum Op {\n"
        "    Add,\n"
        "    Lit(i64),\n"
        "}\n"
        "\n"
        "trait Eval {\n"
        "    fn eval(&self) -> i64;\n"
        "}\n"
        "\n"
        "impl Eval for Op {\n"
        "    fn eval(&self) -> i64 {\n"
        "        0\n"
        "    }\n"
        "}\n"
        "\n"
        "type Value = i64;\n"
        "\n"
        "fn main() {\n"
        "    run();\n"
        "}\n"
        "\n"
        "// end"
    )


def test_unknown_kind() -> None:
    with pytest.raises(ValueError, match="Unknown item kind 'union'"):
        build_scope({"items": [{"kind": "union", "name": "U"}]})


def test_render_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "point.json"
    path.write_text(json.dumps(POINT_SPEC), encoding="utf-8")
    assert main(["render", str(path)]) == 0
    assert capsys.readouterr().out == POINT_CODE + "\n"


def test_render_to_file_with_indent(tmp_path: Path) -> None:
    src = tmp_path / "point.json"
    src.write_text(json.dumps(POINT_SPEC), encoding="utf-8")
    out = tmp_path / "point.rs"
    assert main(["render", str(src), "-o", str(out), "--indent", "2"]) == 0
    assert "  pub x: i32," in out.read_text(encoding="utf-8")


def test_render_from_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"items": [{"kind": "raw", "text": "// hi"}]})))
    assert main(["render", "-"]) == 0
    assert capsys.readouterr().out == "// hi\n"


def test_duplicate_module_in_description(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "dup.json"
    src.write_text(
        json.dumps({"items": [{"kind": "module", "name": "a"}, {"kind": "module", "name": "a"}]}),
        encoding="utf-8",
    )
    assert main(["render", str(src)]) == 2
    assert "module `a` is already defined" in capsys.readouterr().err


def test_invalid_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "bad.json"
    src.write_text("{not json", encoding="utf-8")
    assert main(["render", str(src)]) == 2
    assert capsys.readouterr().err.startswith("rsgen: ")


@pytest.mark.parametrize(
    "description, message",
    [
        ({"items": [1]}, "scope.items[0] must be an object"),
        ({"items": {"kind": "raw"}}, "'items' in scope must be a list"),
        ({"imports": ["serde"]}, "scope.imports[0] must be an object"),
        ({"items": [{"kind": "struct", "name": "P", "fields": [3]}]}, "struct 'P'.fields[0] must be an object"),
    ],
)
def test_wrong_shape_exits_with_message(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], description: dict, message: str
) -> None:
    src = tmp_path / "shape.json"
    src.write_text(json.dumps(description), encoding="utf-8")
    assert main(["render", str(src)]) == 2
    assert message in capsys.readouterr().err
