import json
from pathlib import Path

import pytest

from safe_shell.lib.command import CommandFailed, run_cmd
from safe_shell.lib.documents import DocumentError, load_document, save_document
from safe_shell.lib.system import SystemServices


def test_run_cmd_passes_arguments_verbatim() -> None:
    res = run_cmd(["echo", "a;b", "$(id)"])
    assert res.returncode == 0
    assert res.stdout == "a;b $(id)\n"
    assert res.argv == ["echo", "a;b", "$(id)"]


def test_run_cmd_accepts_listed_statuses() -> None:
    assert run_cmd(["false"], accept=(0, 1)).returncode == 1
    with pytest.raises(CommandFailed):
        run_cmd(["false"])


def test_documents_round_trip_preserves_key_order(tmp_path: Path) -> None:
    p = tmp_path / "conf.json"
    p.write_text('{"z": 1, "a": {"k": "v"}}', encoding="utf-8")
    data = load_document(str(p))
    data["m"] = True
    save_document(str(p), data)
    assert list(json.loads(p.read_text(encoding="utf-8"))) == ["z", "a", "m"]


def test_empty_yaml_document_is_an_empty_mapping(tmp_path: Path) -> None:
    p = tmp_path / "conf.yml"
    p.write_text("", encoding="utf-8")
    assert load_document(str(p)) == {}


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    p = tmp_path / "list.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(DocumentError):
        load_document(str(p))


def test_remove_tree_reports_absence(tmp_path: Path) -> None:
    system = SystemServices()
    d = tmp_path / "d"
    d.mkdir()
    assert system.remove_tree(str(d)) is True
    assert system.remove_tree(str(d)) is False


def test_remove_tree_unlinks_symlink_not_target(tmp_path: Path) -> None:
    system = SystemServices()
    target = tmp_path / "target"
    target.mkdir()
    (target / "keep").write_text("x", encoding="utf-8")
    link = tmp_path / "link"
    link.symlink_to(target)

    assert system.remove_tree(str(link)) is True
    assert not link.exists() and not link.is_symlink()
    assert (target / "keep").exists()


def test_undecodable_document_is_a_document_error(tmp_path: Path) -> None:
    p = tmp_path / "latin1.json"
    p.write_bytes(b'{"a": "\xff"}')
    with pytest.raises(DocumentError, match="not valid UTF-8"):
        load_document(str(p))


def test_save_refuses_non_finite_json_numbers(tmp_path: Path) -> None:
    p = tmp_path / "conf.json"
    p.write_text('{"a": 1}', encoding="utf-8")
    with pytest.raises(DocumentError):
        save_document(str(p), {"a": float("inf")})
    assert p.read_text(encoding="utf-8") == '{"a": 1}'
