from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def _package_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _source_files() -> list[Path]:
    root = _package_root()
    files: list[Path] = []
    for path in sorted(root.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts[0] == "test" or "__pycache__" in rel.parts:
            continue
        files.append(path)
    return files


def _read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _imports(path: Path) -> list[ImportRef]:
    imports: list[ImportRef] = []
    for node in ast.walk(_read_tree(path)):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            imports.append(ImportRef(node.module, node.lineno))
    return imports


def _rel(path: Path) -> str:
    return path.relative_to(_package_root()).as_posix()


def test_subprocess_is_only_imported_by_process_wrapper() -> None:
    offenders = [
        f"{_rel(path)}:{ref.line}"
        for path in _source_files()
        for ref in _imports(path)
        if ref.module == "subprocess" and _rel(path) != "platform/process.py"
    ]
    assert not offenders, "subprocess used outside platform/process.py:\n" + "\n".join(offenders)


def test_rich_is_only_imported_by_console() -> None:
    offenders = [
        f"{_rel(path)}:{ref.line}"
        for path in _source_files()
        for ref in _imports(path)
        if ref.module.split(".")[0] == "rich" and _rel(path) != "output/console.py"
    ]
    assert not offenders, "rich used outside output/console.py:\n" + "\n".join(offenders)


def test_core_does_not_import_upper_layers() -> None:
    forbidden = ("deploy_alias.services", "deploy_alias.cli", "deploy_alias.platform")
    offenders = [
        f"{_rel(path)}:{ref.line}: {ref.module}"
        for path in _source_files()
        if _rel(path).startswith("core/")
        for ref in _imports(path)
        if ref.module.startswith(forbidden)
    ]
    assert not offenders, "core imports upper layers:\n" + "\n".join(offenders)


def test_services_do_not_import_cli() -> None:
    offenders = [
        f"{_rel(path)}:{ref.line}: {ref.module}"
        for path in _source_files()
        if _rel(path).startswith("services/")
        for ref in _imports(path)
        if ref.module.startswith("deploy_alias.cli") or ref.module == "typer"
    ]
    assert not offenders, "services import the CLI layer:\n" + "\n".join(offenders)
