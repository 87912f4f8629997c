"""Display and formatting utilities"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from zip2workspace.models.archive import Diagnostic, ExtractionResult, Severity

_SEVERITY_ICONS = {
    Severity.INFO: "ℹ️",
    Severity.SUCCESS: "✅",
    Severity.ERROR: "❌",
}


@dataclass(slots=True)
class FileNode:
    name: str
    path: str


@dataclass(slots=True)
class DirectoryNode:
    name: str
    path: str
    children: list[FileNode | DirectoryNode] = field(default_factory=list)


def build_tree(paths: Iterable[str]) -> DirectoryNode:
    """Build a sorted directory tree from normalized file paths.

    Args:
        paths: Workspace file paths using ``/`` separators.

    Returns:
        Root DirectoryNode; directories sort before files.
    """
    root = DirectoryNode(name="", path="")
    nodes: dict[str, DirectoryNode] = {"": root}

    def _get_directory(path: str) -> DirectoryNode:
        if path not in nodes:
            parent_path, _, name = path.rpartition("/")
            parent = _get_directory(parent_path)
            node = DirectoryNode(name=name, path=path)
            parent.children.append(node)
            nodes[path] = node
        return nodes[path]

    for path in paths:
        parent_path, _, file_name = path.rpartition("/")
        _get_directory(parent_path).children.append(FileNode(name=file_name, path=path))

    def _sort_children(directory: DirectoryNode) -> None:
        directory.children.sort(
            key=lambda node: (0 if isinstance(node, DirectoryNode) else 1, node.name)
        )
        for child in directory.children:
            if isinstance(child, DirectoryNode):
                _sort_children(child)

    _sort_children(root)
    return root


def print_tree(node: DirectoryNode | FileNode, indent: int = 0) -> None:
    """Recursively print the directory tree structure.

    Args:
        node: Tree node to print (directory or file).
        indent: Current indentation level.
    """
    prefix = "  " * indent
    if isinstance(node, FileNode):
        print(f"{prefix}📄 {node.name}")
        return

    if node.name:
        print(f"{prefix}📁 {node.name}/")

    for child in node.children:
        print_tree(child, indent + 1 if node.name else indent)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    return f"{_SEVERITY_ICONS[diagnostic.severity]} {diagnostic.message}"


def print_diagnostic(diagnostic: Diagnostic) -> None:
    print(format_diagnostic(diagnostic))


def display_extraction_result(result: ExtractionResult) -> None:
    """Display the extraction result with formatted output.

    Args:
        result: Extracted file map and project name.
    """
    print("\n✅ Successfully loaded project:")
    print(f"   • Project: {result.project_name}")
    print(f"   • Files: {result.file_count}")

    print("\n📂 Workspace Structure:")
    print("-" * 60)
    print_tree(build_tree(result.files))
    print("\n" + "=" * 60)
