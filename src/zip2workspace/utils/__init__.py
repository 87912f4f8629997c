"""Utility functions and helpers"""

from zip2workspace.utils.display import (
    build_tree,
    display_extraction_result,
    print_diagnostic,
    print_tree,
)

__all__ = [
    "build_tree",
    "display_extraction_result",
    "print_diagnostic",
    "print_tree",
]
