from __future__ import annotations

import pytest

from wayfinder.models.entries import DirectoryEntry, FindResultEntry, TreeNode
from wayfinder.utils.formatting import (
    format_bytes,
    format_entry_line,
    format_listing,
    format_matches,
    format_tree,
)


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
    ],
)
def test_format_bytes(size: int, expected: str) -> None:
    assert format_bytes(size) == expected


def test_entry_line_annotations() -> None:
    entry = DirectoryEntry(name=".env", type="file", hidden=True, size=10, ignored=True)

    assert format_entry_line(entry) == "[FILE] .env (10 B) (hidden) (ignored)"


def test_empty_renderings_use_sentinels() -> None:
    assert format_listing([]) == "Directory is empty"
    assert format_tree([]) == "Directory is empty"
    assert format_matches([]) == "No matches found"


def test_tree_rendering_indents_children() -> None:
    nodes = [
        TreeNode(
            name="src",
            type="directory",
            hidden=False,
            children=[
                TreeNode(name="lib", type="directory", hidden=False, children=[]),
                TreeNode(name="app.js", type="file", hidden=False),
            ],
        ),
        TreeNode(name="README.md", type="file", hidden=False),
    ]

    assert format_tree(nodes) == "[DIR] src\n  [DIR] lib\n  [FILE] app.js\n[FILE] README.md"


def test_match_rendering() -> None:
    results = [
        FindResultEntry(path="src", type="directory", relative_path="src/", absolute_path="/w/src"),
        FindResultEntry(path="src/app.js", type="file", relative_path="src/app.js", absolute_path="/w/src/app.js"),
    ]

    assert format_matches(results) == "[DIR] src\n[FILE] src/app.js"
