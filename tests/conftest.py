"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from dirdoc.models.node import NodeType, TreeNode


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a small project tree on disk.

    Layout::

        project/
            README.md
            app.log
            src/
                main.py
                lib/
                    util.py
            docs/
                guide.md
            empty/
            vendor/
                autoload.php
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "README.md").write_text("# Project\n")
    (root / "app.log").write_text("log line\n")

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("print('hi')\n")
    (src / "lib").mkdir()
    (src / "lib" / "util.py").write_text("")

    (root / "docs").mkdir()
    (root / "docs" / "guide.md").write_text("guide\n")

    (root / "empty").mkdir()

    (root / "vendor").mkdir()
    (root / "vendor" / "autoload.php").write_text("<?php\n")

    return root


@pytest.fixture
def sample_tree() -> TreeNode:
    """A documented tree with nested directories and files."""
    return TreeNode(
        name="project",
        node_type=NodeType.DIRECTORY,
        description="Project root directory",
        children=[
            TreeNode(
                name="src",
                node_type=NodeType.DIRECTORY,
                description="Application source code",
                children=[
                    TreeNode("main.py", NodeType.FILE, "Entry point of the app"),
                    TreeNode(
                        name="util",
                        node_type=NodeType.DIRECTORY,
                        description="Utility helpers",
                        children=[TreeNode("strings.py", NodeType.FILE, "String helpers")],
                    ),
                ],
            ),
            TreeNode("README.md", NodeType.FILE, "Project overview"),
        ],
    )
