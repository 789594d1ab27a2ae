"""Unit tests for description transfer."""

from dirdoc.core.merge import transfer_descriptions
from dirdoc.models.node import NodeType, TreeNode


def _dir(name: str, *children: TreeNode, description: str = "") -> TreeNode:
    return TreeNode(name, NodeType.DIRECTORY, description, list(children))


def _file(name: str, description: str = "") -> TreeNode:
    return TreeNode(name, NodeType.FILE, description)


class TestTransferDescriptions:
    """Tests for transfer_descriptions function."""

    def test_root_description_transferred(self) -> None:
        """The recorded root description replaces the placeholder."""
        recorded = _dir("p", description="My documented project")
        actual = _dir("p", description="Project root directory")

        count = transfer_descriptions(recorded, actual)

        assert actual.description == "My documented project"
        assert count == 1

    def test_leaf_descriptions_transferred(self) -> None:
        """Matched leaves receive their recorded descriptions."""
        recorded = _dir("p", _file("a.txt", "First file"), _dir("docs", description="Docs"))
        actual = _dir("p", _dir("docs"), _file("a.txt"))

        transfer_descriptions(recorded, actual)

        assert actual.get_child("a.txt", NodeType.FILE).description == "First file"
        assert actual.get_child("docs", NodeType.DIRECTORY).description == "Docs"

    def test_nested_descriptions_transferred(self) -> None:
        """Descriptions flow down through matched subtrees."""
        recorded = _dir(
            "p",
            _dir("src", _dir("util", _file("s.py", "Strings")), description="Source"),
        )
        actual = _dir("p", _dir("src", _dir("util", _file("s.py"))))

        count = transfer_descriptions(recorded, actual)

        src = actual.get_child("src", NodeType.DIRECTORY)
        util = src.get_child("util", NodeType.DIRECTORY)
        assert src.description == "Source"
        assert util.get_child("s.py", NodeType.FILE).description == "Strings"
        assert count == 2

    def test_empty_recorded_description_keeps_actual(self) -> None:
        """An empty recorded description does not overwrite."""
        recorded = _dir("p", _file("a.txt"))
        actual = _dir("p", _file("a.txt", "Scanned text"), description="Project root directory")

        count = transfer_descriptions(recorded, actual)

        assert actual.description == "Project root directory"
        assert actual.children[0].description == "Scanned text"
        assert count == 0

    def test_type_must_match(self) -> None:
        """A recorded file does not describe a same-named directory."""
        recorded = _dir("p", _file("build", "Build script"))
        actual = _dir("p", _dir("build"))

        transfer_descriptions(recorded, actual)

        assert actual.children[0].description == ""

    def test_unmatched_nodes_ignored(self) -> None:
        """Recorded nodes absent on disk are not added."""
        recorded = _dir("p", _file("gone.txt", "Removed file"))
        actual = _dir("p", _file("new.txt"))

        transfer_descriptions(recorded, actual)

        assert [c.name for c in actual.children] == ["new.txt"]
        assert actual.children[0].description == ""

    def test_shallow_stop(self) -> None:
        """Descriptions below an asymmetric depth boundary are not carried."""
        recorded = _dir("p", _dir("src", _file("main.py", "Entry point"), description="Source"))
        actual = _dir("p", _dir("src"))

        transfer_descriptions(recorded, actual)

        # the pair itself still gets its description
        assert actual.children[0].description == "Source"
        assert actual.children[0].children == []

    def test_shallow_stop_other_side(self) -> None:
        """A childless recorded directory does not fill a deeper scan."""
        recorded = _dir("p", _dir("src", description="Source"))
        actual = _dir("p", _dir("src", _file("main.py")))

        transfer_descriptions(recorded, actual)

        src = actual.children[0]
        assert src.description == "Source"
        assert src.children[0].description == ""

    def test_first_match_wins(self) -> None:
        """Duplicate actual entries receive the description once."""
        recorded = _dir("p", _file("dup", "Recorded text"))
        actual = _dir("p", _file("dup"), _file("dup"))

        transfer_descriptions(recorded, actual)

        assert [c.description for c in actual.children] == ["Recorded text", ""]

    def test_structure_unchanged(self, sample_tree: TreeNode) -> None:
        """Only descriptions change; order and membership stay."""
        actual = _dir("project", _file("README.md"), _dir("src", _file("main.py"), _file("new.py")))

        transfer_descriptions(sample_tree, actual)

        assert [c.name for c in actual.children] == ["README.md", "src"]
        assert [c.name for c in actual.children[1].children] == ["main.py", "new.py"]
        assert actual.children[0].description == "Project overview"
        assert actual.children[1].children[0].description == "Entry point of the app"
