"""Structure document serialization and file I/O.

The structure document is a JSON object with ``name``, ``type`` and
``description`` keys and an optional ``children`` array of nested
objects of the same shape. ``children`` is written only for nodes that
have at least one child.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dirdoc.core.paths import get_document_path, get_file_mode
from dirdoc.models.node import NodeType, TreeNode

logger = logging.getLogger(__name__)

PRETTY_INDENT = 4


class DocumentError(Exception):
    """Base exception for structure document errors."""


class DocumentNotFoundError(DocumentError):
    """Raised when the structure document does not exist."""


class DocumentParseError(DocumentError):
    """Raised when the structure document cannot be parsed."""


class DocumentWriteError(DocumentError):
    """Raised when the structure document cannot be written."""


class TreeDocument(BaseModel):
    """Persisted form of a TreeNode.

    Reading is lenient: a text field that is missing, null or not a
    string becomes an empty string, a ``children`` value that is not a
    list is read as no children, and list items that are not objects
    are skipped. Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = ""
    node_type: Annotated[str, Field(alias="type")] = ""
    description: str = ""
    children: list[TreeDocument] | None = None

    @field_validator("name", "node_type", "description", mode="before")
    @classmethod
    def _non_string_to_empty(cls, v: object) -> object:
        return v if isinstance(v, str) else ""

    @field_validator("children", mode="before")
    @classmethod
    def _keep_object_children(cls, v: object) -> object:
        if not isinstance(v, list):
            return None
        return [item for item in v if isinstance(item, dict | TreeDocument)]

    @classmethod
    def from_node(cls, node: TreeNode) -> TreeDocument:
        """Build a document from a tree node, dropping empty children."""
        return cls(
            name=node.name,
            node_type=node.type_name,
            description=node.description,
            children=[cls.from_node(child) for child in node.children] or None,
        )

    def to_node(self) -> TreeNode:
        """Rebuild the tree node described by this document."""
        return TreeNode(
            name=self.name,
            node_type=NodeType.parse(self.node_type),
            description=self.description,
            children=[child.to_node() for child in self.children or ()],
        )


def serialize(node: TreeNode, pretty: bool = True) -> str:
    """Convert a tree to structure document text.

    Args:
        node: Root of the tree to serialize.
        pretty: Indent nested structures; otherwise emit compact JSON.

    Returns:
        JSON text. Non-ASCII characters are written as-is.
    """
    data = TreeDocument.from_node(node).model_dump(by_alias=True, exclude_none=True)
    if pretty:
        return json.dumps(data, ensure_ascii=False, indent=PRETTY_INDENT)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def deserialize(text: str) -> TreeNode:
    """Parse structure document text into a tree.

    Args:
        text: JSON text of a structure document.

    Returns:
        Root TreeNode of the described tree.

    Raises:
        DocumentParseError: If the text is not valid JSON or the top level
            is not an object.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentParseError(f"Invalid JSON syntax: {e}") from e

    if not isinstance(data, dict):
        msg = f"Top-level value must be an object, got {type(data).__name__}"
        raise DocumentParseError(msg)

    try:
        return TreeDocument.model_validate(data).to_node()
    except ValidationError as e:
        raise DocumentParseError(f"Invalid document content: {e}") from e


def document_exists(path: Path | None = None) -> bool:
    """Check if a structure document exists.

    Args:
        path: Path to check. If None, uses the default document path.

    Returns:
        True if the file exists, False otherwise.
    """
    document_path = path or get_document_path()
    return document_path.exists()


def load_document(path: Path | None = None) -> TreeNode:
    """Load a structure document from disk.

    Args:
        path: Path to the document. If None, uses the default document path.

    Returns:
        Root TreeNode of the recorded tree.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the content cannot be parsed.
        DocumentError: If the file cannot be read.
    """
    document_path = path or get_document_path()

    if not document_path.exists():
        raise DocumentNotFoundError(f"Structure document not found: {document_path}")

    try:
        text = document_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentParseError(f"Document is not valid UTF-8: {e}") from e
    except OSError as e:
        raise DocumentError(f"Failed to read document: {e}") from e

    return deserialize(text)


def save_document(node: TreeNode, path: Path | None = None, pretty: bool = True) -> Path:
    """Write a tree to a structure document.

    The whole document is written to a temporary file in the target
    directory and then moved into place with os.replace(). An existing
    document keeps its permission bits.

    Args:
        node: Root of the tree to save.
        path: Destination path. If None, uses the default document path.
        pretty: Write indented JSON.

    Returns:
        Path where the document was saved.

    Raises:
        DocumentWriteError: If the file cannot be written.
    """
    document_path = path or get_document_path()
    text = serialize(node, pretty=pretty)

    tmp_path: Path | None = None
    try:
        document_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=document_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(text)
            f.write("\n")
        os.chmod(tmp_path, get_file_mode(document_path))
        os.replace(str(tmp_path), str(document_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise DocumentWriteError(f"Failed to write document: {e}") from e

    logger.debug("Saved structure document to %s", document_path)
    return document_path
