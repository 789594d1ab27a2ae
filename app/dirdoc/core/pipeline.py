"""Synchronization pipeline for the structure document.

Runs one full update: scan the filesystem, read the previous document,
diff the two trees, carry descriptions over, validate, sort and save.
Presentation is left to the caller.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from dirdoc.core.config import DirDocConfig
from dirdoc.core.diff import DiffEngine, DiffResult
from dirdoc.core.document import (
    DocumentParseError,
    document_exists,
    load_document,
    save_document,
)
from dirdoc.core.merge import transfer_descriptions
from dirdoc.core.scanner import DirectoryScanner
from dirdoc.core.sorter import sort_tree
from dirdoc.core.validator import ValidationResult, validate
from dirdoc.models.node import NodeType, TreeNode

logger = logging.getLogger(__name__)

DOCUMENT_DESCRIPTION = "Directory structure definition file"


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of a synchronization run.

    Attributes:
        tree: Final sorted tree that was saved.
        output_path: Where the document was written.
        created: True if no usable previous document existed.
        parse_failed: True if a previous document existed but was unreadable.
        diff: Comparison with the previous document (None when skipped).
        validation: Description validation of the saved tree (None when skipped).
    """

    tree: TreeNode
    output_path: Path
    created: bool
    parse_failed: bool = False
    diff: DiffResult | None = None
    validation: ValidationResult | None = None

    @property
    def has_changes(self) -> bool:
        """True if nodes were added or removed since the previous document."""
        return self.diff is not None and self.diff.has_discrepancies

    @property
    def root_path(self) -> str:
        """Report path prefix of the root, e.g. ``/project/``."""
        return f"/{self.tree.name}/"


def sync_structure(
    config: DirDocConfig,
    output_path: Path,
    *,
    root: str | Path | None = None,
    scan_only: bool = False,
    pretty: bool = True,
) -> SyncResult:
    """Bring the structure document in line with the filesystem.

    Args:
        config: Scan and validation settings.
        output_path: Structure document to read and rewrite.
        root: Directory to scan. Defaults to ``config.scan.root``.
        scan_only: Skip comparison and validation; descriptions are
            still carried over from the previous document.
        pretty: Write indented JSON.

    Returns:
        SyncResult describing what was found and written.

    Raises:
        PathNotFoundError: If the scan root does not exist.
        ScanError: If the filesystem cannot be read.
        DocumentError: If the previous document cannot be read for a
            reason other than its content.
        DocumentWriteError: If the document cannot be saved.
    """
    scanner = DirectoryScanner(config.scan)
    actual = scanner.scan(root)

    recorded: TreeNode | None = None
    parse_failed = False
    if document_exists(output_path):
        try:
            recorded = load_document(output_path)
        except DocumentParseError as e:
            logger.warning("Ignoring unreadable document %s: %s", output_path, e)
            parse_failed = True

    diff: DiffResult | None = None
    validation: ValidationResult | None = None

    if recorded is not None:
        if not scan_only:
            engine = DiffEngine(config.validation.min_description_length)
            diff = engine.compare(recorded, actual)
        transfer_descriptions(recorded, actual)
        if not scan_only:
            validation = validate(actual, config.validation)
    else:
        _add_document_entry(actual, output_path.name)

    sort_tree(actual)
    save_document(actual, output_path, pretty=pretty)

    return SyncResult(
        tree=actual,
        output_path=output_path,
        created=recorded is None,
        parse_failed=parse_failed,
        diff=diff,
        validation=validation,
    )


def validate_document(config: DirDocConfig, document_path: Path) -> ValidationResult:
    """Validate the descriptions of an existing structure document.

    Args:
        config: Settings whose ``validation`` section is applied.
        document_path: Document to check.

    Returns:
        ValidationResult for the recorded tree.

    Raises:
        DocumentNotFoundError: If the document does not exist.
        DocumentParseError: If the document cannot be parsed.
    """
    tree = load_document(document_path)
    return validate(tree, config.validation)


def _add_document_entry(tree: TreeNode, file_name: str) -> None:
    """List the structure document itself in a newly created tree."""
    if tree.get_child(file_name, NodeType.FILE) is not None:
        return
    tree.add_child(
        TreeNode(
            name=file_name,
            node_type=NodeType.FILE,
            description=DOCUMENT_DESCRIPTION,
        )
    )
