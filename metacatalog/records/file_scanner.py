"""
File scanner for record file discovery.

Finds YAML record files under a directory so a store can be rebuilt
by replaying them.
"""

from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ..core import get_logger

logger = get_logger(__name__)

RECORD_EXTENSIONS = [".yaml", ".yml"]


class RecordFileScanner:
    """
    Discovers record files in a directory tree.

    Files are yielded in sorted path order so replays are repeatable.
    """

    def __init__(
        self,
        root_directory: Union[str, Path],
        extensions: List[str] = None,
        recursive: bool = True
    ):
        """
        Initialize the file scanner.

        Args:
            root_directory: Directory to scan.
            extensions: File extensions to include. Defaults to YAML.
            recursive: Whether to descend into subdirectories.
        """
        self.root_directory = Path(root_directory)
        self.extensions = [ext.lower() for ext in (extensions or RECORD_EXTENSIONS)]
        self.recursive = recursive

    def scan(self) -> Iterator[Path]:
        """
        Yield matching file paths.

        Yields:
            Path objects for each record file.
        """
        if not self.root_directory.is_dir():
            logger.error(f"Records directory does not exist: {self.root_directory}")
            return

        pattern = "**/*" if self.recursive else "*"
        candidates = sorted(
            p for p in self.root_directory.glob(pattern)
            if p.is_file() and p.suffix.lower() in self.extensions
        )

        logger.info(f"Found {len(candidates)} record files in {self.root_directory}")

        yield from candidates

    def read_all(self) -> Iterator[Tuple[Path, bytes]]:
        """
        Yield (path, raw bytes) pairs for every record file.

        Unreadable files are logged and skipped.
        """
        for filepath in self.scan():
            try:
                yield filepath, filepath.read_bytes()
            except OSError as e:
                logger.warning(f"Cannot read record file {filepath}: {e}")
