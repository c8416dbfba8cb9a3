"""
Filesystem Store Adapter

Implements AnnouncementStore as <base_dir>/<code>.<name>/<title>.pdf.
Titles are used verbatim as file names.
"""
from pathlib import Path
from typing import Optional

from ..core.domain import DownloadedFile, ResolvedIdentifier
from ..core.errors import FilesystemError
from ..core.ports import AnnouncementStore

PDF_SUFFIX = ".pdf"


class FilesystemStore(AnnouncementStore):
    """Per-company directories under a base directory"""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def entity_dir(self, identifier: ResolvedIdentifier, create: bool = True) -> Path:
        """Directory for one company; the base directory itself must exist"""
        path = self.base_dir / identifier.dir_name
        if create and not path.exists():
            try:
                path.mkdir()
            except OSError as e:
                raise FilesystemError(f"Cannot create directory {path}: {e}") from e
        return path

    def destination(self, identifier: ResolvedIdentifier, title: str) -> Path:
        return self.entity_dir(identifier, create=False) / f"{title}{PDF_SUFFIX}"

    def _entity_dirs(self, stock_code: Optional[str] = None):
        if not self.base_dir.is_dir():
            return
        for entity_dir in sorted(self.base_dir.iterdir()):
            if not entity_dir.is_dir() or "." not in entity_dir.name:
                continue
            code, _, name = entity_dir.name.partition(".")
            if stock_code and code != stock_code:
                continue
            yield entity_dir, code, name

    def list_downloaded(self, stock_code: Optional[str] = None) -> list[DownloadedFile]:
        """List downloaded PDFs, optionally for one stock code"""
        files = []
        for entity_dir, code, name in self._entity_dirs(stock_code):
            for file_path in sorted(entity_dir.iterdir()):
                if file_path.is_file() and file_path.suffix == PDF_SUFFIX:
                    files.append(DownloadedFile(
                        stock_code=code,
                        display_name=name,
                        title=file_path.stem,
                        path=file_path,
                        size_bytes=file_path.stat().st_size
                    ))
        return files

    def disk_usage(self) -> int:
        """Get total size of downloaded PDFs in bytes"""
        return sum(f.size_bytes for f in self.list_downloaded())
