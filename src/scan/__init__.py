"""PHP and Blade file discovery."""

from scan.files import DEFAULT_SKIP_DIRS, ScannedFile, SourceKind, scan_sources

__all__ = ["DEFAULT_SKIP_DIRS", "ScannedFile", "SourceKind", "scan_sources"]
