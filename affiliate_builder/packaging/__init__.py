from .archive import ArchiveResult, build_archive
from .htaccess import build_htaccess, resolve_primary_domain

__all__ = ["ArchiveResult", "build_archive", "build_htaccess", "resolve_primary_domain"]
