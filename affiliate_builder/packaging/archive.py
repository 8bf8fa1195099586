"""
Archive du site — index.html + .htaccess + assets/<logo|favicon>.
Écriture atomique : fichier temporaire dans le même dossier puis os.replace.
"""
import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable, Union

from pydantic import BaseModel

from ..assets import ASSETS_PREFIX

log = logging.getLogger(__name__)


class ArchiveResult(BaseModel):
    path:        Path
    total_files: int
    size_bytes:  int


def build_archive(
    path: Union[str, Path],
    html: str,
    htaccess: str,
    assets: Iterable[Path] = (),
) -> ArchiveResult:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", suffix=".zip", dir=path.parent)
    os.close(fd)
    total = 0
    try:
        with zipfile.ZipFile(tmp_name, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("index.html", html)
            zf.writestr(".htaccess", htaccess)
            total = 2
            for asset in assets:
                asset = Path(asset)
                zf.write(asset, arcname=f"{ASSETS_PREFIX}/{asset.name}")
                total += 1
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise

    result = ArchiveResult(path=path, total_files=total, size_bytes=path.stat().st_size)
    log.info("Archive %s : %d fichiers, %d octets", path.name, result.total_files, result.size_bytes)
    return result
