"""
Assets de marque uploadés — lookup seul (l'upload n'est pas géré ici).
Layout disque : <uploads>/<project_id>/logo.<ext>, favicon.<ext>
"""
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel

from . import config

log = logging.getLogger(__name__)

ASSETS_PREFIX = "assets"


class BrandAssets(BaseModel):
    logo:    Optional[Path] = None
    favicon: Optional[Path] = None

    @property
    def logo_url(self) -> Optional[str]:
        return f"{ASSETS_PREFIX}/{self.logo.name}" if self.logo else None

    @property
    def favicon_url(self) -> Optional[str]:
        return f"{ASSETS_PREFIX}/{self.favicon.name}" if self.favicon else None

    def files(self) -> list:
        return [p for p in (self.logo, self.favicon) if p is not None]


def _first_starting_with(directory: Path, prefix: str) -> Optional[Path]:
    # ordre alphabétique
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.name.startswith(prefix):
            return path
    return None


def find_brand_assets(project_id: str, uploads_dir: Union[str, Path, None] = None) -> BrandAssets:
    """Premier fichier commençant par `logo` / `favicon`. Dossier absent → aucun asset."""
    directory = Path(uploads_dir or config.uploads_dir()) / project_id
    if not directory.is_dir():
        return BrandAssets()

    assets = BrandAssets(
        logo=_first_starting_with(directory, "logo"),
        favicon=_first_starting_with(directory, "favicon"),
    )
    log.debug("Assets %s : logo=%s favicon=%s", project_id, assets.logo, assets.favicon)
    return assets
