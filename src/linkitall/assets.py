"""Copy the page's static files next to the generated HTML."""

import shutil
from pathlib import Path

ASSET_DIR_NAME = "linkitall_assets"
PACKAGED_ASSETS = Path(__file__).parent / "static"


def asset_dir(target_dir: Path) -> Path:
    """Path of the asset directory inside target_dir."""
    return Path(target_dir) / ASSET_DIR_NAME


def copy_assets(target_dir: Path, overwrite: bool = False) -> bool:
    """Copy packaged assets to <target_dir>/linkitall_assets.

    Args:
        target_dir: Directory where the page is generated.
        overwrite: Replace files in an existing asset directory.

    Returns:
        True if files were copied, False if an existing directory was kept.
    """
    target = asset_dir(target_dir)
    if target.is_dir() and not overwrite:
        print(f"Asset dir {target} already exists. Skipping copying assets")
        return False

    print(f"Copy {PACKAGED_ASSETS} -> {target}")
    shutil.copytree(PACKAGED_ASSETS, target, dirs_exist_ok=True)
    return True
