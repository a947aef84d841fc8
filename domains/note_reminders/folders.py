"""Source folder normalisation and autocomplete."""

import re

ROOT_FOLDER = "/"


def normalize_folder(path: str) -> str:
    """Normalise a vault folder path ('a//b/' -> 'a/b', '' -> '/')."""
    cleaned = re.sub(r"[\\/]+", "/", (path or "").strip()).strip("/")
    return cleaned or ROOT_FOLDER


def is_in_folder(path: str, folder: str) -> bool:
    """Check whether a document path lies under a source folder."""
    folder = normalize_folder(folder)
    if folder == ROOT_FOLDER:
        return True
    path = path.lstrip("/")
    return path == folder or path.startswith(folder + "/")


def suggest_folders(all_folders: list[str], query: str) -> list[str]:
    """Suggest folders whose path contains the query (case-insensitive).

    The vault root is always offered first.
    """
    needle = query.lower()
    candidates = [ROOT_FOLDER] + [f for f in all_folders if f != ROOT_FOLDER]
    return [folder for folder in candidates if needle in folder.lower()]
