"""Path-string helpers and the engine's on-disk folder layout.

The string helpers work on engine-style paths that use backslashes as
separators; the ``FileSystem`` methods work on real paths of the host.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
import string
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from amarillo.textutil import to_lower_case

logger = logging.getLogger(__name__)

StrPath = str | PathLike


@dataclass
class DecomposedFilePath:
    """The parts of a file path, with all separators turned into backslashes."""

    file_name: str = ""
    file_extension: str = ""
    file_extension_lower_case: str = ""
    path: str = ""
    file_path: str = ""


def decompose_file_path(file_path: str) -> DecomposedFilePath:
    """Split ``file_path`` into folder, file name and extension.

    The file name is only collected after a separator; dots inside the name
    are kept and the extension is what follows the last dot.
    """
    unified = file_path.replace("/", "\\")
    name = ""
    extension = ""
    in_extension = False
    in_name = False
    last_bar = 0
    for position, char in enumerate(unified):
        if in_extension:
            extension += char
        if char == ".":
            if in_extension and len(extension) > 1:
                name += "." + extension[:-1]
            in_extension = True
            extension = ""
            in_name = False
        if in_name:
            name += char
        if char == "\\":
            last_bar = position
            in_name = True
            name = ""
    return DecomposedFilePath(
        file_name=name,
        file_extension=extension,
        file_extension_lower_case=to_lower_case(extension),
        path=unified[: last_bar + 1],
        file_path=unified,
    )


def get_file_extension(file_name: str) -> str:
    """Text after the last dot, or an empty string: ``file.ex`` gives ``ex``."""
    _, dot, extension = file_name.rpartition(".")
    return extension if dot else ""


def get_filename_without_extension(file_name: str) -> str:
    """Text before the first dot: ``file.ex`` gives ``file``."""
    return file_name.partition(".")[0]


def get_file_name_from_file_path(file_path: str) -> str:
    """Text after the last slash or backslash."""
    cut = max(file_path.rfind("\\"), file_path.rfind("/"))
    return file_path[cut + 1 :]


def get_path_from_file_path(file_path: str) -> str:
    """Everything up to and including the last backslash."""
    head, bar, _ = file_path.rpartition("\\")
    return head + bar if bar else ""


def get_folder_name_from_path(path: str) -> str:
    """Name of the last folder: ``C:\\user\\folder\\`` gives ``folder``."""
    cut = path.rfind("\\", 0, max(len(path) - 1, 0))
    name = path[cut + 1 :]
    return name[:-1] if name.endswith("\\") else name


def get_parent_folder(folder_path: str) -> str:
    """Parent folder with its trailing backslash: ``C:\\user\\folder\\`` gives ``C:\\user\\``."""
    cut = folder_path.rfind("\\", 0, max(len(folder_path) - 1, 0))
    return folder_path[: cut + 1] if cut >= 0 else ""


def get_file_name_number(filename: str) -> int | None:
    """The number written in brackets in ``filename``, such as 3 in ``mesh(3)``."""
    digits = ""
    collecting = False
    for char in filename:
        if char == "(":
            collecting = True
            digits = ""
            continue
        if char == ")":
            collecting = False
        if collecting:
            if char not in string.digits:
                digits = ""
                collecting = False
                continue
            digits += char
    return int(digits) if digits else None


def set_file_name_number(filename: str, number: int) -> str:
    """Replace or append the bracketed number of ``filename``."""
    result = filename
    if get_file_name_number(filename) is not None:
        closing = filename.rfind(")")
        opening = filename.rfind("(", 0, closing) if closing >= 0 else -1
        if opening >= 0:
            result = filename[:opening]
    return f"{result}({number})"


def new_name_for_file_name_collision(filename: str) -> str:
    """Next free-looking name: ``mesh`` becomes ``mesh(1)``, ``mesh(1)`` becomes ``mesh(2)``."""
    number = get_file_name_number(filename)
    return set_file_name_number(filename, 1 if number is None else number + 1)


def normalize_path(full_path: str) -> str:
    """Turn every backslash into a forward slash."""
    return full_path.replace("\\", "/")


class FileSystem:
    """The engine's folder layout under a base directory, and file operations."""

    def __init__(self, base_path: StrPath | None = None) -> None:
        base = Path.cwd() if base_path is None else Path(base_path)
        self.assets_path = self.create_folder(base, "Assets")
        self.library_path = self.create_folder(base, "Library")
        self.library_mesh_path = self.create_folder(self.library_path, "Meshes")
        self.library_prefab_path = self.create_folder(self.library_path, "Prefabs")
        self.library_texture_path = self.create_folder(self.library_path, "Textures")
        self.library_scene_path = self.create_folder(self.library_path, "Scenes")
        self.library_shaders_path = self.create_folder(self.library_path, "Shades")
        self.settings_path = self.create_folder(base, "Settings")
        self.looking_path: str = ""

    def create_folder(self, path: StrPath, name: str) -> Path:
        """Create folder ``name`` inside ``path`` and return it.

        An existing folder is kept; a missing ``path`` raises FileNotFoundError.
        """
        target = Path(path) / name
        try:
            target.mkdir()
        except FileExistsError:
            if not target.is_dir():
                raise
            logger.info("Folder already exists: %s", target)
        return target

    def file_copy_paste(self, filepath: StrPath, new_path: StrPath, overwrite: bool = False) -> Path:
        """Copy a file or a whole folder to ``new_path`` and return the copy's path.

        A file copied onto an existing folder lands inside it. An existing
        file is only replaced when ``overwrite`` is true.
        """
        source = Path(filepath)
        if not source.exists():
            raise FileNotFoundError(f"nothing to copy at {source}")
        return self._copy(source, Path(new_path), overwrite)

    def _copy(self, source: Path, destination: Path, overwrite: bool) -> Path:
        if source.is_dir():
            destination.mkdir(parents=True, exist_ok=True)
            for child in source.iterdir():
                self._copy(child, destination / child.name, overwrite)
            return destination
        if destination.is_dir():
            destination = destination / source.name
        if destination.exists() and not overwrite:
            raise FileExistsError(f"{destination} already exists")
        shutil.copy2(source, destination)
        return destination

    def file_copy_paste_with_new_name(self, filepath: StrPath, new_path: StrPath, new_name: str) -> Path:
        """Copy a file into ``new_path`` under ``new_name``, keeping its extension."""
        source = Path(filepath)
        renamed = self.file_rename(source, new_name)
        try:
            return self.file_copy_paste(renamed, new_path, False)
        finally:
            renamed.rename(source)

    def file_delete(self, filepath: StrPath) -> None:
        """Delete one file."""
        Path(filepath).unlink()

    def folder_delete(self, folderpath: StrPath) -> None:
        """Delete an empty folder."""
        Path(folderpath).rmdir()

    def file_save(self, path: StrPath, content: bytes | str) -> None:
        """Write ``content`` to ``path``, text as UTF-8."""
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        Path(path).write_bytes(data)

    def load_file(self, path: StrPath) -> bytes:
        """Contents of ``path``, or empty bytes when there is no such file."""
        target = Path(path)
        if not target.is_file():
            return b""
        return target.read_bytes()

    def get_files_and_folders_in_path(self, path: StrPath, extension: str = "") -> list[str]:
        """Entries of ``path``, folders ending in a separator, optionally by extension."""
        folder = Path(path)
        if not folder.is_dir():
            return []
        pattern = f"*.{extension.lower()}" if extension else "*"
        return [
            str(entry) + os.sep if entry.is_dir() else str(entry)
            for entry in sorted(folder.iterdir(), key=lambda item: item.name)
            if fnmatch.fnmatchcase(entry.name.lower(), pattern)
        ]

    def get_folders_in_path(self, path: StrPath) -> list[str]:
        """Sub-folders of ``path``, each ending in a separator."""
        folder = Path(path)
        if not folder.is_dir():
            return []
        return [
            str(entry) + os.sep
            for entry in sorted(folder.iterdir(), key=lambda item: item.name)
            if entry.is_dir()
        ]

    def get_files_from_folder(self, folder: StrPath, recursive: bool = False) -> list[Path]:
        """Regular files in ``folder``, and in its sub-folders when ``recursive``."""
        root = Path(folder)
        if not root.is_dir():
            raise FileNotFoundError(f"no folder at {root}")
        entries = root.rglob("*") if recursive else root.iterdir()
        return sorted(entry for entry in entries if entry.is_file())

    def file_exists(self, path: StrPath) -> bool:
        """True when something exists at ``path``."""
        return Path(path).exists()

    def file_rename(self, filepath: StrPath, new_name: str) -> Path:
        """Rename a file in place, keeping its extension; return the new path."""
        source = Path(filepath)
        extension = get_file_extension(source.name)
        target = source.with_name(f"{new_name}.{extension}")
        return source.rename(target)

    def folder_rename(self, folderpath: StrPath, new_name: str) -> Path:
        """Rename a folder inside its parent; return the new path."""
        source = Path(folderpath)
        return source.rename(source.parent / new_name)

    def file_rename_on_name_collision(self, path: StrPath, name: str, extension: str) -> str:
        """A file name, based on ``name``, that is not yet taken in ``path``."""
        folder = Path(path)
        while (folder / f"{name}.{extension}").exists():
            name = new_name_for_file_name_collision(name)
        return name