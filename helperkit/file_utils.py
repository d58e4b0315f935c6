"""
Filesystem helpers: path and extension validation, directory copy/move/clean.

Validation helpers return nothing and raise on the first problem found:
``InvalidArgumentError`` for unusable arguments, the matching ``OSError``
subclass for filesystem state.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from .error_handler import InvalidArgumentError, InvalidExtensionError, MissingArgumentError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Extensions = Union[str, Iterable[str]]


def _require_path(path: Optional[PathLike], argument_name: str = "path") -> Path:
    if path is None or not str(path).strip():
        raise InvalidArgumentError(argument_name, f"Provided path is invalid: {path!r}", path)
    return Path(path)


def validate_directory(path: PathLike, shall_exist: bool = True) -> None:
    """
    Check that ``path`` is an existing directory, or that it does not exist.

    Raises:
        InvalidArgumentError: If ``path`` is None or blank.
        NotADirectoryError: If a directory is expected but ``path`` is a file.
        FileNotFoundError: If a directory is expected but nothing is there.
        FileExistsError: If ``shall_exist`` is False and the directory exists.
    """
    directory = _require_path(path)

    if shall_exist:
        if not directory.is_dir():
            if directory.is_file():
                raise NotADirectoryError(f"Given entry is a file: {directory}")
            raise FileNotFoundError(f"Directory does not exist: {directory}")
    elif directory.is_dir():
        raise FileExistsError(f"Directory already exists: {directory}")


def validate_extension(path: PathLike, valid_extensions: Extensions) -> None:
    """
    Check that ``path`` ends with one of ``valid_extensions``.

    Extensions include the leading dot (``".xml"``) and are compared
    case-insensitively. A single extension may be passed as a string.

    Raises:
        InvalidArgumentError: If ``path`` is blank or an extension is blank.
        MissingArgumentError: If ``valid_extensions`` is None.
        InvalidExtensionError: If the extension is not accepted.
    """
    file_path = _require_path(path)

    if valid_extensions is None:
        raise MissingArgumentError("valid_extensions", "Provided extensions collection is None")

    if isinstance(valid_extensions, str):
        valid_extensions = [valid_extensions]
    else:
        valid_extensions = list(valid_extensions)

    if any(ext is None or not str(ext).strip() for ext in valid_extensions):
        raise InvalidArgumentError(
            "valid_extensions",
            "Provided extensions collection contains an invalid extension",
            valid_extensions,
        )

    actual_extension = file_path.suffix
    if actual_extension.lower() not in {ext.lower() for ext in valid_extensions}:
        raise InvalidExtensionError(
            f"Invalid extension '{actual_extension}' for {file_path}. "
            f"Expected one of: {', '.join(valid_extensions)}"
        )


def validate_file(
    path: PathLike,
    valid_extensions: Optional[Extensions] = None,
    shall_exist: bool = True,
) -> None:
    """
    Check that ``path`` is an existing file (or that it does not exist),
    optionally with one of ``valid_extensions``.

    Raises:
        InvalidArgumentError: If ``path`` is None or blank.
        IsADirectoryError: If a file is expected but ``path`` is a directory.
        FileNotFoundError: If a file is expected but nothing is there.
        FileExistsError: If ``shall_exist`` is False and the file exists.
        InvalidExtensionError: If the extension is not accepted.
    """
    file_path = _require_path(path)

    if shall_exist:
        if not file_path.is_file():
            if file_path.is_dir():
                raise IsADirectoryError(f"Given entry is a directory: {file_path}")
            raise FileNotFoundError(f"File does not exist: {file_path}")
    elif file_path.is_file():
        raise FileExistsError(f"File already exists: {file_path}")

    if valid_extensions is not None:
        validate_extension(file_path, valid_extensions)


def count_files(path: PathLike) -> int:
    """Count regular files anywhere below ``path``."""
    validate_directory(path)
    return sum(1 for entry in Path(path).rglob("*") if entry.is_file())


def copy_directory(
    source: PathLike,
    target: PathLike,
    on_file_copied: Optional[Callable[[Path], None]] = None,
) -> Path:
    """
    Recursively copy the ``source`` directory to ``target``.

    ``target`` must not exist yet. ``on_file_copied`` is called with the
    destination path of every copied file.

    Returns:
        The target directory path.
    """
    validate_directory(source)
    validate_directory(target, shall_exist=False)

    source_dir, target_dir = Path(source), Path(target)

    def copy_file(src: str, dst: str) -> str:
        result = shutil.copy2(src, dst)
        if on_file_copied is not None:
            on_file_copied(Path(result))
        return result

    logger.debug(f"Copying directory {source_dir} -> {target_dir}")
    shutil.copytree(source_dir, target_dir, copy_function=copy_file)
    return target_dir


def move_directory(
    source: PathLike,
    target: PathLike,
    on_file_copied: Optional[Callable[[Path], None]] = None,
) -> Path:
    """Copy ``source`` to ``target``, then delete ``source``."""
    target_dir = copy_directory(source, target, on_file_copied)
    shutil.rmtree(source)
    logger.debug(f"Removed source directory {source} after move")
    return target_dir


def clean_directory(path: PathLike) -> int:
    """
    Delete everything inside ``path`` but keep the directory itself.

    Returns:
        Number of immediate children removed.
    """
    validate_directory(path)

    removed = 0
    for entry in Path(path).iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1

    logger.debug(f"Cleaned {removed} entries from {path}")
    return removed
