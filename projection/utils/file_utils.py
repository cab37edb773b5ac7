"""File operation utilities"""

import shutil
from pathlib import Path
from typing import Iterable, List


def clean_directory(path: Path) -> int:
    """
    Remove everything inside a directory, keeping the directory itself

    Args:
        path: Directory to clean (missing directories are created)

    Returns:
        Number of top level entries removed

    Raises:
        OSError: If an entry cannot be removed
    """
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)
        return 0

    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")

    removed = 0
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1

    return removed


def is_hidden(path: Path, root: Path) -> bool:
    """Check if any component of path below root starts with a dot"""
    return any(part.startswith('.') for part in path.relative_to(root).parts)


def copy_tree(source: Path, target: Path,
              include_dotfiles: bool = True,
              exclude: Iterable[str] = ('.git',)) -> List[Path]:
    """
    Copy the contents of source into target, overwriting existing files

    Args:
        source: Source directory
        target: Destination directory
        include_dotfiles: Copy entries whose name starts with a dot
        exclude: Top level names never copied

    Returns:
        List of copied files relative to target
    """
    excluded = set(exclude)
    copied = []

    for item in sorted(source.rglob('*')):
        relative = item.relative_to(source)
        if relative.parts[0] in excluded:
            continue
        if not include_dotfiles and is_hidden(item, source):
            continue

        destination = target / relative
        if item.is_dir():
            destination.mkdir(parents=True, exist_ok=True)
            continue

        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(item, destination)
        copied.append(relative)

    return copied


def write_if_missing(path: Path, content: str = "") -> bool:
    """
    Create a file only if it does not exist yet

    Args:
        path: File path
        content: Content for a newly created file

    Returns:
        True if the file was created
    """
    if path.exists():
        return False
    path.write_text(content, encoding='utf-8')
    return True
