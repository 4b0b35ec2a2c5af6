"""Export-related exceptions."""

from __future__ import annotations

from pathlib import Path

from objperms.exceptions.base import ObjPermsError


class OutputExistsError(ObjPermsError, FileExistsError):
    """Raised when the export target exists and overwriting was not requested."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} already exists (use --force to overwrite)")
        self.path = path
