"""
File tools.

Every path is resolved and checked against a FilePolicy before use: it must
sit under one of the allowed directories and carry an allowed extension.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from ..errors import ToolExecutionError
from .base import BaseTool, ToolArguments


@dataclass
class FilePolicy:
    """Sandbox settings shared by the file tools."""
    allowed_paths: List[str] = field(default_factory=lambda: ["."])
    allowed_extensions: Optional[List[str]] = None
    max_file_size: int = 1024 * 1024
    read_only: bool = False

    def _allowed_roots(self) -> List[Path]:
        return [Path(p).resolve() for p in self.allowed_paths]

    def resolve(self, path: str) -> Path:
        """Resolve a path and enforce the sandbox rules."""
        if not path:
            raise ToolExecutionError("Invalid path: empty path")

        resolved = Path(path).resolve()

        if not any(_is_within(resolved, root) for root in self._allowed_roots()):
            raise ToolExecutionError(
                f"Security violation: Path '{resolved}' is not in an allowed directory"
            )

        if self.allowed_extensions is not None and resolved.suffix and not resolved.is_dir():
            ext = resolved.suffix.lower()
            if ext not in [e.lower() for e in self.allowed_extensions]:
                raise ToolExecutionError(
                    f"Unsupported extension: Extension '{ext}' is not allowed"
                )

        return resolved

    def check_size(self, size: int) -> None:
        if size > self.max_file_size:
            raise ToolExecutionError(
                f"File too large: {size} bytes exceeds maximum of {self.max_file_size} bytes"
            )

    def check_writable(self) -> None:
        if self.read_only:
            raise ToolExecutionError("Server is in read-only mode")


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


class FileInfo(BaseModel):
    name: str
    path: str
    file_type: str
    size: int
    modified: str
    readable: bool
    writable: bool


def file_info(path: Path, read_only: bool = False) -> FileInfo:
    try:
        stat = path.stat()
    except OSError as e:
        raise ToolExecutionError(f"I/O error: {e}") from e

    if path.is_dir():
        file_type = "directory"
    elif path.is_file():
        file_type = "file"
    else:
        file_type = "other"

    return FileInfo(
        name=path.name,
        path=str(path),
        file_type=file_type,
        size=stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
        readable=os.access(path, os.R_OK),
        writable=not read_only and os.access(path, os.W_OK),
    )


class FilePathRequest(ToolArguments):
    file_path: str = Field(description="Path to the file")


class WriteFileRequest(ToolArguments):
    file_path: str = Field(description="Path to the file to write")
    content: str = Field(description="Content to write to the file")
    create_directories: bool = Field(
        False,
        description="Whether to create parent directories if they don't exist",
    )


class ListDirectoryRequest(ToolArguments):
    directory_path: str = Field(description="Path to the directory to list")
    include_hidden: bool = Field(False, description="Whether to include hidden files")


class ReadFileResponse(BaseModel):
    content: str
    path: str
    size: int
    encoding: str = "utf-8"


class WriteFileResponse(BaseModel):
    path: str
    bytes_written: int
    message: str


class DeleteFileResponse(BaseModel):
    path: str
    message: str


class DirectoryListing(BaseModel):
    path: str
    files: List[FileInfo]
    total_count: int


class FileTool(BaseTool):
    """Base for tools that work under a FilePolicy."""

    def __init__(self, policy: Optional[FilePolicy] = None):
        self.policy = policy or FilePolicy()


class ReadFileTool(FileTool):

    @property
    def name(self) -> str:
        return "read_file"

    @property
    def description(self) -> str:
        return "Read the contents of a text file safely"

    @property
    def arguments_model(self):
        return FilePathRequest

    def execute(self, request: FilePathRequest) -> ReadFileResponse:
        path = self.policy.resolve(request.file_path)

        if not path.exists():
            raise ToolExecutionError(f"File not found: {request.file_path}")
        if not path.is_file():
            raise ToolExecutionError(f"Not a file: {request.file_path}")

        self.policy.check_size(path.stat().st_size)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ToolExecutionError(f"Failed to read file: {e}") from e

        return ReadFileResponse(content=content, path=str(path), size=path.stat().st_size)


class WriteFileTool(FileTool):

    @property
    def name(self) -> str:
        return "write_file"

    @property
    def description(self) -> str:
        return "Write content to a file safely"

    @property
    def arguments_model(self):
        return WriteFileRequest

    def execute(self, request: WriteFileRequest) -> WriteFileResponse:
        self.policy.check_writable()
        self.policy.check_size(len(request.content.encode("utf-8")))
        path = self.policy.resolve(request.file_path)

        if path.is_dir():
            raise ToolExecutionError(f"Not a file: {request.file_path}")

        parent = path.parent
        if not parent.exists():
            if not request.create_directories:
                raise ToolExecutionError("Invalid path: Parent directory does not exist")
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ToolExecutionError(f"Failed to create directories: {e}") from e

        try:
            path.write_text(request.content, encoding="utf-8")
        except OSError as e:
            raise ToolExecutionError(f"Failed to write file: {e}") from e

        return WriteFileResponse(
            path=str(path),
            bytes_written=len(request.content.encode("utf-8")),
            message="File written successfully",
        )


class DeleteFileTool(FileTool):

    @property
    def name(self) -> str:
        return "delete_file"

    @property
    def description(self) -> str:
        return "Delete a file safely"

    @property
    def arguments_model(self):
        return FilePathRequest

    def execute(self, request: FilePathRequest) -> DeleteFileResponse:
        self.policy.check_writable()
        path = self.policy.resolve(request.file_path)

        if not path.exists():
            raise ToolExecutionError(f"File not found: {request.file_path}")
        if not path.is_file():
            raise ToolExecutionError(f"Not a file: {request.file_path}")

        try:
            path.unlink()
        except OSError as e:
            raise ToolExecutionError(f"Failed to delete file: {e}") from e

        return DeleteFileResponse(path=str(path), message="File deleted successfully")


class ListDirectoryTool(FileTool):

    @property
    def name(self) -> str:
        return "list_directory"

    @property
    def description(self) -> str:
        return "List contents of a directory"

    @property
    def arguments_model(self):
        return ListDirectoryRequest

    def execute(self, request: ListDirectoryRequest) -> DirectoryListing:
        path = self.policy.resolve(request.directory_path)

        if not path.is_dir():
            raise ToolExecutionError(f"Not a directory: {request.directory_path}")

        files = []
        try:
            entries = sorted(path.iterdir())
        except OSError as e:
            raise ToolExecutionError(f"Failed to read directory: {e}") from e

        for entry in entries:
            if not request.include_hidden and entry.name.startswith("."):
                continue
            try:
                files.append(file_info(entry, self.policy.read_only))
            except ToolExecutionError:
                continue  # vanished or unreadable entry

        return DirectoryListing(path=str(path), files=files, total_count=len(files))


class FileInfoTool(FileTool):

    @property
    def name(self) -> str:
        return "get_file_info"

    @property
    def description(self) -> str:
        return "Get information about a file or directory"

    @property
    def arguments_model(self):
        return FilePathRequest

    def execute(self, request: FilePathRequest) -> FileInfo:
        path = self.policy.resolve(request.file_path)
        if not path.exists():
            raise ToolExecutionError(f"File not found: {request.file_path}")
        return file_info(path, self.policy.read_only)
