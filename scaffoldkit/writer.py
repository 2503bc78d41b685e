"""Materialize a plan on disk.

The writer walks the plan strictly in order: directories first, then files.
Each entry gets exactly one outcome.  A failure on one entry is recorded
and the writer moves on, so the report always covers the whole plan.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from enum import Enum
from pathlib import Path

from .planner import Plan, PlannedFile
from .results import EntryKind, ErrorKind, ScaffoldReport, WriteOutcome, WriteStatus


class ConflictPolicy(str, Enum):
    """What to do when a planned file already exists."""

    FAIL = "fail"
    SKIP = "skip"
    OVERWRITE = "overwrite"


class FileTreeWriter:
    """Writes planned directories and files under a single project root."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    # -- Public API --------------------------------------------------------

    def write(self, plan: Plan, policy: ConflictPolicy = ConflictPolicy.FAIL) -> ScaffoldReport:
        """Materialize *plan* and return one outcome per entry, in plan order.

        Args:
            plan: Output of :meth:`PathPlanner.plan`.
            policy: Conflict policy for files that already exist.  Existing
                directories are never a conflict.
        """
        policy = ConflictPolicy(policy)
        outcomes: list[WriteOutcome] = []
        for directory in plan.directories:
            outcomes.append(self._write_directory(directory))
        for planned in plan.files:
            outcomes.append(self._write_file(planned, policy))
        return ScaffoldReport(root=str(self.root), outcomes=outcomes)

    # -- Directories -------------------------------------------------------

    def _write_directory(self, rel_path: str) -> WriteOutcome:
        target = self.root / rel_path
        if not self._inside_root(target):
            return _failed(rel_path, EntryKind.DIRECTORY, ErrorKind.OUTSIDE_ROOT, "resolves outside the project root")
        if target.is_dir():
            return WriteOutcome(path=rel_path, kind=EntryKind.DIRECTORY, status=WriteStatus.SKIPPED, reason="exists")
        if target.exists():
            return _failed(rel_path, EntryKind.DIRECTORY, ErrorKind.ALREADY_EXISTS, "a non-directory is in the way")
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return _failed(rel_path, EntryKind.DIRECTORY, ErrorKind.IO_ERROR, str(exc))
        return WriteOutcome(path=rel_path, kind=EntryKind.DIRECTORY, status=WriteStatus.CREATED)

    # -- Files -------------------------------------------------------------

    def _write_file(self, planned: PlannedFile, policy: ConflictPolicy) -> WriteOutcome:
        target = self.root / planned.path
        if not self._inside_root(target):
            return _failed(
                planned.path, EntryKind.FILE, ErrorKind.OUTSIDE_ROOT,
                "resolves outside the project root", planned.template_id,
            )

        existed = target.exists()
        if existed:
            if target.is_dir():
                return _failed(
                    planned.path, EntryKind.FILE, ErrorKind.ALREADY_EXISTS,
                    "a directory is in the way", planned.template_id,
                )
            if policy is ConflictPolicy.FAIL:
                return _failed(
                    planned.path, EntryKind.FILE, ErrorKind.ALREADY_EXISTS,
                    "file already exists", planned.template_id,
                )
            if policy is ConflictPolicy.SKIP:
                return WriteOutcome(
                    path=planned.path,
                    status=WriteStatus.SKIPPED,
                    template_id=planned.template_id,
                    reason="exists",
                )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic(target, planned.content)
        except OSError as exc:
            return _failed(planned.path, EntryKind.FILE, ErrorKind.IO_ERROR, str(exc), planned.template_id)

        return WriteOutcome(
            path=planned.path,
            status=WriteStatus.OVERWRITTEN if existed else WriteStatus.CREATED,
            template_id=planned.template_id,
        )

    def _write_atomic(self, path: Path, content: str) -> None:
        """Write to a temp file in the target directory, then rename over *path*.

        Readers see either the previous file (or nothing) or the complete new
        content, never a partial write.  The result keeps the mode of the file
        it replaces; new files get the usual umask-derived mode.
        """
        mode = _target_mode(path)
        fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(temp_name, mode)
            os.replace(temp_name, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(temp_name)
            raise

    def _inside_root(self, target: Path) -> bool:
        root = self.root.resolve()
        resolved = target.resolve()
        return resolved == root or root in resolved.parents


def _target_mode(path: Path) -> int:
    """Permission bits for *path*: its current mode, or 0o666 minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    # The umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _failed(
    path: str,
    kind: EntryKind,
    error_kind: ErrorKind,
    error: str,
    template_id: str | None = None,
) -> WriteOutcome:
    return WriteOutcome(
        path=path,
        kind=kind,
        status=WriteStatus.FAILED,
        template_id=template_id,
        error_kind=error_kind,
        error=error,
    )
