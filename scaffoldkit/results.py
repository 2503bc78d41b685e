"""Per-entry write outcomes and the aggregated scaffold report.

The report is the engine's only externally observed result: an ordered
list of outcomes (one per planned directory and file), the validation or planning error
that stopped the run if there was one, and the optional install result.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field

from .errors import ScaffoldError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class WriteStatus(str, Enum):
    """Result of materializing one plan entry."""
    CREATED = "created"
    SKIPPED = "skipped"
    OVERWRITTEN = "overwritten"
    FAILED = "failed"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class ErrorKind(str, Enum):
    """Why a write-time entry failed."""
    ALREADY_EXISTS = "already_exists"
    IO_ERROR = "io_error"
    OUTSIDE_ROOT = "outside_root"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

class WriteOutcome(BaseModel):
    """What happened to a single planned directory or file."""

    path: str = Field(..., description="Root-relative POSIX path")
    kind: EntryKind = Field(default=EntryKind.FILE)
    status: WriteStatus
    template_id: Optional[str] = Field(default=None, description="Source template, files only")
    reason: str = Field(default="", description="Why the entry was skipped")
    error_kind: Optional[ErrorKind] = Field(default=None)
    error: str = Field(default="", description="Error detail for failed entries")

    @computed_field  # type: ignore[misc]
    @property
    def failed(self) -> bool:
        return self.status is WriteStatus.FAILED


class InstallResult(BaseModel):
    """Outcome of the external package-manager step."""

    command: list[str] = Field(default_factory=list)
    returncode: int = Field(default=0)
    stdout: str = Field(default="")
    stderr: str = Field(default="")

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class ScaffoldReport(BaseModel):
    """Aggregated result of one scaffold run."""

    root: str = Field(default="", description="Project root the run targeted")
    outcomes: list[WriteOutcome] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Spec-level error that stopped the run")
    error_type: Optional[str] = Field(default=None)
    install: Optional[InstallResult] = Field(default=None)

    @classmethod
    def from_error(cls, exc: ScaffoldError, root: str = "") -> "ScaffoldReport":
        """An empty report carrying a validation or planning error."""
        return cls(root=root, error=str(exc), error_type=type(exc).__name__)

    @computed_field  # type: ignore[misc]
    @property
    def counts(self) -> dict[str, int]:
        """Number of outcomes per status, every status always present."""
        totals = {status.value: 0 for status in WriteStatus}
        for outcome in self.outcomes:
            totals[outcome.status.value] += 1
        return totals

    @computed_field  # type: ignore[misc]
    @property
    def has_skips(self) -> bool:
        return any(o.status is WriteStatus.SKIPPED for o in self.outcomes)

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when nothing failed: no planning error, no failed entry, no failed install.

        Skipped entries are not failures; they are surfaced via ``has_skips``.
        """
        if self.error is not None:
            return False
        if any(o.failed for o in self.outcomes):
            return False
        if self.install is not None and not self.install.success:
            return False
        return True

    def failures(self) -> list[WriteOutcome]:
        return [o for o in self.outcomes if o.failed]

    def summary(self) -> str:
        """One-line human summary, e.g. ``"3 created, 1 skipped, 0 overwritten, 0 failed"``."""
        if self.error is not None:
            return f"Aborted before writing: {self.error_type}: {self.error}"
        return ", ".join(f"{count} {status}" for status, count in self.counts.items())

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
