from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Branch, StaffDirectoryEntry


class StaffDirectoryRepository(Protocol):
    """Read-only staff directory.

    Note (DIP): the analytics service depends on this interface, not on a concrete DB.
    """

    def fetch_staff_directory(
        self,
        organization_id: str,
        *,
        branch_id: Optional[str] = None,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[StaffDirectoryEntry]:
        raise NotImplementedError


class BranchRepository(Protocol):
    def fetch_active_branches(self, organization_id: str) -> Sequence[Branch]:
        raise NotImplementedError
