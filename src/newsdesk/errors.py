"""Domain errors raised by the story lifecycle and the publish orchestrator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from newsdesk.models.story import StoryStatus


class NewsdeskError(Exception):
    """Base class for all workflow errors."""


class NotAuthorizedError(NewsdeskError, PermissionError):
    """The requester is not a reporter or lacks publishing rights."""

    def __init__(self, requested_by: str, reason: str) -> None:
        super().__init__(f"{requested_by}: {reason}")
        self.requested_by = requested_by
        self.reason = reason


class EmptyBatchError(NewsdeskError):
    """No stories are approved, so there is nothing to publish."""

    def __init__(self) -> None:
        super().__init__("No stories are ready to publish")


class StoryNotFoundError(NewsdeskError, LookupError):
    def __init__(self, story_id: str) -> None:
        super().__init__(f"Story {story_id} not found")
        self.story_id = story_id


class InvalidTransitionError(NewsdeskError):
    """A status change would skip a stage or move a story backwards."""

    def __init__(self, story_id: str, current: StoryStatus, target: StoryStatus) -> None:
        super().__init__(f"Story {story_id} cannot move from {current!s} to {target!s}")
        self.story_id = story_id
        self.current = current
        self.target = target


class CommitPreconditionError(NewsdeskError):
    """The publish batch contains stories that are no longer approved.

    Nothing has been written when this is raised; the batch needs manual
    investigation.
    """

    def __init__(self, offending: dict[str, StoryStatus | None]) -> None:
        details = ", ".join(
            f"{story_id}={status or 'missing'}" for story_id, status in offending.items()
        )
        super().__init__(f"Publish batch contains non-approved stories: {details}")
        self.offending = offending


class StageError(NewsdeskError):
    """Staging finished but the status write or the approvals notice failed."""

    def __init__(self, story_id: str, failures: Sequence[BaseException]) -> None:
        reasons = "; ".join(repr(exc) for exc in failures)
        super().__init__(f"Staging story {story_id} partially failed: {reasons}")
        self.story_id = story_id
        self.failures = list(failures)


class BatchWriteError(NewsdeskError):
    """A batch update failed part way; promoted documents were rolled back.

    ``unreverted`` lists documents whose rollback also failed and need manual
    repair.
    """

    def __init__(
        self,
        failed: dict[str, BaseException],
        unreverted: Sequence[str] = (),
    ) -> None:
        message = f"Batch update failed for: {', '.join(failed)}"
        if unreverted:
            message += f"; rollback failed for: {', '.join(unreverted)}"
        super().__init__(message)
        self.failed = failed
        self.unreverted = list(unreverted)
