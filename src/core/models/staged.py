"""In-flight changes to a record and their deferred commit actions."""

from collections.abc import Callable
from typing import Any

from core.models.image import StoredImage
from core.models.record import ImageRecord, image_collections

CommitAction = Callable[["StagedChange"], None]


class StagedChange:
    """Proposed field values for a record plus actions to run after the write.

    The persistence engine writes `changes` first and only then runs the
    commit actions, in the order they were prepared. Actions read and fold
    their results back through `fetch_field` / `put_field`, and report
    failures with `add_error`.
    """

    def __init__(self, record: ImageRecord, **attrs: Any) -> None:
        self.data = record
        self.changes: dict[str, Any] = dict(attrs)
        self.actions: list[CommitAction] = []
        self.errors: dict[str, list[str]] = {}
        self.lock_version = False

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def expected_version(self) -> int:
        return self.data.version

    def fetch_field(self, name: str) -> Any:
        """Return the proposed value of a field, falling back to the record.

        Image collections are copied on first access so that staged edits,
        including key rewrites, never touch the record's own images.
        """
        if name in self.changes:
            return self.changes[name]

        value = getattr(self.data, name)
        if name in image_collections(type(self.data)):
            images: list[StoredImage] = [image.model_copy() for image in value]
            self.changes[name] = images
            return images

        return value

    def put_field(self, name: str, value: Any) -> "StagedChange":
        self.changes[name] = value
        return self

    def apply_changes(self) -> ImageRecord:
        """Return a copy of the record with every proposed change applied."""
        return self.data.model_copy(update=self.changes)

    def prepare(self, action: CommitAction) -> "StagedChange":
        self.actions.append(action)
        return self

    def add_error(self, field: str, message: str) -> "StagedChange":
        self.errors.setdefault(field, []).append(message)
        return self

    def optimistic_lock(self) -> "StagedChange":
        self.lock_version = True
        return self

    def merge(self, other: "StagedChange") -> "StagedChange":
        """Combine another staged change for the same record into this one."""
        if type(other.data) is not type(self.data) or other.data.id != self.data.id:
            raise ValueError("Cannot merge staged changes for different records")

        self.changes.update(other.changes)
        self.actions.extend(other.actions)
        for field, messages in other.errors.items():
            self.errors.setdefault(field, []).extend(messages)
        self.lock_version = self.lock_version or other.lock_version
        return self
