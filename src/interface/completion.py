"""Two-step completion of a task, as driven by the finishing screen.

The first ``confirm`` only arms the draft; the second commits the staged
evidence through the task service. Neither step is part of the task's own
lifecycle: an abandoned draft leaves the task IN_PROGRESS.
"""

import logging
from datetime import datetime

from src.core.repository import Repositories
from src.domain.task import Task
from src.domain.user import User
from src.modules.tasks import service as task_service


logger = logging.getLogger(__name__)


class CompletionDraft:
    """Photos and a note staged for finishing one task."""

    def __init__(self, task_id: str, condo_id: str) -> None:
        self.task_id = task_id
        self.condo_id = condo_id
        self.photos: list[str] = []
        self.observation: str | None = None
        self.armed = False

    @property
    def ready(self) -> bool:
        """Whether enough evidence is staged to confirm."""
        return bool(self.photos)

    def add_photo(self, photo: str) -> None:
        self.photos.append(photo)

    def remove_photo(self, index: int) -> None:
        del self.photos[index]

    def set_observation(self, text: str | None) -> None:
        self.observation = text

    def cancel(self) -> None:
        """Discard everything staged."""
        self.photos.clear()
        self.observation = None
        self.armed = False

    async def confirm(self, *, repos: Repositories, actor: User, now: datetime | None = None) -> Task | None:
        """Arm on the first call, commit on the second.

        Returns:
            None when the draft was only armed, the completed task once committed

        Raises:
            ValueError: If no photo is staged
        """
        if not self.ready:
            msg = f"Cannot finish task {self.task_id} without at least one photo"
            raise ValueError(msg)

        if not self.armed:
            self.armed = True
            logger.debug("Completion of task %s armed", self.task_id)
            return None

        task = await task_service.complete_task(
            repos=repos,
            actor=actor,
            condo_id=self.condo_id,
            task_id=self.task_id,
            photos=list(self.photos),
            observation=self.observation,
            now=now,
        )
        self.cancel()
        return task
