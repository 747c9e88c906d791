from __future__ import annotations

import logging

from countdown_tasks.application.controller import TaskCollectionController
from countdown_tasks.domain.errors import ValidationError
from countdown_tasks.domain.models import Task
from countdown_tasks.domain.prompts import Cancelled, InputSurface, Submitted, validate_submission


logger = logging.getLogger(__name__)


class InteractiveTaskActions:
    """Prompt the user, then hand the answer to the controller.

    A cancelled prompt or a declined confirmation is a no-op: no store call
    is made and the collection stays as it was.
    """

    def __init__(self, controller: TaskCollectionController, surface: InputSurface):
        self.controller = controller
        self.surface = surface

    def add_task(self) -> Task | None:
        submission = self._ask("Add task")
        if submission is None:
            return None
        return self.controller.add(submission.text, submission.deadline)

    def edit_task(self, task_id: str) -> bool:
        task = self.controller.get(task_id)
        if task is None:
            logger.warning("Edit requested for unknown task id=%s", task_id)
            return False

        submission = self._ask("Edit task", Submitted(text=task.text, deadline=task.deadline))
        if submission is None:
            return False
        return self.controller.edit(task_id, submission.text, submission.deadline)

    def delete_task(self, task_id: str) -> bool:
        if not self.surface.confirm("Delete task?", "A deleted task cannot be restored."):
            return False
        return self.controller.delete(task_id)

    def toggle_task(self, task_id: str) -> bool:
        return self.controller.toggle_complete(task_id)

    def _ask(self, title: str, initial: Submitted | None = None) -> Submitted | None:
        result = self.surface.prompt_task(title, initial)
        if isinstance(result, Cancelled):
            return None
        try:
            return validate_submission(result.text, result.deadline)
        except ValidationError as exc:
            logger.warning("Discarding invalid submission: %s", exc)
            return None
