from abc import ABC, abstractmethod


class AbstractTranslateDispatcher(ABC):
    """Hands translation tasks to the external worker."""

    @abstractmethod
    async def dispatch(self, task_id: str) -> None:
        """Ask the worker to process ``task_id``.

        The worker reads the task row itself and reports back through the
        task report endpoint once done.

        Raises:
            ExternalServiceAppError: If the worker could not be reached.
        """
        ...
