"""Factory for task input schemas."""

from polyfactory.factories.pydantic_factory import ModelFactory

from taskboard.modules.tasks.schemas import TaskCreate


class TaskCreateFactory(ModelFactory[TaskCreate]):
    """Factory for generating valid task create payloads.

    Status and priority are left unset so the service defaults apply.
    """

    __model__ = TaskCreate

    @classmethod
    def title(cls) -> str:
        """Generate a short title."""
        return cls.__faker__.sentence(nb_words=4)[:100]

    @classmethod
    def description(cls) -> str:
        return cls.__faker__.text(max_nb_chars=200)

    @classmethod
    def due_date(cls) -> None:
        return None

    @classmethod
    def status(cls) -> None:
        return None

    @classmethod
    def priority(cls) -> None:
        return None

    @classmethod
    def tags(cls) -> list[str]:
        return [cls.__faker__.word() for _ in range(2)]
