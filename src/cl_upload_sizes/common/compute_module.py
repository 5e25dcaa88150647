"""ComputeModule - Abstract base class for upload tasks."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Callable, ClassVar, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import UploadSizesError
from .static_storage import StaticStorage


class TaskOutput(BaseModel):
    pass


P = TypeVar("P", bound=BaseModel)
Q = TypeVar("Q", bound=TaskOutput)


class TaskResult(BaseModel):
    """Result returned by ComputeModule.execute()."""

    status: str
    output: dict[str, object] | None = None
    error: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class ComputeModule(ABC, Generic[P, Q]):
    """
    Stateless, template-method based compute module.

    - Params are validated once and passed through
    - run() owns persistence and raises on failure
    - execute() reports failures as an error TaskResult
    """

    schema: type[P]

    @property
    @abstractmethod
    def task_type(self) -> str: ...

    def setup(self) -> None:
        """Optional per-execution setup."""
        pass

    @abstractmethod
    async def run(
        self,
        params: P,
        storage: StaticStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> Q:
        """
        Execute task.

        - May persist data via storage
        - Must return metadata only
        """
        ...

    async def execute(
        self,
        params: Mapping[str, object],
        storage: StaticStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> TaskResult:
        try:
            validated = self.schema.model_validate(params)

            self.setup()

            output = await self.run(
                validated,
                storage,
                progress_callback,
            )

            return TaskResult(status="ok", output=output.model_dump())

        except ValidationError as exc:
            logger.error(f"{self.task_type}: invalid params: {exc}")
            return TaskResult(status="error", error=str(exc))

        except FileNotFoundError as exc:
            logger.error(f"{self.task_type}: input not found: {exc}")
            return TaskResult(status="error", error=f"Input file not found: {exc}")

        except UploadSizesError as exc:
            logger.error(f"{self.task_type}: {exc}")
            return TaskResult(status="error", error=str(exc))

        except Exception as exc:
            logger.exception(f"{self.task_type}: unexpected failure: {exc}")
            return TaskResult(status="error", error=str(exc))
