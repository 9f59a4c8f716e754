"""Step runner for multi-step store workflows.

Posting a document touches several stores in sequence and none of them
share a transaction. The runner records which steps completed so a failure
reports exactly where the workflow stopped.
"""

from collections.abc import Awaitable
from enum import Enum
from typing import TypeVar

from stockledger.config import get_logger
from stockledger.core.exceptions import (
    PersistenceError,
    StockLedgerError,
    WorkflowStepError,
)

logger = get_logger(__name__)

T = TypeVar("T")


class WorkflowStep(str, Enum):
    """Named steps of the document workflows."""

    LOAD_DOCUMENT = "load_document"
    LOAD_SNAPSHOT = "load_snapshot"
    CREATE_DOCUMENT = "create_document"
    APPEND_MOVEMENTS = "append_movements"
    POST_LEDGER = "post_ledger"
    MARK_POSTED = "mark_posted"
    SAVE_SESSION = "save_session"


class StepRunner:
    """Runs awaitables as named steps of one workflow."""

    def __init__(self, workflow: str, **context):
        self.workflow = workflow
        self.context = context
        self.completed: list[WorkflowStep] = []

    @property
    def completed_steps(self) -> list[str]:
        return [s.value for s in self.completed]

    async def run(self, step: WorkflowStep, awaitable: Awaitable[T]) -> T:
        """
        Await one step.

        Domain errors (validation, availability, lookups) propagate
        unchanged. Store failures and unexpected errors are wrapped in
        WorkflowStepError naming the failed step and the steps already done.
        """
        logger.debug(
            "workflow_step_started",
            workflow=self.workflow,
            step=step.value,
            **self.context,
        )
        try:
            result = await awaitable
        except WorkflowStepError:
            raise
        except PersistenceError as e:
            raise self._failure(step, e) from e
        except StockLedgerError:
            raise
        except Exception as e:
            raise self._failure(step, e) from e

        self.completed.append(step)
        logger.debug(
            "workflow_step_completed",
            workflow=self.workflow,
            step=step.value,
            **self.context,
        )
        return result

    def _failure(self, step: WorkflowStep, error: Exception) -> WorkflowStepError:
        logger.error(
            "workflow_step_failed",
            workflow=self.workflow,
            step=step.value,
            completed_steps=self.completed_steps,
            error=str(error),
            **self.context,
        )
        return WorkflowStepError(
            workflow=self.workflow,
            failed_step=step.value,
            completed_steps=self.completed_steps,
            error=str(error),
        )
