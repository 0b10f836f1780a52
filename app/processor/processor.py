from dataclasses import dataclass

from app.config.settings import Settings
from app.formatting.diff import DiffEngine
from app.logging.logger import Log, LogLike
from app.processor.fetcher import ResilientFetcher, RetryPolicy
from app.processor.locks import ContainerLocks
from app.processor.pipeline import PipelineContext
from app.processor.steps import (
    BuildSignaturesStep,
    ComputeDiffsStep,
    FetchRecordsStep,
    SubmitUpdatesStep,
)
from app.store.base import BaseRecordStore


@dataclass(frozen=True)
class FormattingResult:
    """Summary of one formatting run."""

    container_id: str
    records_fetched: int
    records_updated: int


class FormattingPipeline:
    """Orchestrates formatting of one sheet.

    Pipeline: fetch -> sign every record -> diff every record -> batch update.
    Signatures are counted over the whole batch before any record is diffed,
    because a record's duplicate status depends on the full-batch count.
    """

    def __init__(
        self,
        fetcher: ResilientFetcher,
        store: BaseRecordStore,
        diff_engine: DiffEngine,
        locks: ContainerLocks | None = None,
        log: LogLike = Log,
    ) -> None:
        self._fetch_step = FetchRecordsStep(fetcher)
        self._steps = [
            BuildSignaturesStep(diff_engine, log=log),
            ComputeDiffsStep(diff_engine),
            SubmitUpdatesStep(store, log=log),
        ]
        self._locks = locks or ContainerLocks()
        self._log = log

    def run_formatting(self, container_id: str) -> FormattingResult:
        """Format every record of a sheet; BatchUpdateError propagates to the caller."""
        with self._locks.hold(container_id):
            self._log.info(f"Formatting records of sheet {container_id}")
            context = self._fetch_step.run(PipelineContext(container_id=container_id))
            if not context.records:
                self._log.info(f"Nothing to format in sheet {container_id}")
                return FormattingResult(container_id, records_fetched=0, records_updated=0)

            for step in self._steps:
                context = step.run(context)

            self._log.info(
                f"Formatted sheet {container_id}: "
                f"{len(context.updates)} of {len(context.records)} records updated"
            )
            return FormattingResult(
                container_id,
                records_fetched=len(context.records),
                records_updated=len(context.updates),
            )


def build_pipeline(
    settings: Settings,
    store: BaseRecordStore,
    log: LogLike = Log,
) -> FormattingPipeline:
    """Build a FormattingPipeline around the given record store."""
    fetcher = ResilientFetcher(store, RetryPolicy.from_settings(settings), log=log)
    return FormattingPipeline(
        fetcher=fetcher,
        store=store,
        diff_engine=DiffEngine(log=log),
        log=log,
    )
