from app.formatting.diff import DiffEngine
from app.formatting.signature import count_signatures, row_signature
from app.logging.logger import Log, LogLike
from app.processor.fetcher import ResilientFetcher
from app.processor.pipeline import PipelineContext, PipelineStep
from app.store.base import BaseRecordStore


class FetchRecordsStep(PipelineStep):
    def __init__(self, fetcher: ResilientFetcher) -> None:
        self._fetcher = fetcher

    def run(self, context: PipelineContext) -> PipelineContext:
        context.records = self._fetcher.fetch_all(context.container_id)
        return context


class BuildSignaturesStep(PipelineStep):
    """First pass: every record's signature is counted before any diff is made."""

    def __init__(self, diff_engine: DiffEngine, log: LogLike = Log) -> None:
        self._diff_engine = diff_engine
        self._log = log

    def run(self, context: PipelineContext) -> PipelineContext:
        context.signatures = {
            record.id: row_signature(self._diff_engine.canonical_values(record))
            for record in context.records
        }
        context.signature_counts = count_signatures(
            context.signatures[record.id] for record in context.records
        )
        duplicates = sum(1 for count in context.signature_counts.values() if count > 1)
        self._log.info(
            f"Signed {len(context.records)} records in sheet {context.container_id}: "
            f"{duplicates} duplicate groups"
        )
        return context


class ComputeDiffsStep(PipelineStep):
    def __init__(self, diff_engine: DiffEngine) -> None:
        self._diff_engine = diff_engine

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.records and not context.signatures:
            raise ValueError("PipelineContext.signatures must be built before diffing")
        for record in context.records:
            signature = context.signatures[record.id]
            update = self._diff_engine.diff(
                record,
                signature,
                context.signature_counts[signature],
            )
            if update is not None:
                context.updates.append(update)
        return context


class SubmitUpdatesStep(PipelineStep):
    def __init__(self, store: BaseRecordStore, log: LogLike = Log) -> None:
        self._store = store
        self._log = log

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.updates:
            self._log.info(f"No records in sheet {context.container_id} needed formatting")
            return context
        self._log.info(
            f"Applying {len(context.updates)} updates to sheet {context.container_id}"
        )
        self._store.batch_update(context.container_id, context.updates)
        return context
