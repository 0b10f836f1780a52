from app.logging.logger import Log, LogLike
from app.processor.processor import FormattingPipeline
from app.store.base import BaseJobReporter
from app.store.exceptions import StoreError

FORMAT_ACK_INFO = "Starting data formatting job"
FORMAT_ACK_PROGRESS = 10
FORMAT_DONE_MESSAGE = "Data formatting completed successfully!"
SUBMIT_DONE_MESSAGE = "Successfully submitted contacts!"


class JobRunner:
    """Run one job action, reporting its outcome through the job reporter."""

    def __init__(
        self,
        pipeline: FormattingPipeline,
        reporter: BaseJobReporter,
        log: LogLike = Log,
    ) -> None:
        self._pipeline = pipeline
        self._reporter = reporter
        self._log = log

    def run_format_job(self, job_id: str, sheet_id: str) -> None:
        """Acknowledge, format the sheet, then complete or fail the job."""
        self._log.info(f"Running format job {job_id} for sheet {sheet_id}")
        try:
            self._reporter.acknowledge(job_id, info=FORMAT_ACK_INFO, progress=FORMAT_ACK_PROGRESS)
            result = self._pipeline.run_formatting(sheet_id)
            self._reporter.complete(job_id, message=FORMAT_DONE_MESSAGE)
            self._log.info(
                f"Job {job_id} completed successfully: "
                f"{result.records_updated} of {result.records_fetched} records updated"
            )
        except Exception as exc:
            self._handle_failure(job_id, f"Formatting failed: {exc}", exc)

    def run_submit_job(self, job_id: str) -> None:
        """Complete the submission job; records are already formatted in place."""
        self._log.info(f"Running submit job {job_id}")
        try:
            self._reporter.complete(job_id, message=SUBMIT_DONE_MESSAGE)
            self._log.info(f"Job {job_id} completed successfully")
        except Exception as exc:
            self._handle_failure(job_id, f"Submission failed: {exc}", exc)

    def _handle_failure(self, job_id: str, message: str, exc: Exception) -> None:
        """Mark the job failed; a failure while reporting is only logged."""
        self._log.error(f"Job {job_id} failed: {exc}")
        try:
            self._reporter.fail(job_id, message=message)
        except StoreError as fail_exc:
            self._log.error(f"Could not mark job {job_id} as failed: {fail_exc}")
