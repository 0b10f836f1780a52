import argparse
from collections.abc import Sequence

from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.processor import build_pipeline
from app.store.factory import RecordStoreFactory
from app.worker.job_runner import JobRunner


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="contacts-formatter",
        description="Normalize contact records and flag duplicate rows in a sheet.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    fmt = commands.add_parser("format", help="Format every record of a sheet")
    fmt.add_argument("sheet_id")
    fmt.add_argument("--job-id", help="Report progress and outcome on this job")

    submit = commands.add_parser("submit", help="Complete a submission job")
    submit.add_argument("job_id")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point: settings -> logging -> store adapters -> pipeline -> run."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    store, reporter = RecordStoreFactory.create(settings)
    try:
        pipeline = build_pipeline(settings, store)
        job_runner = JobRunner(pipeline, reporter)

        if args.command == "submit":
            job_runner.run_submit_job(args.job_id)
        elif args.job_id:
            job_runner.run_format_job(args.job_id, args.sheet_id)
        else:
            pipeline.run_formatting(args.sheet_id)
    finally:
        store.close()


if __name__ == "__main__":
    main()
