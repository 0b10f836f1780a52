import json

import httpx
import pytest

from app.records.models import RecordUpdate
from app.store.exceptions import BatchUpdateError, FetchAttemptError, JobReportError
from app.store.flatfile_adapter import (
    FlatfileJobReporter,
    FlatfileRecordStore,
    build_http_client,
)


def _client(handler: object) -> httpx.Client:
    return build_http_client(
        base_url="https://api.test/",
        api_key="sk_test",
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),  # type: ignore[arg-type]
    )


class TestFetch:
    def test_requests_sheet_records_with_messages(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"data": {"records": [{"id": "r1", "values": {"phone": {"value": "555"}}}]}},
            )

        records = FlatfileRecordStore(_client(handler)).fetch("us_sh_1")

        assert [record.id for record in records] == ["r1"]
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/v1/sheets/us_sh_1/records"
        assert seen[0].url.params["includeMessages"] == "true"
        assert seen[0].headers["Authorization"] == "Bearer sk_test"

    def test_accepts_top_level_list_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [{"id": "r1", "values": {}}]})

        assert len(FlatfileRecordStore(_client(handler)).fetch("us_sh_1")) == 1

    def test_http_error_raises_fetch_attempt_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        with pytest.raises(FetchAttemptError, match="503"):
            FlatfileRecordStore(_client(handler)).fetch("us_sh_1")

    def test_network_error_raises_fetch_attempt_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(FetchAttemptError, match="network error"):
            FlatfileRecordStore(_client(handler)).fetch("us_sh_1")

    def test_invalid_json_raises_fetch_attempt_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        with pytest.raises(FetchAttemptError, match="invalid JSON"):
            FlatfileRecordStore(_client(handler)).fetch("us_sh_1")


class TestBatchUpdate:
    def test_puts_wrapped_values(self) -> None:
        bodies: list[object] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PUT"
            assert request.url.path == "/v1/sheets/us_sh_1/records"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"data": {"success": True}})

        update = RecordUpdate(record_id="r1")
        update.set("firstName", "Ada")
        FlatfileRecordStore(_client(handler)).batch_update("us_sh_1", [update])

        assert bodies == [[{"id": "r1", "values": {"firstName": {"value": "Ada"}}}]]

    def test_rejection_raises_batch_update_error_with_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="invalid field phone")

        with pytest.raises(BatchUpdateError, match="invalid field phone"):
            FlatfileRecordStore(_client(handler)).batch_update("us_sh_1", [RecordUpdate("r1")])


class TestJobReporter:
    def test_lifecycle_calls(self) -> None:
        calls: list[tuple[str, object]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.url.path, json.loads(request.content)))
            return httpx.Response(200, json={"data": {}})

        reporter = FlatfileJobReporter(_client(handler))
        reporter.acknowledge("us_jb_1", info="Starting", progress=10)
        reporter.complete("us_jb_1", message="done")
        reporter.fail("us_jb_1", message="boom")

        assert calls == [
            ("/v1/jobs/us_jb_1/ack", {"info": "Starting", "progress": 10}),
            ("/v1/jobs/us_jb_1/complete", {"outcome": {"message": "done"}}),
            ("/v1/jobs/us_jb_1/fail", {"outcome": {"message": "boom"}}),
        ]

    def test_error_raises_job_report_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        with pytest.raises(JobReportError, match="complete"):
            FlatfileJobReporter(_client(handler)).complete("us_jb_1", message="done")


class TestClose:
    def test_close_releases_shared_client(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": []})

        client = _client(handler)
        store = FlatfileRecordStore(client)

        store.close()

        assert client.is_closed
