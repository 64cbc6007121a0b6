"""
对比接口测试
"""

from fastapi import status


def _files(*items):
    return [("files", (name, data, "application/octet-stream")) for name, data in items]


class TestCompareEndpoint:
    """POST /compare"""

    def test_compare_success(self, client):
        response = client.post(
            "/compare?coordinate=distance",
            files=_files(("ride.fit", b"ride"), ("run.fit", b"run")),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["coordinate"] == "distance"
        assert [row["file_name"] for row in data["summaries"]] == ["ride.fit", "run.fit"]
        assert data["series"][0]["labels"][0] == "0.00 km"
        assert len(data["overlays"]["speed"]["labels"]) == 100
        assert data["overlays"]["cadence"]["unit"] == "rpm"
        assert len(data["charts"]) == 2 + 4
        assert data["diagnostics"] == []

    def test_compare_partial_failure(self, client):
        response = client.post(
            "/compare",
            files=_files(("bad.fit", b"???"), ("run.fit", b"run")),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [row["file_name"] for row in data["summaries"]] == ["run.fit"]
        assert data["diagnostics"][0]["kind"] == "decode_failure"

    def test_compare_no_usable_files(self, client):
        response = client.post("/compare", files=_files(("bad.fit", b"???")))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        detail = response.json()["detail"]
        assert detail["diagnostics"][0]["file_name"] == "bad.fit"

    def test_compare_invalid_coordinate(self, client):
        response = client.post("/compare?coordinate=pace", files=_files(("run.fit", b"run")))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_compare_without_files(self, client):
        response = client.post("/compare")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_compare_too_many_files(self, client, monkeypatch):
        from fitcompare import config

        monkeypatch.setattr(config, "MAX_UPLOAD_FILES", 1)
        response = client.post("/compare", files=_files(("a.fit", b"run"), ("b.fit", b"run")))
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSummaryAndMetrics:
    """POST /compare/summary 与 GET /compare/metrics"""

    def test_summary_only(self, client):
        response = client.post("/compare/summary", files=_files(("empty.fit", b"no-records")))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["headers"][0] == "文件名"
        assert data["summaries"][0]["total_time"] == "01:02:05"
        assert data["diagnostics"][0]["kind"] == "empty_record_set"

    def test_metrics_for_running(self, client):
        response = client.get("/compare/metrics?sport=running")

        assert response.status_code == status.HTTP_200_OK
        cadence = [m for m in response.json() if m["key"] == "cadence"][0]
        assert cadence == {"key": "cadence", "name": "步频", "unit": "spm"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
