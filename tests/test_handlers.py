"""
Tests for the MCP/CLI handlers and argument translation
"""
import asyncio
import threading
import time

import httpx
import pytest

from ann_downloader.adapters.mcp.handlers import MCPHandlers, build_filter_config
from ann_downloader.container import Container
from ann_downloader.core.domain import AllYears, ExplicitYears, RecentYears


class TestBuildFilterConfig:
    """Test argument to FilterConfig mapping."""

    def test_defaults(self):
        config = build_filter_config()
        assert config.match_keywords is None
        assert config.not_match_keywords == ("摘要",)
        assert config.year_selector == RecentYears(3)

    def test_explicit_years_win(self):
        config = build_filter_config(years=["2022", "2021"], recent_years=5)
        assert config.year_selector == ExplicitYears(("2022", "2021"))

    def test_recent_and_all_years(self):
        assert build_filter_config(recent_years=5).year_selector == RecentYears(5)
        assert build_filter_config(all_years=True).year_selector == AllYears()

    def test_empty_years_is_an_empty_explicit_set(self):
        config = build_filter_config(years=[], recent_years=5)
        assert config.year_selector == ExplicitYears(())

    def test_empty_match_is_kept_distinct_from_none(self):
        assert build_filter_config(match=[]).match_keywords == ()

    def test_empty_exclude_disables_default(self):
        assert build_filter_config(exclude=[]).not_match_keywords == ()


@pytest.fixture
def handlers(cninfo, tmp_path):
    container = Container(base_dir=tmp_path, client=cninfo.client())
    yield MCPHandlers(container)
    container.close()


class TestHandlers:
    """Test handler result dictionaries."""

    def test_download_result(self, cninfo, handlers, tmp_path):
        cninfo.add_company("000001", "gssz0000001", "平安银行")
        cninfo.add_pages("000001", "gssz0000001", [
            ("2022年年度报告", "finalpage/a.PDF"),
            ("2022年年度报告摘要", "finalpage/b.PDF"),
        ])
        cninfo.documents["/finalpage/a.PDF"] = b"%PDF"

        result = asyncio.run(handlers.download_announcements(symbols=["平安银行"], category="annual"))

        assert result["success"] is True
        assert result["category"] == "category_ndbg_szsh"
        assert result["downloaded"] == 1
        company = result["companies"][0]
        assert company["directory"] == str(tmp_path / "000001.平安银行")
        assert [d["title"] for d in company["documents"]] == ["2022年年度报告"]
        assert company["documents"][0]["status"] == "downloaded"

    def test_download_failure_is_reported(self, cninfo, handlers):
        result = asyncio.run(handlers.download_announcements(symbols=["999999"]))

        assert result["success"] is False
        assert "lookup symbol" in result["error"]

    def test_list_result(self, cninfo, handlers):
        cninfo.add_company("000001", "gssz0000001", "平安银行")
        cninfo.add_pages("000001", "gssz0000001", [("2022年年度报告", "finalpage/a.PDF")])

        result = asyncio.run(handlers.list_announcements(symbols=["000001"], years=["2022", "2010"]))

        assert result["success"] is True
        company = result["companies"][0]
        assert company["missing_years"] == ["2010"]
        assert company["documents"][0]["downloaded"] is False

    def test_list_downloaded_result(self, handlers, tmp_path):
        (tmp_path / "000001.平安银行").mkdir()
        (tmp_path / "000001.平安银行" / "2022年年度报告.pdf").write_bytes(b"x")

        result = asyncio.run(handlers.list_downloaded(code="000001"))

        assert result["success"] is True
        assert result["count"] == 1
        assert result["files"][0]["name"] == "平安银行"

    def test_empty_years_downloads_nothing(self, cninfo, handlers):
        cninfo.add_company("000001", "gssz0000001", "平安银行")
        cninfo.add_pages("000001", "gssz0000001", [("2022年年度报告", "finalpage/a.PDF")])

        result = asyncio.run(handlers.download_announcements(symbols=["000001"], years=[]))

        assert result["success"] is True
        assert result["downloaded"] == 0
        assert result["companies"][0]["documents"] == []
        assert cninfo.document_requests() == []


class TestSerializedCalls:
    """Test that concurrent tool calls never run services side by side."""

    def test_concurrent_downloads_do_not_overlap(self, cninfo, tmp_path):
        cninfo.add_company("000001", "gssz0000001", "平安银行")
        cninfo.add_pages("000001", "gssz0000001", [("2022年年度报告", "finalpage/a.PDF")])
        cninfo.documents["/finalpage/a.PDF"] = b"%PDF"

        guard = threading.Lock()
        in_flight = 0
        peak = 0

        def slow_handler(request):
            nonlocal in_flight, peak
            with guard:
                in_flight += 1
                peak = max(peak, in_flight)
            try:
                time.sleep(0.05)
                return cninfo.handler(request)
            finally:
                with guard:
                    in_flight -= 1

        container = Container(base_dir=tmp_path, client=httpx.Client(transport=httpx.MockTransport(slow_handler)))
        handlers = MCPHandlers(container)

        async def both():
            return await asyncio.gather(
                handlers.download_announcements(symbols=["000001"], no_skip=True),
                handlers.download_announcements(symbols=["000001"], no_skip=True),
            )

        try:
            results = asyncio.run(both())
        finally:
            container.close()

        assert [r["downloaded"] for r in results] == [1, 1]
        assert peak == 1
        assert len(cninfo.document_requests()) == 2
