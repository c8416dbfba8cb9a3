"""
Unit tests for the fetch manager and the httpx document transport
"""
import io

import httpx
import pytest

from ann_downloader.adapters.http import HttpDocumentTransport, redirect_target
from ann_downloader.core.domain import FetchOutcome
from ann_downloader.core.errors import FilesystemError, TransportError
from ann_downloader.core.fetch import FetchManager
from ann_downloader.core.ports import DocumentTransport

URL = "http://static.cninfo.com.cn/finalpage/2023-03-09/1216046857.PDF"


class CountingTransport(DocumentTransport):
    """Transport that writes a fixed body and counts calls"""

    def __init__(self, body=b"%PDF-1.4 fake"):
        self.body = body
        self.calls = []

    def download(self, url, out):
        self.calls.append(url)
        out.write(self.body)
        return len(self.body)


class FailingTransport(DocumentTransport):
    def download(self, url, out):
        out.write(b"%PDF-partial")
        raise TransportError("connection reset")


class TestFetchManager:
    """Test skip-if-exists and transfer semantics."""

    def test_downloads_new_file(self, tmp_path):
        transport = CountingTransport()
        dest = tmp_path / "2022年年度报告.pdf"

        outcome = FetchManager(transport).fetch(URL, dest)

        assert outcome is FetchOutcome.DOWNLOADED
        assert dest.read_bytes() == b"%PDF-1.4 fake"
        assert transport.calls == [URL]

    def test_skip_if_exists_transfers_once(self, tmp_path, caplog):
        transport = CountingTransport()
        manager = FetchManager(transport, skip_if_exists=True)
        dest = tmp_path / "2022年年度报告.pdf"

        with caplog.at_level("INFO"):
            first = manager.fetch(URL, dest)
            second = manager.fetch(URL, dest)

        assert (first, second) == (FetchOutcome.DOWNLOADED, FetchOutcome.SKIPPED)
        assert len(transport.calls) == 1
        assert sum("skip downloading" in r.message for r in caplog.records) == 1

    def test_no_skip_transfers_twice(self, tmp_path):
        transport = CountingTransport()
        manager = FetchManager(transport, skip_if_exists=False)
        dest = tmp_path / "2022年年度报告.pdf"

        manager.fetch(URL, dest)
        transport.body = b"%PDF-1.4 newer"
        outcome = manager.fetch(URL, dest)

        assert outcome is FetchOutcome.DOWNLOADED
        assert len(transport.calls) == 2
        assert dest.read_bytes() == b"%PDF-1.4 newer"

    def test_per_call_override(self, tmp_path):
        transport = CountingTransport()
        manager = FetchManager(transport, skip_if_exists=True)
        dest = tmp_path / "a.pdf"
        dest.write_bytes(b"old")

        assert manager.fetch(URL, dest, skip_if_exists=False) is FetchOutcome.DOWNLOADED
        assert len(transport.calls) == 1

    def test_existing_empty_file_counts_as_downloaded(self, tmp_path):
        transport = CountingTransport()
        dest = tmp_path / "a.pdf"
        dest.touch()

        assert FetchManager(transport).fetch(URL, dest) is FetchOutcome.SKIPPED
        assert transport.calls == []

    def test_missing_directory_is_filesystem_error(self, tmp_path):
        with pytest.raises(FilesystemError):
            FetchManager(CountingTransport()).fetch(URL, tmp_path / "missing" / "a.pdf")

    def test_failed_transfer_leaves_partial_file(self, tmp_path):
        dest = tmp_path / "a.pdf"
        with pytest.raises(TransportError):
            FetchManager(FailingTransport()).fetch(URL, dest)
        assert dest.read_bytes() == b"%PDF-partial"


class TestHttpDocumentTransport:
    """Test streaming and path-preserving redirects."""

    def transport(self, handler):
        return HttpDocumentTransport(httpx.Client(transport=httpx.MockTransport(handler)))

    def test_streams_body(self):
        out = io.BytesIO()
        written = self.transport(lambda r: httpx.Response(200, content=b"x" * 5000)).download(URL, out)
        assert written == 5000
        assert out.getvalue() == b"x" * 5000

    def test_redirect_path_is_preserved(self):
        seen = []

        def handler(request):
            seen.append(request.extensions.get("target", request.url.raw_path))
            if request.url.raw_path == b"/finalpage/2023-03-09/1216046857.PDF":
                return httpx.Response(302, headers={"Location": "/new/disclosure/%E5%B9%B4%E6%8A%A5%2F2022.PDF?x=a%2Bb"})
            return httpx.Response(200, content=b"%PDF")

        out = io.BytesIO()
        self.transport(handler).download(URL, out)

        assert seen[1] == b"/new/disclosure/%E5%B9%B4%E6%8A%A5%2F2022.PDF?x=a%2Bb"
        assert out.getvalue() == b"%PDF"

    @pytest.mark.parametrize("location", [
        "/new/年报/2022 年报.PDF".encode("utf-8"),
        b"/a b/c.PDF",
    ])
    def test_redirect_bytes_are_not_escaped(self, location):
        requests = []

        def handler(request):
            requests.append(request)
            if len(requests) == 1:
                return httpx.Response(302, headers=[(b"Location", location)])
            return httpx.Response(200, content=b"%PDF")

        out = io.BytesIO()
        self.transport(handler).download(URL, out)

        assert requests[1].url.host == "static.cninfo.com.cn"
        assert requests[1].extensions["target"] == location
        assert out.getvalue() == b"%PDF"

    def test_redirect_to_other_host(self):
        hosts = []

        def handler(request):
            hosts.append(request.url.host)
            if request.url.host == "static.cninfo.com.cn":
                return httpx.Response(301, headers={"Location": "http://cdn.example.com/a%2Fb.PDF"})
            return httpx.Response(200, content=b"ok")

        out = io.BytesIO()
        self.transport(handler).download(URL, out)
        assert hosts == ["static.cninfo.com.cn", "cdn.example.com"]

    def test_too_many_redirects(self):
        handler = lambda r: httpx.Response(302, headers={"Location": "/loop"})
        with pytest.raises(TransportError, match="redirects"):
            self.transport(handler).download(URL, io.BytesIO())

    def test_error_status(self):
        with pytest.raises(TransportError, match="404"):
            self.transport(lambda r: httpx.Response(404)).download(URL, io.BytesIO())

    def test_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out")

        with pytest.raises(TransportError, match="timed out"):
            self.transport(handler).download(URL, io.BytesIO())


class TestRedirectTarget:
    """Test Location resolution."""

    def test_absolute_path_kept_verbatim(self):
        target, raw = redirect_target(httpx.URL(URL), b"/a%2Fb/c%20d.PDF")
        assert target.host == "static.cninfo.com.cn"
        assert raw == b"/a%2Fb/c%20d.PDF"

    def test_absolute_url_keeps_path_bytes(self):
        location = "http://cdn.example.com/年报 1.PDF?x=1#top".encode("utf-8")
        target, raw = redirect_target(httpx.URL(URL), location)
        assert target.host == "cdn.example.com"
        assert raw == "/年报 1.PDF?x=1".encode("utf-8")

    def test_absolute_url_without_path(self):
        target, raw = redirect_target(httpx.URL(URL), b"http://cdn.example.com")
        assert target.host == "cdn.example.com"
        assert raw == b"/"

    def test_relative_path_is_joined(self):
        target, raw = redirect_target(httpx.URL(URL), b"other.PDF")
        assert target.raw_path == b"/finalpage/2023-03-09/other.PDF"
        assert raw is None
