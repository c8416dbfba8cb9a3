"""
Shared fixtures: a fake cninfo service served through httpx.MockTransport.
"""
from urllib.parse import parse_qs

import httpx
import pytest


class FakeCninfo:
    """In-memory stand-in for the registry, query and static endpoints"""

    def __init__(self):
        self.stock_list = []
        # stock field ("code,orgId") -> list of page payloads
        self.pages = {}
        # request-target (decoded as UTF-8) -> bytes
        self.documents = {}
        self.requests = []

    def add_company(self, code, org_id, zwjc, pinyin=""):
        self.stock_list.append({"code": code, "orgId": org_id, "zwjc": zwjc, "pinyin": pinyin})

    def add_pages(self, code, org_id, *pages):
        """Each page is a list of (title, adjunctUrl); the last page has hasMore=False"""
        payloads = []
        for i, page in enumerate(pages):
            payloads.append({
                "announcements": [
                    {"announcementTitle": title, "adjunctUrl": url, "secCode": code}
                    for title, url in page
                ],
                "hasMore": i < len(pages) - 1,
                "totalAnnouncement": sum(len(p) for p in pages),
            })
        self.pages[f"{code},{org_id}"] = payloads

    def query_requests(self):
        return [r for r in self.requests if r.url.path == "/new/hisAnnouncement/query"]

    def document_requests(self):
        return [r for r in self.requests if r.url.host == "static.cninfo.com.cn"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/new/data/szse_stock.json":
            return httpx.Response(200, json={"stockList": self.stock_list})

        if request.url.path == "/new/hisAnnouncement/query":
            form = {k: v[0] for k, v in parse_qs(request.content.decode(), keep_blank_values=True).items()}
            page = int(form["pageNum"])
            return httpx.Response(200, json=self.pages[form["stock"]][page - 1])

        if request.url.host == "static.cninfo.com.cn":
            raw_path = request.extensions.get("target", request.url.raw_path)
            body = self.documents.get(raw_path.decode("utf-8"))
            if body is None:
                return httpx.Response(404)
            return httpx.Response(200, content=body)

        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def cninfo():
    return FakeCninfo()
