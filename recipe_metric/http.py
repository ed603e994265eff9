from __future__ import annotations

from dataclasses import dataclass
import requests


@dataclass(frozen=True)
class PageFetcher:
    timeout_s: float | None = None
    user_agent: str | None = None

    def get(self, url: str) -> requests.Response:
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        resp = requests.get(url, headers=headers, timeout=self.timeout_s)
        # requests assumes ISO-8859-1 for text/* without a charset; pages are UTF-8
        if "charset" not in resp.headers.get("content-type", "").lower():
            resp.encoding = "utf-8"
        return resp
