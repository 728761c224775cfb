from typing import Dict, Optional
from urllib.parse import urlencode, urlsplit


class BrowserHistory:
    """Location and session history of a single browser tab"""

    def __init__(self, url: str = "/products"):
        parts = urlsplit(url)
        self.entries = [(parts.path or "/", parts.query)]
        self.index = 0

    @property
    def path(self) -> str:
        return self.entries[self.index][0]

    @property
    def query(self) -> str:
        return self.entries[self.index][1]

    @property
    def url(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path

    def replace(self, path: str, params: Optional[Dict[str, str]] = None):
        """Swap the current entry without adding to the back stack"""
        self.entries[self.index] = (path, urlencode(params or {}, safe=","))

    def push(self, path: str, params: Optional[Dict[str, str]] = None):
        del self.entries[self.index + 1 :]
        self.entries.append((path, urlencode(params or {}, safe=",")))
        self.index += 1

    def back(self):
        if self.index > 0:
            self.index -= 1
