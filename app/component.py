"""Scriptable client for the fortune page: same state and handlers as static/fortune.js."""
from pathlib import Path
from typing import Optional

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .logger import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)

# Network and payload failures are logged and dropped, never raised
FAILURES = (httpx.HTTPError, ValueError, KeyError, TypeError)


class FortuneComponent:
    def __init__(self, http: httpx.Client, endpoint: str = "/api/fortune"):
        self.http = http
        self.endpoint = endpoint
        self.current_fortune_text: Optional[str] = None
        self.draft_text = ""
        self._mounted = False

    @staticmethod
    def _fortune_text(response: httpx.Response) -> str:
        response.raise_for_status()
        return response.json()["fortune"]["text"]

    def mount(self):
        """Runs the initial fetch; later calls are no-ops."""
        if self._mounted:
            return
        self._mounted = True
        self.fetch_fortune()

    def fetch_fortune(self):
        try:
            response = self.http.get(self.endpoint, headers={"Accept": "application/json"})
            self.current_fortune_text = self._fortune_text(response)
        except FAILURES as exc:
            logger.error("fortune_fetch_failed", error=str(exc))

    def handle_click(self):
        self.fetch_fortune()

    def handle_change(self, value: str):
        self.draft_text = value

    def handle_submit(self):
        # The draft is kept on both success and failure
        try:
            response = self.http.post(
                self.endpoint,
                json={"fortune": self.draft_text},
                headers={"Accept": "application/json"},
            )
            self.current_fortune_text = self._fortune_text(response)
        except FAILURES as exc:
            logger.error("fortune_submit_failed", error=str(exc))

    def render(self, csrf_token: str = "") -> str:
        self.mount()
        return _env.get_template("_fortune.html").render(
            csrf_token=csrf_token,
            fortune_text=self.current_fortune_text or "",
            draft_text=self.draft_text,
        )
