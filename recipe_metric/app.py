from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse

from .config import Config
from .convert import convert_html
from .http import PageFetcher

logger = logging.getLogger(__name__)

FORM_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>URL Input</title>
</head>
<body>
    <h1>Enter a URL to fetch and convert units</h1>
    <form method="get">
        <label for="url">URL:</label>
        <input type="text" id="url" name="url" required>
        <button type="submit">Submit</button>
    </form>
</body>
</html>
"""

FETCH_FAILED = "Failed to fetch the URL"
INTERNAL_ERROR = "Internal Server Error"


def create_app(config: Config | None = None, fetcher: PageFetcher | None = None) -> FastAPI:
    cfg = config or Config()
    page_fetcher = fetcher or PageFetcher(timeout_s=cfg.fetch_timeout_s, user_agent=cfg.user_agent)

    api = FastAPI(
        title="Recipe Metric",
        description="Fetch a recipe page and convert cups, ounces and pounds to ml and grams.",
        version="0.1.0",
    )

    # Plain def: FastAPI runs it in the threadpool since requests blocks.
    @api.get("/")
    def convert_page(url: Optional[str] = None):
        try:
            if not url:
                return HTMLResponse(FORM_HTML)

            resp = page_fetcher.get(url)
            if not 200 <= resp.status_code < 300:
                logger.info("Upstream %s returned %s", url, resp.status_code)
                return PlainTextResponse(FETCH_FAILED, status_code=resp.status_code)

            return HTMLResponse(convert_html(resp.text))
        except Exception:
            logger.exception("Failed to convert %s", url)
            return PlainTextResponse(INTERNAL_ERROR, status_code=500)

    return api


def create_app_from_env() -> FastAPI:
    """Factory for `uvicorn --factory recipe_metric.app:create_app_from_env`."""
    return create_app(Config.load_from_env())
