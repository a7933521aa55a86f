"""Static site: a directory tree served as routes.

``public/`` is mounted at the root. ``index.*`` files answer for their
directory, and Markdown files go through a small extension handler
instead of being sent as-is.

Run:
    python app.py
"""

import html
from pathlib import Path

from cappa import App, Response

PUBLIC_DIR = Path(__file__).parent / "public"

app = App()


@app.extension(".md")
def markdown_page(path: Path):
    """Serve Markdown source wrapped in a minimal HTML page."""

    async def handler(request):
        source = path.read_text(encoding="utf-8")
        title = html.escape(source.splitlines()[0].lstrip("# ") if source else path.stem)
        body = f"<!doctype html><title>{title}</title><pre>{html.escape(source)}</pre>"
        return Response(body)

    return handler


app.mount_directory(PUBLIC_DIR, cache_control="no-cache")


if __name__ == "__main__":
    app.serve()
