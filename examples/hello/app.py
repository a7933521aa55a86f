"""Hello World: the simplest cappa app.

Registers a couple of endpoints and a custom 404 page.

Run:
    python app.py
"""

from cappa import App, Request, Response

app = App()

print("Port:", app.port)

app.register_endpoint("/", lambda: "Hello world!")


@app.route("/api/status")
def status():
    return {"status": "ok"}


@app.route("/echo")
async def echo(request: Request):
    return Response(f"{request.method} {request.url}", content_type="text/plain")


@app.error(404)
def not_found(request: Request):
    return f"Nothing at {request.path}"


if __name__ == "__main__":
    app.serve()
