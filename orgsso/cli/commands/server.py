"""Server commands."""

import cyclopts
import uvicorn

app = cyclopts.App(name="serve", help="Run the HTTP server")


@app.default
def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    """Run the server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    uvicorn.run(
        "orgsso.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
