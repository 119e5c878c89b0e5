import typer
from rich.console import Console

from text_file_input.config import get_api_host, get_api_port

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from text_file_input.api.app import create_app

    host = host or get_api_host()
    port = port or get_api_port()
    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from text_file_input.adapters.defaults import create_default_helper
    from text_file_input.mcp.server import create_mcp_server

    server = create_mcp_server(create_default_helper())
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
