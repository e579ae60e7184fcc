"""CLI entry point for the RepairHub API server."""

import argparse

from repairhub.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="repairhub-server",
        description="RepairHub API server: home-repair services marketplace",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = parser.parse_args(argv)

    import uvicorn

    uvicorn.run("repairhub.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
