import argparse

from icecream import ic

from core.abstract import App
from core.config import get_settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Worker Queue Demo - Client/Server")

    parser.add_argument(
        "--mode",
        "-m",
        choices=["client", "server"],
        default="client",
        help="Run mode: 'client' or 'server' (default: client)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port the server listens on (default: SERVER_PORT or 5001)",
    )
    parser.add_argument(
        "--demo",
        choices=["worker", "users", "stream"],
        default="worker",
        help="Client demo to run (default: worker)",
    )
    parser.add_argument(
        "--batch-size",
        "-n",
        type=int,
        default=None,
        help="Number of worker requests the client submits at once",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.port is not None:
        settings.server_port = args.port

    ic.configureOutput(prefix="🍦 DEBUG | ")
    if not settings.server_debug:
        ic.disable()

    app: App | None = None
    if args.mode == "client":
        from client.app import ClientApp

        app = ClientApp(settings, demo=args.demo, batch_size=args.batch_size)
    elif args.mode == "server":
        from server.app import ServerApp

        app = ServerApp(settings)

    if app is not None:
        app.run()


if __name__ == "__main__":
    main()
