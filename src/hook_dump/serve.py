"""Web server entry point using textual-serve.

Runs the hook-dump viewer in the browser. Each browser session launches its
own process from --command, so give each a distinct --port/--data-dir when
more than one session runs at once.
"""

import argparse

from textual_serve.server import Server


def main(argv=None):
    """Launch hook-dump web server using textual-serve."""
    parser = argparse.ArgumentParser(description="Serve the hook-dump viewer over HTTP")
    parser.add_argument("--host", type=str, default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--command",
        type=str,
        default="hook-dump",
        help="Command each browser session runs (default: hook-dump)",
    )
    args = parser.parse_args(argv)

    server = Server(
        command=args.command,
        host=args.host,
        port=args.port,
        title="hook-dump - Webhook Inspector",
    )

    print("🌐 hook-dump web server starting...")
    print(f"   Visit http://{args.host}:{args.port} to access hook-dump in your browser")
    print()

    # Start serving (blocks until Ctrl+C)
    server.serve()


if __name__ == "__main__":
    main()
