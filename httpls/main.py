"""
Console entry point for the .http Language Server (the `httpls` script).
"""
import os
import sys

from httpls.lsp.server import create_server


def main():
    """Start the language server on stdin/stdout."""

    # stdout carries the LSP stream, so diagnostics go to stderr
    if os.getenv("DEBUG"):
        print("httpls starting in DEBUG mode", file=sys.stderr)
        print("Waiting for debugger to attach on port 5678...", file=sys.stderr)
        try:
            import debugpy  # type: ignore
            debugpy.listen(("127.0.0.1", 5678))
            debugpy.wait_for_client()
            print("Debugger attached! Continuing...", file=sys.stderr)
        except ImportError:
            print("debugpy not available - install with: pip install httpls[debug]", file=sys.stderr)

    server = create_server()

    # Start the server - it will listen on stdin/stdout for LSP messages
    # from the editor client
    server.start_io()


if __name__ == "__main__":
    main()
