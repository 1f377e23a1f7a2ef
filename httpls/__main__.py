"""
Main entry point for the .http Language Server.

This file is executed when running: python -m httpls

The server communicates with editors via stdin/stdout using JSON-RPC.
"""
from httpls.main import main

if __name__ == "__main__":
    main()
