"""
npmctl - command-line client for the Nginx Proxy Manager API.

- core/: configuration, logging, exceptions
- schemas/: wire models for tokens and proxy hosts
- client.py: async HTTP client (httpx)
- commands/: list, create, delete (Typer + Rich)
"""

__version__ = "0.1.0"
