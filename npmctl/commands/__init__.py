"""
CLI Commands.

Proxy host management: list, create, delete.
"""

from npmctl.commands.hosts import create_host, delete_host, list_hosts

__all__ = [
    "create_host",
    "delete_host",
    "list_hosts",
]
