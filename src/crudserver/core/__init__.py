"""
Core networking components.

    socket_server.py  SocketServer: bind, listen, sequential accept loop
    connection.py     Connection: one read, one write, close
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = ["Connection", "ConnectionState", "SocketServer"]
