"""
Todo Board package.

Server side: `todo_board.main:app` (FastAPI) serving the todo procedures.
Client side: `todo_board.client` holding the board state and talking to the
server over HTTP.
"""

__version__ = "0.1.0"
