"""
Client side of the todo board: the HTTP procedure client, the board state
container and the controller that ties user actions to remote calls.
"""

from .controller import BoardController
from .render import render_board
from .state import BoardState, Err, Ok
from .transport import TodoClient

__all__ = ["BoardController", "BoardState", "Err", "Ok", "TodoClient", "render_board"]
