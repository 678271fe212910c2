from dataclasses import dataclass
from typing import Any, Hashable, Optional

from tabletop.components.board_location import BoardPath


@dataclass(slots=True)
class PathMovement:
    """In-flight multi-step move of one token.

    index is the step currently animating; the registry is untouched until
    the last step completes.
    """
    token: int
    owner: Hashable
    path: BoardPath
    ticket: Any
    index: int = 0
    step_ticket: Optional[Any] = None
