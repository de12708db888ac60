"""Wire payloads of the move-advisor exchange.

One request line, one response line, both JSON:

    -> {"width": 10, "height": 20, "cells": [[...]], "currentShape": [[...]], "nextShape": [[...]] | null}
    <- {"opX": 3, "opRotate": 1}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional

from tetris_ai.game.grid import BoardSnapshot
from tetris_ai.game.pieces import shape


class AdvisorError(Exception):
    """Malformed advisor response."""


@dataclass(frozen=True)
class OpMove:
    op_x: int
    op_rotate: int


@dataclass(frozen=True)
class AdvisorRequest:
    width: int
    height: int
    cells: List[List[int]]
    current_shape: Optional[List[List[int]]]
    next_shape: Optional[List[List[int]]]

    @classmethod
    def from_snapshot(cls, snapshot: BoardSnapshot) -> "AdvisorRequest":
        current = snapshot.active.shape.tolist() if snapshot.active is not None else None
        nxt = shape(snapshot.next_kind).tolist() if snapshot.next_kind is not None else None
        return cls(
            width=snapshot.width,
            height=snapshot.height,
            cells=snapshot.cells.tolist(),
            current_shape=current,
            next_shape=nxt,
        )

    def to_json(self) -> str:
        return json.dumps(
            {
                "width": self.width,
                "height": self.height,
                "cells": self.cells,
                "currentShape": self.current_shape,
                "nextShape": self.next_shape,
            },
            separators=(",", ":"),
        )


def parse_move(line: str) -> OpMove:
    if not line or not line.strip():
        raise AdvisorError("empty response")
    try:
        data: Any = json.loads(line)
    except ValueError as exc:
        raise AdvisorError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise AdvisorError(f"expected an object, got {type(data).__name__}")
    try:
        op_x, op_rotate = data["opX"], data["opRotate"]
    except KeyError as exc:
        raise AdvisorError(f"missing field {exc}") from exc
    if isinstance(op_x, bool) or isinstance(op_rotate, bool) or not isinstance(op_x, int) or not isinstance(op_rotate, int):
        raise AdvisorError(f"non-integer move: {data!r}")
    return OpMove(op_x, op_rotate)
