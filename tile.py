from enum import Enum

from geometry import Rect


class TileType(Enum):
    HOLE = "h"
    START = "s"
    GOAL = "g"


class Tile:
    def __init__(self, tile_type: TileType, column: int, row: int, tile_width: float, tile_height: float):
        self._type = tile_type
        self._column = column
        self._row = row
        self._rectangle = Rect.from_size(column * tile_width, row * tile_height, tile_width, tile_height)

    @property
    def type(self) -> TileType:
        return self._type

    @property
    def column(self) -> int:
        return self._column

    @property
    def row(self) -> int:
        return self._row

    @property
    def rectangle(self) -> Rect:
        return self._rectangle

    def __repr__(self):
        return f"Tile({self._type.name}, {self._column}, {self._row})"
