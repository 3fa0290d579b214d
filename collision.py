from enum import Enum

from geometry import Rect
from tile import Tile, TileType


class Outcome(Enum):
    NONE = "none"
    START = "start"
    DEFEAT = "defeat"
    VICTORY = "victory"


_OUTCOME_BY_TILE = {
    TileType.HOLE: Outcome.DEFEAT,
    TileType.START: Outcome.START,
    TileType.GOAL: Outcome.VICTORY,
}


def find_first_collision(bounding_box: Rect, tiles: list[Tile]) -> Tile | None:
    # Tiles are scanned in map order, the first overlap wins even if others overlap too
    for tile in tiles:
        if tile.rectangle.intersect(bounding_box) is not None:
            return tile
    return None


def classify(tile: Tile | None) -> Outcome:
    if tile is None:
        return Outcome.NONE
    return _OUTCOME_BY_TILE[tile.type]


def check_collision(bounding_box: Rect, tiles: list[Tile]) -> Outcome:
    return classify(find_first_collision(bounding_box, tiles))
