from geometry import Rect
from maze_layout import DEFAULT_LAYOUT, GRID_COLUMNS, GRID_ROWS, validate_layout
from tile import Tile, TileType


def tile_size(screen_width: float, screen_height: float) -> tuple[float, float]:
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"Invalid screen size: {screen_width}x{screen_height}")
    return screen_width / GRID_COLUMNS, screen_height / GRID_ROWS


class GameMap:
    def __init__(self, layout=DEFAULT_LAYOUT):
        validate_layout(layout)
        self.layout = layout

    def build(self, screen_width: float, screen_height: float) -> list[Tile]:
        tile_width, tile_height = tile_size(screen_width, screen_height)
        return [Tile(tile_type, column, row, tile_width, tile_height) for tile_type, column, row in self.layout]

    @staticmethod
    def get_start_rectangle(tiles: list[Tile]) -> Rect:
        for tile in tiles:
            if tile.type == TileType.START:
                return tile.rectangle
        raise ValueError("Tile map has no start tile")
