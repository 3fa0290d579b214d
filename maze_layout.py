from tile import TileType

GRID_COLUMNS = 20
GRID_ROWS = 14

# Hole cells per column, in build order
_HOLE_WALLS = (
    (0, tuple(range(14))),
    (1, (0, 13)),
    (2, (0, 13)),
    (3, (0, 13)),
    (4, (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 13)),
    (5, (0, 13)),
    (6, (0, 13)),
    (7, (0, 1, 2, 5, 6, 9, 10, 11, 12, 13)),
    (8, (0, 5, 9, 13)),
    (9, (0, 5, 9, 13)),
    (10, (0, 5, 9, 13)),
    (11, (0, 5, 9, 13)),
    (12, (0, 1, 2, 3, 4, 5, 9, 8, 13)),
    (13, (0, 8, 13)),
    (14, (0, 8, 13)),
    (15, (0, 8, 13)),
    (16, (0, 4, 5, 6, 7, 8, 9, 13)),
    (17, (0, 13)),
    (18, (0, 13)),
    (19, tuple(range(14))),
)

DEFAULT_LAYOUT = tuple(
    (TileType.HOLE, column, row) for column, rows in _HOLE_WALLS for row in rows
) + (
    (TileType.START, 2, 2),
    (TileType.GOAL, 8, 11),
)


def validate_layout(layout, columns: int = GRID_COLUMNS, rows: int = GRID_ROWS):
    start_count = 0
    goal_count = 0
    for tile_type, column, row in layout:
        if not (0 <= column < columns and 0 <= row < rows):
            raise ValueError(f"Tile {tile_type.name} at ({column}, {row}) is outside the {columns}x{rows} grid")
        if tile_type == TileType.START:
            start_count += 1
        elif tile_type == TileType.GOAL:
            goal_count += 1

    if start_count != 1:
        raise ValueError(f"Layout needs exactly one start tile, found {start_count}")
    if goal_count != 1:
        raise ValueError(f"Layout needs exactly one goal tile, found {goal_count}")


def load_layout(map_filename: str) -> tuple:
    """Read a maze from a map file.

    Every line holds one tile: ``h <col> <row>`` for a hole, ``s <col> <row>``
    for the start and ``g <col> <row>`` for the goal. Empty lines and lines
    starting with ``#`` are skipped.
    """
    kinds = {tile_type.value: tile_type for tile_type in TileType}
    layout = []
    with open(map_filename, "r") as file:
        for line_number, line in enumerate(file, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) != 3 or parts[0] not in kinds:
                raise ValueError(f"{map_filename}:{line_number}: invalid map entry '{line}'")
            try:
                column, row = int(parts[1]), int(parts[2])
            except ValueError:
                raise ValueError(f"{map_filename}:{line_number}: invalid coordinates '{line}'")
            layout.append((kinds[parts[0]], column, row))

    layout = tuple(layout)
    validate_layout(layout)
    return layout
