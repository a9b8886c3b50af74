"""
Unit tests for tile grid planning
"""

import pytest
from pydantic import ValidationError

from tile_backup.models import GridBounds, TileCoord
from tile_backup.utils import plan_tiles


class TestPlanTiles:
    """Test cases for plan_tiles"""

    @pytest.mark.parametrize(
        "x1,y1,x2,y2",
        [(0, 0, 0, 0), (1520, 865, 1525, 867), (3, 7, 3, 12), (-2, -1, 4, 0)],
    )
    def test_length_matches_rectangle(self, x1, y1, x2, y2):
        bounds = GridBounds(x1=x1, y1=y1, x2=x2, y2=y2)
        tiles = plan_tiles(bounds)
        assert len(tiles) == (x2 - x1 + 1) * (y2 - y1 + 1)
        assert len(tiles) == bounds.tile_count

    def test_no_duplicates(self):
        tiles = plan_tiles(GridBounds(x1=1520, y1=865, x2=1525, y2=867))
        assert len(set(tiles)) == len(tiles)

    def test_two_by_two_order_x_fastest(self):
        tiles = plan_tiles(GridBounds(x1=5, y1=8, x2=6, y2=9))
        assert tiles == [
            TileCoord(x=5, y=8),
            TileCoord(x=6, y=8),
            TileCoord(x=5, y=9),
            TileCoord(x=6, y=9),
        ]

    def test_index_maps_to_row_and_col(self):
        bounds = GridBounds(x1=10, y1=20, x2=15, y2=22)
        for i, coord in enumerate(plan_tiles(bounds)):
            row, col = divmod(i, bounds.cols)
            assert coord.x == bounds.x1 + col
            assert coord.y == bounds.y1 + row

    def test_tile_path(self):
        assert TileCoord(x=1520, y=865).path == "1520/865"


class TestGridBounds:
    """Test cases for GridBounds validation"""

    def test_dimensions(self):
        bounds = GridBounds(x1=1520, y1=865, x2=1525, y2=867)
        assert bounds.cols == 6
        assert bounds.rows == 3
        assert bounds.tile_count == 18

    def test_reversed_x_rejected(self):
        with pytest.raises(ValidationError, match="x1"):
            GridBounds(x1=5, y1=0, x2=4, y2=0)

    def test_reversed_y_rejected(self):
        with pytest.raises(ValidationError, match="y1"):
            GridBounds(x1=0, y1=3, x2=0, y2=1)
