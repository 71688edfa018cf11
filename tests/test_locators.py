import pytest

from people_finder.extractors.locators import (
    LocatorConfig,
    _widest_run,
    calc_halfway_torso_dist,
    find_closest_pixel,
    find_elbow_feature,
    find_foot_feature,
    find_hand_feature,
    find_head_feature,
    find_torso_feature,
    find_waist_feature,
    set_shoulder_positions,
)
from people_finder.silhouette.grid import NOT_FOUND, Label, new_grid
from people_finder.silhouette.pixels import PixelSequence


@pytest.fixture
def config():
    return LocatorConfig()


def block(rows, cols):
    return PixelSequence([(r, c) for r in rows for c in cols])


class TestHead:
    def test_topmost_pixel_pushed_down(self):
        seq = PixelSequence([(3, 10), (3, 11), (4, 9), (4, 10)])
        assert find_head_feature(seq, 5) == ((8, 10), 0)

    def test_empty_sequence(self):
        assert find_head_feature(PixelSequence([]), 5) == (NOT_FOUND, 0)


def test_widest_run_splits_on_gaps():
    seq = PixelSequence([(70, 5), (70, 6), (70, 7), (70, 9), (70, 10), (71, 1)])
    assert _widest_run(seq, 0, 80) == (2, (70, 7), 2)


def test_waist_without_lower_body(config):
    seq = block(range(10, 40), range(20, 30))
    assert find_waist_feature(seq, (20, 25), 3, config) == (NOT_FOUND, 3)


class TestFoot:
    seq = PixelSequence([(60, 5), (80, 30), (90, 2), (90, 60)])

    def test_closest_to_each_corner(self, config):
        assert find_foot_feature(self.seq, (66, 32), (127, 1), 0, config) == (90, 2)
        assert find_foot_feature(self.seq, (66, 32), (127, 63), 0, config) == (90, 60)

    def test_nothing_below_waist(self, config):
        seq = PixelSequence([(60, 5), (61, 5)])
        assert find_foot_feature(seq, (66, 32), (127, 1), 0, config) == NOT_FOUND


class TestShoulders:
    def test_left_never_right_of_right(self, config):
        seq = PixelSequence([(20, 4), (20, 5), (30, 0)])
        left, right, arm_width, _ = set_shoulder_positions(seq, (20, 5), 0, config)
        assert arm_width == 1
        assert left == (20, 4)
        assert right == (20, 5)

    def test_span_of_wide_row(self, config):
        seq = block(range(18, 30), range(10, 31))
        left, right, arm_width, index = set_shoulder_positions(seq, (18, 20), 0, config)
        assert arm_width == 2
        assert left == (18, 12)
        assert right == (18, 28)
        assert seq[index] == (18, 30)

    def test_no_pixels_below_torso(self, config):
        seq = block(range(5, 10), range(10, 20))
        assert set_shoulder_positions(seq, (40, 15), 0, config) == (NOT_FOUND, NOT_FOUND, 1, 0)


class TestHalfway:
    def test_midpoint_and_distance(self):
        assert calc_halfway_torso_dist((18, 32), (66, 32)) == ((42, 32), 24.0)

    def test_truncates_toward_zero(self):
        node, _ = calc_halfway_torso_dist((10, 10), (5, 5))
        assert node == (8, 8)

    def test_missing_waist(self):
        assert calc_halfway_torso_dist((18, 32), NOT_FOUND) == (NOT_FOUND, 0.0)


class TestClosestPixel:
    seq = block(range(20), range(20))

    def test_exact_hit(self):
        assert find_closest_pixel(self.seq, (15, 5), 19, 0) == (15, 5)

    def test_skipped_entries_are_never_examined(self):
        assert find_closest_pixel(self.seq, (2, 2), 19, 0) == (10, 2)

    def test_nothing_past_skip(self):
        assert find_closest_pixel(self.seq, (2, 2), 19, 0, skip=500) == NOT_FOUND


def test_arm_locators_need_their_prerequisites(config):
    seq = block(range(10, 60), range(10, 30))
    assert find_elbow_feature(seq, (15, 20), NOT_FOUND, 2, 20.0, (35, 20), 0) == NOT_FOUND
    assert find_elbow_feature(seq, (15, 20), (15, 12), 2, 0.0, NOT_FOUND, 0) == NOT_FOUND

    grid = new_grid()
    assert find_hand_feature(seq, seq, grid, (50, 20), NOT_FOUND, 2, 20.0, 0, config) == NOT_FOUND
    assert find_hand_feature(seq, seq, grid, NOT_FOUND, (30, 12), 2, 20.0, 0, config) == NOT_FOUND


def test_hand_walk_needs_outline(config):
    seq = block(range(10, 20), range(10, 30))
    outline = PixelSequence([])
    assert find_hand_feature(seq, outline, new_grid(), (50, 20), (30, 12), 2, 20.0, 0, config) == NOT_FOUND


def rows_of(spans):
    """Row-major sequence from {row: (first_col, last_col)} spans."""
    return PixelSequence(
        [(row, col) for row in sorted(spans) for col in range(spans[row][0], spans[row][1] + 1)]
    )


class TestTorso:
    def test_narrowest_row_after_wider_rows(self, config):
        spans = {row: (5, 14) for row in range(48)}
        spans[12] = (9, 11)
        seq = rows_of(spans)

        torso, index = find_torso_feature(seq, (5, 10), 0, config)

        # neck row 12 + threshold, last neck column - half its run of 2
        assert torso == (17, 10)
        assert seq[index] == (12, 11)
        assert index == 122

    def test_first_of_equally_narrow_rows_wins(self, config):
        spans = {row: (5, 14) for row in range(48)}
        spans[12] = (9, 11)
        spans[20] = (20, 22)
        seq = rows_of(spans)

        torso, index = find_torso_feature(seq, (5, 10), 0, config)

        assert torso == (17, 10)
        assert seq[index] == (12, 11)

    def test_no_row_measured_pushes_column_off_grid(self, config):
        seq = rows_of({row: (0, 9) for row in range(45, 61)})

        torso, index = find_torso_feature(seq, (50, 0), 0, config)

        assert torso == (60, -500)
        assert index == 0

    def test_sequence_exhausted_before_torso(self, config):
        seq = rows_of({row: (0, 9) for row in range(3)})
        assert find_torso_feature(seq, (5, 0), 0, config) == (NOT_FOUND, 0)


class TestElbow:
    def test_later_of_equally_distant_pixels_wins(self):
        # arm edge drifts right on row 13 and back on row 14; both candidates
        # lie 5 pixels from the shoulder
        seq = rows_of(
            {10: (9, 12), 11: (9, 12), 12: (9, 12), 13: (13, 16), 14: (12, 15), 15: (12, 15)}
        )

        elbow = find_elbow_feature(seq, (10, 20), (10, 10), 1, 10.0, (14, 20), 0)

        assert elbow == (14, 13)

    body = rows_of({row: (20, 30) for row in range(10, 17)})

    def test_left_side_follows_left_edge(self):
        elbow = find_elbow_feature(self.body, (10, 25), (10, 21), 1, 10.0, (14, 25), 0)
        assert elbow == (14, 21)

    def test_right_side_follows_right_edge(self):
        elbow = find_elbow_feature(self.body, (10, 20), (10, 30), 1, 10.0, (14, 25), 0)
        assert elbow == (14, 29)


class TestHandWalk:
    """Forearm outlines drawn as an inverted V: one diagonal per arm."""

    @pytest.fixture
    def forearm_grid(self):
        grid = new_grid()
        for k in range(16):
            grid[k, 20 - k] = Label.OUTLINE
            grid[k, 24 + k] = Label.OUTLINE
        return grid

    @pytest.fixture
    def hand_config(self):
        return LocatorConfig(closest_pixel_skip=0)

    def walk(self, grid, elbow, config):
        outline = PixelSequence.from_mask(grid == Label.OUTLINE)
        interior = block(range(16), range(41))
        return find_hand_feature(interior, outline, grid, (30, 22), elbow, 1, 4.0, 0, config)

    def test_left_forearm_points_down_left(self, forearm_grid, hand_config):
        hand = self.walk(forearm_grid, (8, 12), hand_config)

        assert hand[0] > 8
        assert hand[1] < 12
        # elbow + 4 * (cos, sin)(-45 degrees), truncated
        assert hand == (10, 9)

    def test_right_forearm_starts_on_right_outline(self, forearm_grid, hand_config):
        hand = self.walk(forearm_grid, (8, 32), hand_config)

        assert hand[0] > 8
        assert hand[1] > 32
        assert hand == (10, 34)
