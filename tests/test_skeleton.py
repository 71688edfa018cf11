import numpy as np
import pytest

from people_finder.extractors.base import LandmarkExtractor
from people_finder.extractors.skeleton import (
    LANDMARK_NAMES,
    NUM_LANDMARKS,
    SkeletonExtractor,
)
from people_finder.silhouette.grid import NOT_FOUND, Label

# (row, col) of every landmark of the stick figure built in conftest
EXPECTED_STICK_FIGURE = {
    "head": (8, 27),
    "torso": (18, 32),
    "waist": (66, 32),
    "foot_a": (125, 3),
    "foot_b": (125, 60),
    "shoulder_left": (18, 23),
    "shoulder_right": (18, 40),
    "elbow_left": (42, 23),
    "hand_left": (66, 23),
    "elbow_right": (42, 40),
    "hand_right": (66, 40),
}


@pytest.fixture
def extractor():
    return SkeletonExtractor()


def test_stick_figure_skeleton(extractor, stick_grid):
    result = extractor.extract(stick_grid)

    assert result.valid
    assert len(result.landmarks) == NUM_LANDMARKS
    for name, (row, col) in result.as_dict().items():
        expected_row, expected_col = EXPECTED_STICK_FIGURE[name]
        assert abs(row - expected_row) <= 2, name
        assert abs(col - expected_col) <= 2, name


def test_stick_figure_layout(extractor, stick_grid):
    nodes = extractor.extract(stick_grid).as_dict()

    assert nodes["head"][0] < nodes["torso"][0] < nodes["waist"][0]
    assert nodes["foot_a"][1] < nodes["waist"][1] < nodes["foot_b"][1]
    assert nodes["shoulder_left"][1] <= nodes["shoulder_right"][1]
    assert nodes["shoulder_left"][0] < nodes["elbow_left"][0] < nodes["hand_left"][0]
    assert nodes["shoulder_right"][0] < nodes["elbow_right"][0] < nodes["hand_right"][0]


def test_extraction_is_deterministic(extractor, stick_grid):
    first = extractor.extract(stick_grid)
    second = extractor.extract(stick_grid)
    assert first == second


def test_input_grid_is_left_untouched(extractor, stick_grid):
    before = stick_grid.copy()
    extractor.extract(stick_grid)
    assert np.array_equal(stick_grid, before)


def test_in_place_fills_caller_grid(extractor, stick_grid):
    extractor.extract(stick_grid, in_place=True)
    assert stick_grid[64, 32] == Label.INTERIOR


def test_degenerate_fill(extractor, empty_grid):
    result = extractor.extract(empty_grid)

    assert not result.valid
    assert result.landmarks == [NOT_FOUND] * NUM_LANDMARKS


def test_torso_outside_grid(extractor, box_grid):
    result = extractor.extract(box_grid)
    nodes = result.as_dict()

    assert not result.valid
    assert nodes["head"] == (56, 11)
    assert nodes["torso"][1] < 0
    for name in LANDMARK_NAMES[2:]:
        assert nodes[name] == NOT_FOUND


def test_process_frame(extractor, stick_grid, empty_grid):
    landmarks = extractor.process_frame(stick_grid)
    assert landmarks.shape == (NUM_LANDMARKS, 2)
    assert landmarks.dtype == np.int32
    assert tuple(landmarks[0]) == extractor.extract(stick_grid).landmarks[0]

    assert extractor.process_frame(empty_grid) is None


def test_rejects_unlabeled_input(extractor):
    with pytest.raises(ValueError):
        extractor.extract(np.zeros((128, 64, 3), dtype=np.uint8))


def test_is_a_landmark_extractor(extractor):
    assert isinstance(extractor, LandmarkExtractor)
    extractor.close()


def test_hip_band_above_waist_window_is_ignored(extractor, make_grid):
    # wide hip band at row 60 with the body continuing below it; the waist
    # search starts at row 69, so the waist comes from the lower body
    mask = np.zeros((128, 64), dtype=bool)
    mask[0:4, 26:38] = True      # head
    mask[4:11, 31:34] = True     # neck
    mask[11:59, 16:48] = True    # torso
    mask[59:62, 4:60] = True     # hip band
    mask[62:90, 10:54] = True    # lower body
    mask[90:128, 10:21] = True   # left leg
    mask[90:128, 43:54] = True   # right leg

    result = extractor.extract(make_grid(mask))
    nodes = result.as_dict()

    assert result.valid
    assert nodes["head"] == (6, 27)
    assert nodes["torso"] == (16, 32)
    assert nodes["waist"] == (64, 32)
