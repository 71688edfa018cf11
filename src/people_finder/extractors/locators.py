"""
Heuristic body-part locators over silhouette pixel sequences.

Each locator walks an ordered pixel sequence starting from the cursor left
by the locator before it and returns a landmark together with the cursor it
stopped at. Cursors only move forward, so the whole chain is a single pass
over the silhouette.

A locator that runs out of pixels before finding a candidate returns
NOT_FOUND and hands back the cursor it was given.
"""
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..silhouette.grid import NOT_FOUND, Coordinate, Label, in_grid
from ..silhouette.pixels import PixelSequence

# Outline neighbours in search order: lower right, lower mid, lower left,
# right, left, upper right, upper mid, upper left
NEIGHBOUR_OFFSETS = (
    (1, 1), (1, 0), (1, -1),
    (0, 1), (0, -1),
    (-1, 1), (-1, 0), (-1, -1),
)


@dataclass
class LocatorConfig:
    """
    Tuning constants of the locator chain.

    Row bounds are given for the reference 128x64 silhouette.

    Args:
        threshold: Row slack used to offset landmarks and skip header rows
        torso_lower_row: Last row (exclusive) searched for the neck
        waist_upper_row: Waist search starts `threshold` rows below this row
        waist_lower_row: Last row (exclusive) searched for the hip line
        foot_upper_row: Foot search starts `threshold` rows below this row
        waist_skip_rows: Row distance at which the waist skip jumps ahead
        waist_skip_step: Entries jumped by the waist skip
        hand_skip_rows: Row distance at which the hand skips jump ahead
        hand_outline_skip_step: Outline entries jumped by the hand skip
        hand_interior_skip_step: Interior entries jumped by the hand skip
        closest_pixel_skip: Interior entries ignored before the hand search
        arm_width_divisor: Shoulder span divided by this gives the arm width
    """

    threshold: int = 5
    torso_lower_row: int = 48
    waist_upper_row: int = 64
    waist_lower_row: int = 80
    foot_upper_row: int = 70
    waist_skip_rows: int = 8
    waist_skip_step: int = 100
    hand_skip_rows: int = 5
    hand_outline_skip_step: int = 10
    hand_interior_skip_step: int = 100
    closest_pixel_skip: int = 200
    arm_width_divisor: int = 10


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    return int(value / 2)


def _distance(a: Coordinate, b: Coordinate) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _widest_run(
    shape_pixels: PixelSequence, start: int, lower_row: int
) -> Tuple[int, Coordinate, int]:
    """
    Find the longest contiguous same-row run between `start` and `lower_row`.

    A pixel extends the run only if it sits directly right of the previous
    one, so limbs separated from the body by a gap start a new run.

    Returns:
        Tuple of (run length, last pixel of the run, index of that pixel).
        The run length counts the pixels after the first one.
    """
    n = len(shape_pixels)
    i = start
    current_row, current_col = shape_pixels[i]
    best = shape_pixels[i]
    best_index = i
    largest = 0
    current_dist = 0

    while i < n and shape_pixels[i][0] < lower_row:
        i += 1
        current_col += 1
        if shape_pixels.get(i) == (current_row, current_col):
            current_dist += 1
        else:
            if current_dist > largest:
                largest = current_dist
                best = shape_pixels[i - 1]
                best_index = i - 1
            if i < n:
                current_row, current_col = shape_pixels[i]
            current_dist = 0

    return largest, best, best_index


def find_head_feature(shape_pixels: PixelSequence, threshold: int) -> Tuple[Coordinate, int]:
    """
    Locate the head as the topmost interior pixel, pushed `threshold` rows down.

    Only the first few rows are scanned: the scan stops once a row is
    `threshold` rows below the best row found so far.

    Returns:
        Tuple of (head landmark, cursor of the topmost pixel)
    """
    head = NOT_FOUND
    index_head = 0
    i = 0

    while i < len(shape_pixels) and shape_pixels[i][0] < head[0] + threshold:
        if shape_pixels[i][0] < head[0]:
            head = shape_pixels[i]
            index_head = i
        i += 1

    if head == NOT_FOUND:
        return NOT_FOUND, index_head
    return (head[0] + threshold, head[1]), index_head


def find_torso_feature(
    shape_pixels: PixelSequence,
    head: Coordinate,
    index_head: int,
    config: LocatorConfig,
) -> Tuple[Coordinate, int]:
    """
    Locate the torso at the narrowest row between the head and `torso_lower_row`.

    The narrowest row is taken as the neck; the landmark sits `threshold`
    rows below it, in the middle of the row.

    Returns:
        Tuple of (torso landmark, cursor of the last pixel of the neck row).
        When no row could be measured the landmark lands outside the grid.
    """
    threshold = config.threshold
    n = len(shape_pixels)
    lower_bound = config.torso_lower_row
    if lower_bound < head[0]:
        lower_bound = head[0] + 1

    i = index_head
    while i < n and shape_pixels[i][0] < head[0] + threshold:
        i += 1

    if i >= n:
        return NOT_FOUND, index_head

    current_row = shape_pixels[i][0]
    best = shape_pixels[i]
    index_torso = index_head
    shortest_dist = 1000
    current_dist = 0

    while i < n and shape_pixels[i][0] < lower_bound:
        i += 1
        if shape_pixels.row(i) == current_row:
            current_dist += 1
        else:
            if current_dist < shortest_dist:
                shortest_dist = current_dist
                best = shape_pixels[i - 1]
                index_torso = i - 1
            current_dist = 0
            if i < n:
                current_row = shape_pixels[i][0]

    return (best[0] + threshold, best[1] - _half(shortest_dist)), index_torso


def find_waist_feature(
    shape_pixels: PixelSequence,
    torso: Coordinate,
    index_torso: int,
    config: LocatorConfig,
) -> Tuple[Coordinate, int]:
    """
    Locate the waist at the widest contiguous run of the lower body.

    The widest stable run between `waist_upper_row + threshold` and
    `waist_lower_row` is taken as the hip line, before the legs separate.

    Returns:
        Tuple of (waist landmark, cursor of the last pixel of the hip run)
    """
    threshold = config.threshold
    n = len(shape_pixels)
    upper_bound = config.waist_upper_row
    if upper_bound < torso[0]:
        upper_bound = torso[0] + 1
    target_row = upper_bound + threshold

    i = index_torso
    while i < n and shape_pixels[i][0] < target_row:
        # jump ahead while far above the hip region
        if target_row - shape_pixels[i][0] >= config.waist_skip_rows:
            i += config.waist_skip_step
        i += 1

    if i >= n:
        return NOT_FOUND, index_torso

    largest_dist, best, index_waist = _widest_run(shape_pixels, i, config.waist_lower_row)
    return (best[0] - threshold, best[1] - _half(largest_dist)), index_waist


def find_foot_feature(
    shape_pixels: PixelSequence,
    waist: Coordinate,
    corner: Coordinate,
    index_waist: int,
    config: LocatorConfig,
) -> Coordinate:
    """
    Locate a foot as the lower-body pixel closest to a bottom corner.

    Returns:
        The foot landmark, or NOT_FOUND if no pixel lies below the waist
    """
    n = len(shape_pixels)
    upper_bound = config.foot_upper_row
    if upper_bound < waist[0]:
        upper_bound = waist[0] + 1

    i = index_waist
    while i < n and shape_pixels[i][0] < upper_bound + config.threshold:
        i += 1

    foot = NOT_FOUND
    shortest_corner_dist = 10000.0
    for point in shape_pixels[i + 1:]:
        current_dist = _distance(corner, point)
        if current_dist < shortest_corner_dist:
            shortest_corner_dist = current_dist
            foot = point

    return foot


def set_shoulder_positions(
    shape_pixels: PixelSequence,
    torso: Coordinate,
    index_torso: int,
    config: LocatorConfig,
) -> Tuple[Coordinate, Coordinate, int, int]:
    """
    Place both shoulders at the ends of the widest run just below the torso.

    The band searched is `threshold` rows tall, starting at the torso row.
    The arm width is a tenth of that run, never less than one pixel. The
    left shoulder always has the smaller column.

    Returns:
        Tuple of (left shoulder, right shoulder, arm width, shoulder cursor)
    """
    n = len(shape_pixels)
    upper_bound = torso[0]
    lower_bound = torso[0] + config.threshold

    i = index_torso
    while i < n and shape_pixels[i][0] < upper_bound:
        i += 1

    if i >= n:
        return NOT_FOUND, NOT_FOUND, 1, index_torso

    largest_dist, best, index_shoulders = _widest_run(shape_pixels, i, lower_bound)

    arm_width = max(1, largest_dist // config.arm_width_divisor)
    left = (best[0], best[1] - largest_dist + arm_width)
    right = (best[0], best[1] - arm_width)
    if left[1] > right[1]:
        left, right = right, left

    return left, right, arm_width, index_shoulders


def calc_halfway_torso_dist(torso: Coordinate, waist: Coordinate) -> Tuple[Coordinate, float]:
    """
    Midpoint between torso and waist, and its distance from the torso.

    The distance is used as the expected length of an arm segment.
    """
    if NOT_FOUND in (torso, waist):
        return NOT_FOUND, 0.0

    halfway_node = (
        torso[0] + _half(waist[0] - torso[0]),
        torso[1] + _half(waist[1] - torso[1]),
    )
    return halfway_node, _distance(halfway_node, torso)


def _arm_edge_pixel(
    shape_pixels: PixelSequence, index: int, arm_width: int, right_side: bool
) -> Coordinate:
    """Pixel one arm width inside the body edge on the row at `index`."""
    row, col = shape_pixels[index]
    if right_side:
        return row, shape_pixels[max(index - 1, 0)][1] - arm_width
    return row, col + arm_width


def find_elbow_feature(
    shape_pixels: PixelSequence,
    torso: Coordinate,
    shoulder: Coordinate,
    arm_width: int,
    halfway_dist: float,
    halfway_node: Coordinate,
    index_shoulders: int,
) -> Coordinate:
    """
    Follow one side of the body down from the shoulder to place the elbow.

    On every row down to the halfway node the pixel one arm width inside the
    body edge is a candidate; the candidate minimising
    `halfway_dist - distance(candidate, shoulder)` wins. The right side is
    the one whose shoulder is not left of the torso.

    Returns:
        The elbow landmark, or NOT_FOUND
    """
    if NOT_FOUND in (shoulder, halfway_node):
        return NOT_FOUND

    n = len(shape_pixels)
    i = index_shoulders
    while i < n and shape_pixels[i][0] < shoulder[0]:
        i += 1

    if i >= n:
        return NOT_FOUND

    right_side = shoulder[1] >= torso[1]
    best = _arm_edge_pixel(shape_pixels, i, arm_width, right_side=False)
    valid_pixel = _arm_edge_pixel(shape_pixels, i, arm_width, right_side)
    closest_dist = 100000.0
    i += 1

    while i < n and shape_pixels[i][0] <= halfway_node[0]:
        i += 1
        point = shape_pixels.get(i)
        if point is None:
            break

        if point == valid_pixel:
            current_dist = _distance(point, shoulder)
            if halfway_dist - current_dist <= closest_dist:
                closest_dist = halfway_dist - current_dist
                best = point

        if point[0] != valid_pixel[0]:
            valid_pixel = _arm_edge_pixel(shape_pixels, i, arm_width, right_side)

    return best


def find_closest_pixel(
    shape_pixels: PixelSequence,
    goal: Coordinate,
    row_bound: int,
    start: int,
    skip: int = 200,
) -> Coordinate:
    """
    Find the interior pixel closest to a goal point.

    The first `skip` entries after `start` are never examined and the search
    stops past `row_bound`. An exact hit ends the search early.
    """
    n = start + skip
    best = NOT_FOUND
    best_dist = 1000.0

    while n < len(shape_pixels) and shape_pixels[n][0] <= row_bound:
        n += 1
        point = shape_pixels.get(n)
        if point is None:
            break
        if point == goal:
            return point

        current_dist = _distance(goal, point)
        if current_dist <= best_dist:
            best_dist = current_dist
            best = point

    return best


def find_hand_feature(
    shape_pixels: PixelSequence,
    outline_pixels: PixelSequence,
    grid: np.ndarray,
    waist: Coordinate,
    elbow: Coordinate,
    arm_width: int,
    halfway_dist: float,
    index_shoulders: int,
    config: LocatorConfig,
) -> Coordinate:
    """
    Place a hand by walking the outline of the forearm from the elbow.

    1. Skip the outline to the row one arm width above the elbow.
    2. Follow outline neighbours for `halfway_dist / 2` steps, summing the
       direction of each step.
    3. Project a goal `halfway_dist` away from the elbow along the mean
       direction.
    4. Return the interior pixel closest to that goal.

    Returns:
        The hand landmark, or NOT_FOUND
    """
    if NOT_FOUND in (waist, elbow):
        return NOT_FOUND

    target_row = elbow[0] - arm_width

    # the elbow row doubles as a starting index into the outline
    i = elbow[0]
    while i < len(outline_pixels) and outline_pixels[i][0] < target_row:
        if target_row - outline_pixels[i][0] > config.hand_skip_rows:
            i += config.hand_outline_skip_step
        i += 1

    j = index_shoulders
    while j < len(shape_pixels) and shape_pixels[j][0] < target_row:
        if target_row - shape_pixels[j][0] > config.hand_skip_rows:
            j += config.hand_interior_skip_step
        j += 1

    # right arm: assumed right of the waist
    if elbow[1] >= waist[1]:
        i -= 1
    current = outline_pixels.get(i)

    previous = NOT_FOUND
    steps = 0
    angle_sum = 0.0
    while current is not None and steps <= halfway_dist / 2:
        for d_row, d_col in NEIGHBOUR_OFFSETS:
            neighbour = (current[0] + d_row, current[1] + d_col)
            if (
                in_grid(neighbour, grid)
                and grid[neighbour] == Label.OUTLINE
                and neighbour != previous
            ):
                previous, current = current, neighbour
                angle_sum += math.atan2(current[1] - previous[1], current[0] - previous[0])
                break
        steps += 1

    if steps == 0:
        return NOT_FOUND

    average_angle = angle_sum / steps
    goal = (
        int(elbow[0] + halfway_dist * math.cos(average_angle)),
        int(elbow[1] + halfway_dist * math.sin(average_angle)),
    )
    return find_closest_pixel(
        shape_pixels, goal, int(elbow[0] + halfway_dist), j, config.closest_pixel_skip
    )
