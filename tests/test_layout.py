"""Tests for chord.py layout module."""

import math

import pytest

from dependency_wheel.errors import LayoutError, ValidationError
from dependency_wheel.layout.chord import ChordLayout, compute_layout, normalize_angle


def _chord_pairs(layout: ChordLayout) -> list[tuple[int, int]]:
    return [(c.source.index, c.target.index) for c in layout.chords]


class TestGroups:
    """Tests for angular group allocation."""

    def test_one_group_per_node(self, main_ab):
        layout = compute_layout(main_ab, padding=0.02)

        assert [g.index for g in layout.groups] == [0, 1, 2]

    def test_angle_coverage(self, main_ab):
        """Group spans plus N padding gaps cover the full circle."""
        padding = 0.05
        layout = compute_layout(main_ab, padding=padding)

        covered = sum(g.span for g in layout.groups) + len(layout.groups) * padding
        assert covered == pytest.approx(2 * math.pi)

    def test_spans_proportional_to_total_weight(self, weighted):
        """Group spans follow row + column sums (6, 1, 5 here)."""
        layout = compute_layout(weighted, padding=0.0)
        spans = [g.span for g in layout.groups]

        assert spans[0] / spans[1] == pytest.approx(6)
        assert spans[2] / spans[1] == pytest.approx(5)

    def test_groups_in_order_separated_by_padding(self, main_ab):
        padding = 0.1
        layout = compute_layout(main_ab, padding=padding)

        assert layout.groups[0].start_angle == 0
        for prev, nxt in zip(layout.groups, layout.groups[1:]):
            assert nxt.start_angle - prev.end_angle == pytest.approx(padding)

    def test_isolated_node_has_zero_width(self, isolated):
        """A node without edges gets an empty sector, not an error."""
        layout = compute_layout(isolated, padding=0.02)
        lonely = layout.groups[2]

        assert lonely.span == 0
        assert all(2 not in pair for pair in _chord_pairs(layout))

    def test_all_zero_matrix(self):
        """No weights at all: every group is empty and there are no chords."""
        layout = compute_layout([[0, 0], [0, 0]], padding=0.02)

        assert all(g.span == 0 for g in layout.groups)
        assert layout.chords == ()


class TestChords:
    """Tests for chord generation."""

    def test_one_chord_per_directed_edge(self, main_ab):
        layout = compute_layout(main_ab)

        assert _chord_pairs(layout) == [(0, 1), (0, 2), (1, 2)]

    def test_asymmetric_pair_gives_two_chords(self, asymmetric):
        """(i, j) and (j, i) are independent ribbons."""
        layout = compute_layout(asymmetric)

        assert _chord_pairs(layout) == [(0, 1), (1, 0)]
        assert [c.source.value for c in layout.chords] == [2, 3]

    def test_diagonal_excluded(self, self_loop):
        """Self-dependencies never produce a chord."""
        layout = compute_layout(self_loop)

        assert _chord_pairs(layout) == [(0, 1)]

    def test_chord_ends_proportional_to_weight(self, asymmetric):
        layout = compute_layout(asymmetric, padding=0.0)
        k = 2 * math.pi / 10

        for chord in layout.chords:
            width = chord.source.value * k
            assert chord.source.end_angle - chord.source.start_angle == pytest.approx(width)
            assert chord.target.end_angle - chord.target.start_angle == pytest.approx(width)

    def test_chord_ends_inside_groups(self, main_ab):
        layout = compute_layout(main_ab)

        for chord in layout.chords:
            for end in (chord.source, chord.target):
                group = layout.groups[end.index]
                assert group.start_angle <= end.start_angle <= end.end_angle <= group.end_angle

    def test_subgroups_sorted_by_weight(self, weighted):
        """Largest connection comes first within a group."""
        layout = compute_layout(weighted, padding=0.0)
        root = layout.groups[0]
        by_pair = {(c.source.index, c.target.index): c for c in layout.chords}

        # Order in group 0: out to 2 (3), in from 2 (2), out to 1 (1)
        assert by_pair[(0, 2)].source.start_angle == root.start_angle
        assert by_pair[(2, 0)].target.start_angle == pytest.approx(by_pair[(0, 2)].source.end_angle)
        assert by_pair[(0, 1)].source.end_angle == pytest.approx(root.end_angle)

    def test_equal_weights_keep_column_order(self, main_ab):
        """Ties are broken by original column order."""
        layout = compute_layout(main_ab)
        to_a, to_b = layout.chords[0], layout.chords[1]

        assert to_a.source.end_angle == pytest.approx(to_b.source.start_angle)


class TestRotation:
    """Tests for the root-centering offset."""

    @pytest.mark.parametrize("padding", [0.0, 0.02, 0.1])
    def test_root_centred(self, weighted, padding):
        """Root group midpoint is at angle 0 after rotation."""
        layout = compute_layout(weighted, padding=padding)

        assert layout.rotated_angle(layout.groups[0]) == pytest.approx(0, abs=1e-12)

    def test_rotation_not_baked_into_angles(self, main_ab):
        layout = compute_layout(main_ab)

        assert layout.groups[0].start_angle == 0
        assert layout.rotation == pytest.approx(-layout.groups[0].angle)
        assert layout.rotation_degrees == pytest.approx(math.degrees(layout.rotation))


class TestPaddingLimits:
    """Tests for padding validation."""

    def test_padding_too_large(self, main_ab):
        """padding * N >= 2π fails before allocating angles."""
        with pytest.raises(LayoutError, match="no room"):
            compute_layout(main_ab, padding=2.1)

    def test_padding_exactly_full_circle(self):
        with pytest.raises(LayoutError):
            compute_layout([[0, 1], [1, 0]], padding=math.pi)

    def test_negative_padding(self, main_ab):
        with pytest.raises(LayoutError, match="non-negative"):
            compute_layout(main_ab, padding=-0.01)


class TestDeterminism:
    """Tests for reproducible output."""

    def test_same_input_same_output(self, weighted):
        first = compute_layout(weighted, padding=0.03)
        second = compute_layout(weighted, padding=0.03)

        assert first == second
        assert [g.start_angle for g in first.groups] == [g.start_angle for g in second.groups]

    def test_raw_rows_accepted(self, main_ab):
        """Raw lists are validated and laid out like a DependencyMatrix."""
        assert compute_layout([[0, 1, 1], [0, 0, 1], [0, 0, 0]]) == compute_layout(main_ab)

    def test_raw_rows_validated(self):
        with pytest.raises(ValidationError):
            compute_layout([[0, 1], [0]])


class TestNormalizeAngle:
    """Tests for normalize_angle."""

    def test_wraps_into_range(self):
        assert normalize_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
        assert normalize_angle(-3 * math.pi / 2) == pytest.approx(math.pi / 2)
        assert normalize_angle(0.5) == 0.5
