import pytest

from roomgrid.layout import (
    GridLayoutGenerator,
    LayoutConfig,
    RecordingSink,
    missing_doors,
    one_way_doors,
    reachable_from,
    unreachable_rooms,
)

from tests.layout_test_utils import OPPOSITE, adjacent_pairs, bfs_through_doors, door_names

SEEDS = [101, 202, 303, 404, 505, 606, 707, 808]

CONFIGS = [
    LayoutConfig(),
    LayoutConfig(grid_size_x=6, grid_size_y=6, min_rooms=4, max_rooms=12),
    LayoutConfig(grid_size_x=15, grid_size_y=9, min_rooms=8, max_rooms=30, branch_probability=0.3),
    LayoutConfig(grid_size_x=10, grid_size_y=10, min_rooms=10, max_rooms=40, max_adjacency=2),
]


def _generate(cfg, seed):
    sink = RecordingSink()
    gen = GridLayoutGenerator(cfg.with_overrides(seed=seed), sink=sink)
    result = gen.run_to_completion()
    return gen, sink, result


@pytest.mark.structure
@pytest.mark.parametrize("cfg", CONFIGS)
def test_every_room_reachable_from_seed(cfg):
    for s in SEEDS:
        gen, sink, result = _generate(cfg, s)
        reach = bfs_through_doors(sink.rooms, sink.doors, result.seed_cell)
        missing = [r for r in sink.rooms if r not in reach]
        assert not missing, f"Seed {s} has unreachable rooms: {missing[:5]} (showing up to 5)"
        assert unreachable_rooms(gen.rooms, result.seed_cell) == []
        assert gen.metrics["unreachable_rooms"] == 0


@pytest.mark.structure
@pytest.mark.parametrize("cfg", CONFIGS)
def test_room_count_within_bounds(cfg):
    for s in SEEDS:
        _, sink, result = _generate(cfg, s)
        assert cfg.min_rooms <= result.room_count <= cfg.max_rooms, f"seed={s}"
        assert len(sink.rooms) == result.room_count


@pytest.mark.structure
@pytest.mark.parametrize("cfg", CONFIGS)
def test_adjacent_rooms_have_doors_on_both_sides(cfg):
    for s in SEEDS:
        gen, sink, _ = _generate(cfg, s)
        names = door_names(sink.doors)
        for a, d, b in adjacent_pairs(sink.rooms):
            assert d in names[a], f"seed={s} {a}->{b} lacks {d} door"
            assert OPPOSITE[d] in names[b], f"seed={s} {b} lacks reciprocal {OPPOSITE[d]} door"
        assert one_way_doors(gen.rooms) == []
        assert missing_doors(gen.rooms) == []


@pytest.mark.structure
def test_sink_mirrors_generator_records():
    for s in SEEDS:
        gen, sink, result = _generate(LayoutConfig(), s)
        assert set(sink.rooms) == set(gen.rooms) == set(result.rooms)
        assert sink.door_pairs() == set(result.doors)


def test_reachable_from_missing_start_is_empty():
    gen, _, _ = _generate(LayoutConfig(), 1)
    assert reachable_from(gen.rooms, (-1, -1)) == set()
