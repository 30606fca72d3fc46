import pytest

from roomgrid.layout import (
    ConfigurationError,
    GenerationFailed,
    GenerationState,
    LayoutConfig,
    SequenceRandom,
)


def test_min_above_max_rejected_before_any_room(make_generator, sink):
    gen = make_generator(min_rooms=12, max_rooms=10)
    with pytest.raises(ConfigurationError) as exc:
        gen.initialize()
    assert "min_rooms" in str(exc.value)
    assert sink.events == []
    assert gen.room_count == 0
    assert not gen.initialized


def test_run_to_completion_validates_config(make_generator, sink):
    gen = make_generator(grid_size_x=2, grid_size_y=2, min_rooms=1, max_rooms=5)
    with pytest.raises(ConfigurationError):
        gen.run_to_completion()
    assert sink.events == []


def test_full_rejection_resets_back_to_seed(make_generator, sink):
    gen = make_generator(branch_probability=1.0, min_rooms=5, max_rooms=15, max_retries=10, seed=2)
    gen.initialize()
    gen.step()  # seed neighbors all rejected
    assert gen.room_count == 1
    assert gen.frontier == ()
    gen.step()  # frontier empty below min_rooms -> reset
    assert gen.metrics["resets"] == 1
    assert gen.attempts == 2
    assert gen.room_count == 1
    assert gen.frontier == (gen.seed_cell,)
    assert sink.clears == 1
    assert set(sink.rooms) == {gen.seed_cell}
    assert gen.state is GenerationState.EXPANDING


def test_retry_cap_surfaces_generation_failed(make_generator, sink):
    gen = make_generator(branch_probability=1.0, min_rooms=5, max_rooms=15, max_retries=3, seed=2)
    with pytest.raises(GenerationFailed) as exc:
        gen.run_to_completion()
    assert exc.value.attempts == 4
    assert gen.metrics["resets"] == 3
    # nothing left emitted once generation gives up
    assert sink.rooms == {}
    assert sink.clears == 4
    assert gen.room_count == 0
    assert not gen.initialized


def test_zero_retries_fails_on_first_shortfall(make_generator):
    gen = make_generator(branch_probability=1.0, min_rooms=2, max_rooms=4, max_retries=0, seed=2)
    with pytest.raises(GenerationFailed) as exc:
        gen.run_to_completion()
    assert exc.value.attempts == 1


def test_reset_then_complete(make_generator, sink):
    # first attempt: all four seed neighbors rejected; second attempt: all accepted
    rng = SequenceRandom([0.0] * 4 + [0.9] * 4, cycle=False)
    gen = make_generator(rng=rng, grid_size_x=3, grid_size_y=3, min_rooms=5, max_rooms=5)
    result = gen.run_to_completion()
    assert result.complete
    assert result.room_count == 5
    assert result.attempts == 2
    assert gen.metrics["resets"] == 1
    assert rng.consumed == 8
    assert set(result.rooms) == {(1, 1), (0, 1), (2, 1), (1, 2), (1, 0)}
    assert sink.clears == 1


def test_unbounded_retries_allowed_in_config():
    cfg = LayoutConfig(max_retries=None)
    assert cfg.validate() is cfg
