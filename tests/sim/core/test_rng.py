"""Tests for the seeded battle RNG."""

from cosmic_battle.sim.core.rng import BattleRNG


class TestDeterminism:
    def test_same_seed_same_sequence(self):
        a = BattleRNG(7)
        b = BattleRNG(7)

        assert [a.random_float() for _ in range(10)] == [b.random_float() for _ in range(10)]
        assert [a.random_int(0, 100) for _ in range(10)] == [b.random_int(0, 100) for _ in range(10)]

    def test_different_seeds_diverge(self):
        a = BattleRNG(1)
        b = BattleRNG(2)
        assert [a.random_float() for _ in range(5)] != [b.random_float() for _ in range(5)]

    def test_seed_property(self):
        assert BattleRNG(123).seed == 123


class TestFork:
    def test_fork_is_reproducible(self):
        assert BattleRNG(7).fork("battle").seed == BattleRNG(7).fork("battle").seed

    def test_fork_names_give_distinct_streams(self):
        rng = BattleRNG(7)
        assert rng.fork("battle").seed != rng.fork("targets").seed

    def test_fork_does_not_consume_parent_draws(self):
        a = BattleRNG(7)
        b = BattleRNG(7)
        a.fork("battle")
        assert a.random_float() == b.random_float()

    def test_fork_ignores_draws_already_taken(self):
        used = BattleRNG(7)
        for _ in range(5):
            used.random_float()

        assert used.fork("battle").seed == BattleRNG(7).fork("battle").seed
        assert 0 <= BattleRNG(7).fork("battle").seed < 2**64


class TestDraws:
    def test_random_int_bounds_inclusive(self):
        rng = BattleRNG(0)
        values = {rng.random_int(0, 2) for _ in range(200)}
        assert values == {0, 1, 2}

    def test_random_float_range(self):
        rng = BattleRNG(0)
        for _ in range(100):
            assert 0.0 <= rng.random_float() < 1.0

    def test_random_choice_single_element(self):
        assert BattleRNG(0).random_choice(["only"]) == "only"

    def test_chance_extremes(self):
        rng = BattleRNG(0)
        assert not any(rng.chance(0.0) for _ in range(50))
        assert all(rng.chance(1.0) for _ in range(50))

    def test_repr(self):
        assert repr(BattleRNG(5)) == "BattleRNG(seed=5)"
