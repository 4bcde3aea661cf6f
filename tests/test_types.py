"""Tests for worldsim.types — seeds and world statistics."""

import pytest

from worldsim.types import ADULT_AGE, Gender, Seed, WorldStatistics


class TestGender:
    def test_values(self):
        assert Gender.MALE == 0
        assert Gender.FEMALE == 1


class TestSeed:
    def test_defaults(self):
        seed = Seed()
        assert seed.age == 0
        assert seed.gender == Gender.MALE
        assert seed.iq == 0

    @pytest.mark.parametrize("age,adult", [
        (0, False), (ADULT_AGE - 1, False), (ADULT_AGE, True), (70, True),
    ])
    def test_is_adult(self, age, adult):
        assert Seed(age=age).is_adult is adult


class TestWorldStatistics:
    def test_starts_empty(self):
        s = WorldStatistics()
        assert s.population == 0
        assert s.total_adults == 0
        assert s.total_children == 0

    def test_totals(self):
        s = WorldStatistics(men=3, women=4, boys=5, girls=6)
        assert s.total_adults == 7
        assert s.total_children == 11

    def test_count_seed_buckets(self):
        s = WorldStatistics()
        s.count_seed(Seed(age=30, gender=Gender.MALE))
        s.count_seed(Seed(age=30, gender=Gender.FEMALE))
        s.count_seed(Seed(age=30, gender=Gender.FEMALE))
        s.count_seed(Seed(age=2, gender=Gender.MALE))
        s.count_seed(Seed(age=2, gender=Gender.FEMALE))
        assert (s.men, s.women, s.boys, s.girls) == (1, 2, 1, 1)
        assert s.population == 5

    def test_count_seed_leaves_food_alone(self):
        s = WorldStatistics(food=12, food_resource=40)
        s.count_seed(Seed(age=20))
        assert s.food == 12
        assert s.food_resource == 40
