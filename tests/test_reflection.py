"""
Tests for the reflection encoding stored in diary entries.
"""
import pytest

from habitlog.core.errors import ValidationFailedError
from habitlog.services.reflection import compose_reflection, parse_energy, parse_reflection


class TestEnergy:
    def test_parse(self):
        assert parse_energy("Energy: 4") == 4
        assert parse_energy("Energy:2") == 2

    def test_missing(self):
        assert parse_energy("A quiet day") is None
        assert parse_energy("") is None
        assert parse_energy(None) is None


class TestComposeAndParse:
    def test_compose_layout(self):
        title, content = compose_reflection(3, "Ran 5k", "Slept late", "Stay the course")
        assert title == "Energy: 3"
        assert content == "Win: Ran 5k\nFriction: Slept late\nInvestment Mindset: Stay the course"

    def test_parse_back(self):
        title, content = compose_reflection(5, "a", "b", "c")
        r = parse_reflection(title, content)
        assert (r.energy, r.win, r.friction, r.investment_mindset) == (5, "a", "b", "c")

    def test_continuation_lines_join_previous_section(self):
        r = parse_reflection("Energy: 2", "Win: first\nsecond line\nFriction: none")
        assert r.win == "first\nsecond line"
        assert r.friction == "none"

    def test_free_text_has_empty_sections(self):
        r = parse_reflection("Notes", "just some text")
        assert r.energy is None
        assert r.win == ""

    @pytest.mark.parametrize("energy", [0, 6, True])
    def test_energy_out_of_range(self, energy):
        with pytest.raises(ValidationFailedError):
            compose_reflection(energy)
