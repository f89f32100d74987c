"""
Tests for config/constants.py - BOQ status enumeration.
"""

import pytest

from config.constants import BOQ_STATUS_TRANSITIONS, BOQStatus


class TestBOQStatus:
    """Test status parsing and transitions."""

    @pytest.mark.parametrize("raw, expected", [
        ("draft", BOQStatus.DRAFT),
        ("confirmed", BOQStatus.CONFIRMED),
        ("APPROVED", BOQStatus.APPROVED),
        (" rejected ", BOQStatus.REJECTED),
        (BOQStatus.DRAFT, BOQStatus.DRAFT),
    ])
    def test_parse(self, raw, expected):
        assert BOQStatus.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["archived", "", None])
    def test_parse_unknown(self, raw):
        with pytest.raises(ValueError):
            BOQStatus.parse(raw)

    def test_stored_value_compares_as_string(self):
        assert BOQStatus.DRAFT == "draft"

    def test_every_status_has_transitions(self):
        assert set(BOQ_STATUS_TRANSITIONS) == set(BOQStatus)

    def test_draft_moves_only_to_terminal_statuses(self):
        assert BOQ_STATUS_TRANSITIONS[BOQStatus.DRAFT] == {
            BOQStatus.CONFIRMED, BOQStatus.APPROVED, BOQStatus.REJECTED,
        }
        assert BOQ_STATUS_TRANSITIONS[BOQStatus.CONFIRMED] == frozenset()
        assert BOQ_STATUS_TRANSITIONS[BOQStatus.APPROVED] == frozenset()
        assert BOQ_STATUS_TRANSITIONS[BOQStatus.REJECTED] == frozenset()
