"""
Tests for the dynasty -> graph group mapping.
"""

import pytest

from poets.dynasty import DYNASTY_GROUPS, OTHER_GROUP, dynasty_group


class TestDynastyGroup:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("唐", 1),
            ("唐代", 1),
            ("北宋", 2),
            ("南宋", 2),
            ("清代", 3),
            ("明朝", 4),
            ("魏晋", 5),
            ("魏晋南北朝", 5),
            ("东汉", 6),
        ],
    )
    def test_recognized_labels(self, label, expected):
        assert dynasty_group(label) == expected

    @pytest.mark.parametrize("label", ["元", "先秦", "近代", "", None])
    def test_unrecognized_labels_fall_into_other(self, label):
        assert dynasty_group(label) == OTHER_GROUP

    def test_first_match_wins(self):
        # Contains both 唐 and 宋; 唐 is declared first.
        assert dynasty_group("唐末宋初") == 1
        # Contains both 明 and 清; 清 is declared first.
        assert dynasty_group("明末清初") == 3
        # 魏晋 is checked before 汉.
        assert dynasty_group("汉魏晋") == 5

    def test_priority_order_is_explicit(self):
        assert [needle for needle, _ in DYNASTY_GROUPS] == ["唐", "宋", "清", "明", "魏晋", "汉"]
        groups = [group for _, group in DYNASTY_GROUPS]
        assert len(set(groups)) == len(groups)
        assert OTHER_GROUP not in groups
