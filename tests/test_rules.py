from falling_blocks.game import ScoringRules


def test_score_scales_with_lines_and_level():
    rules = ScoringRules()
    assert rules.score_for_lines(0, 3) == 0
    assert rules.score_for_lines(2, 1) == 200
    assert rules.score_for_lines(3, 2) == 600


def test_level_every_500_points():
    rules = ScoringRules()
    assert rules.level_for_score(0) == 1
    assert rules.level_for_score(499) == 1
    assert rules.level_for_score(500) == 2
    assert rules.level_for_score(2600) == 6


def test_drop_interval_floor():
    rules = ScoringRules()
    assert rules.drop_interval_ms(1) == 950
    assert rules.drop_interval_ms(2) == 900
    assert rules.drop_interval_ms(18) == 100
    assert rules.drop_interval_ms(40) == 100
