from fintrack.models.finance import Goal
from fintrack.utils.goals import apply_contribution, goal_progress, parse_amount, top_goal


def test_parse_amount_is_lenient():
    assert parse_amount("12.5") == 12.5
    assert parse_amount(7) == 7.0
    assert parse_amount("") == 0.0
    assert parse_amount("twelve") == 0.0
    assert parse_amount("inf") == 0.0
    assert parse_amount(None) == 0.0


def test_goal_progress():
    assert goal_progress(Goal(name="Emergency Fund", current="500", target="1000")) == 50.0
    assert goal_progress(Goal(name="Broken", current="500", target="0")) == 0.0
    assert goal_progress(Goal(name="Bad target", current="500", target="n/a")) == 0.0


def test_top_goal_prefers_first_on_ties():
    goals = [
        Goal(id=1, name="Laptop", current="25", target="100"),
        Goal(id=2, name="Bike", current="1", target="2"),
        Goal(id=3, name="Camera", current="50", target="100"),
    ]
    goal, progress = top_goal(goals)
    assert goal.name == "Bike"
    assert progress == 50.0
    assert top_goal([]) is None


def test_apply_contribution():
    goal = Goal(name="Vacation", current="100", target="200")
    updated = apply_contribution(goal, "50")
    assert goal_progress(updated) == 75.0
    assert goal.current == "100"

    assert apply_contribution(goal, "abc") is goal
    assert apply_contribution(goal, "nan") is goal


def test_apply_contribution_ignores_booleans_and_strips_strings():
    goal = Goal(name="Vacation", current="100", target="200")
    assert apply_contribution(goal, True) is goal
    assert apply_contribution(goal, None) is goal
    assert goal_progress(apply_contribution(goal, " 100 ")) == 100.0
    assert parse_amount(True) == 0.0
