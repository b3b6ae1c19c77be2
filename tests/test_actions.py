from frontend.actions import Action, NoteAction, parse_action


def test_parse_action_from_query_lists():
    assert parse_action({"action": ["review"], "target": ["3"]}) == Action(NoteAction.REVIEW, "3")


def test_parse_action_plain_values():
    action = parse_action({"action": "preview", "target": "/uploads/a.pdf"})
    assert action.kind is NoteAction.PREVIEW
    assert action.target == "/uploads/a.pdf"


def test_parse_action_noop():
    assert parse_action({}) is None
    assert parse_action({"action": ["explode"], "target": ["1"]}) is None
    assert parse_action({"action": ["delete"]}) is None
