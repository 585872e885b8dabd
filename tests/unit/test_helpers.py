from pagescope.layers.sense.dom_query import MatchSet
from pagescope.layers.sense.helpers import every, map_elements, normalize_text


class MockElement:
    def __init__(self, text, displayed=True):
        self.text = text
        self.displayed = displayed

    def is_displayed(self):
        return self.displayed


def test_normalize_text_collapses_whitespace():
    assert normalize_text("  Buy\n   milk \t now  ") == "Buy milk now"
    assert normalize_text("") == ""
    assert normalize_text(None) == ""


def test_every_over_match_set():
    shown = MatchSet([MockElement("a"), MockElement("b")])
    mixed = MatchSet([MockElement("a"), MockElement("b", displayed=False)])

    assert every(shown, lambda element: element.is_displayed()) is True
    assert every(mixed, lambda element: element.is_displayed()) is False
    assert every(MatchSet([]), lambda element: False) is True


def test_map_elements_keeps_order():
    elements = MatchSet([MockElement(" Buy\nmilk "), MockElement("Walk dog")])
    assert map_elements(elements, lambda element: normalize_text(element.text)) == ["Buy milk", "Walk dog"]
