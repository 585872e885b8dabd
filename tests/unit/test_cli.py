from contextlib import contextmanager
from unittest.mock import patch

from click.testing import CliRunner

from pagescope.cli.main import build_chain, cli
from pagescope.layers.sense.dom_query import clear_default_driver, set_default_driver


class MockElement:
    def __init__(self, text="", dom=None, tag_name="button"):
        self.text = text
        self.dom = dom or {}
        self.tag_name = tag_name
        self.visited = []

    def find_elements(self, by, value):
        return list(self.dom.get(value, []))

    def get(self, url):
        self.visited.append(url)

    def get_attribute(self, name):
        return self.text

    def is_displayed(self):
        return True


def fake_session(driver):
    @contextmanager
    def session(config=None, register_default=False):
        set_default_driver(driver)
        try:
            yield driver
        finally:
            clear_default_driver()
    return session


def test_build_chain_names_and_resets():
    leaf = build_chain(["section=.section", ".list"], reset_at={2})

    assert leaf.key == "node2"
    assert leaf.reset_scope is True
    assert leaf.parent.key == "section"
    assert leaf.parent.scope == ".section"


def test_build_chain_keeps_attribute_selectors_intact():
    leaf = build_chain(["[name=q]"])
    assert leaf.scope == "[name=q]"


def test_selector_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["selector", ".button", "-s", "section=.section"])

    assert result.exit_code == 0
    assert result.output == ".section .button\n"


def test_selector_command_filters_and_reset():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "selector", "li", "-s", ".app", "-s", ".list", "--reset-at", "2",
        "--contains", "Milk", "--at", "0", "--last",
    ])

    assert result.exit_code == 0
    assert result.output == '.list li:contains("Milk"):eq(0)\n'


def test_selector_command_rejects_negative_index():
    runner = CliRunner()
    result = runner.invoke(cli, ["selector", "li", "--at", "-1"])

    assert result.exit_code != 0


def test_find_command_lists_matches():
    driver = MockElement(dom={".section .button": [MockElement("Save")]})
    runner = CliRunner()

    with patch("pagescope.core.driver_factory.driver_session", fake_session(driver)):
        result = runner.invoke(cli, ["find", "https://example.com", ".button", "-s", "section=.section"])

    assert result.exit_code == 0
    assert driver.visited == ["https://example.com"]
    assert "1 element(s) matched" in result.output


def test_find_command_reports_missing_element():
    driver = MockElement()
    runner = CliRunner()

    with patch("pagescope.core.driver_factory.driver_session", fake_session(driver)):
        result = runner.invoke(cli, ["find", "https://example.com", ".button", "--key", "save"])

    assert result.exit_code == 1
    assert "Element not found" in result.output


def test_version_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["version"])

    assert result.exit_code == 0
    assert "pagescope v" in result.output
