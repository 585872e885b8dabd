"""
Integration tests against a real headless Chrome.

Opt in with PAGESCOPE_LIVE=1; Chrome and a matching driver must be
available to Selenium.
"""

import os
import urllib.parse

import pytest

# Skip if dependencies not available
pytest.importorskip("selenium")

pytestmark = pytest.mark.skipif(
    os.environ.get("PAGESCOPE_LIVE") != "1",
    reason="set PAGESCOPE_LIVE=1 to run live browser tests",
)

PAGE = """
<html><body>
  <div class="todo-app">
    <ul class="todo-list">
      <li>Buy milk</li>
      <li>Walk dog</li>
      <li>Buy bread</li>
    </ul>
    <button class="clear" style="display: none">Clear</button>
  </div>
  <div class="footer"><a href="#">More information</a></div>
</body></html>
"""


class TestLiveLookup:
    """Resolve page object selectors against a rendered page."""

    @pytest.fixture(autouse=True)
    def setup(self):
        from pagescope.core.driver_factory import DriverConfig, driver_session
        from pagescope.core.tree import PageNode

        with driver_session(DriverConfig(headless=True), register_default=True) as driver:
            driver.get("data:text/html;charset=utf-8," + urllib.parse.quote(PAGE))
            self.page = PageNode(
                app=PageNode(scope=".todo-app", todos=PageNode(scope=".todo-list")),
                footer=PageNode(scope=".footer"),
            )
            yield

    def test_scoped_text_filter(self):
        from pagescope import find_element_with_assert

        result = find_element_with_assert(self.page.app.todos, "li", contains="Buy", last=True)

        assert result.length == 1
        assert result[0].text == "Buy bread"

    def test_multiple_matches(self):
        from pagescope import MultipleMatchesError, find_element, find_element_with_assert

        with pytest.raises(MultipleMatchesError):
            find_element(self.page.app.todos, "li")

        assert len(find_element_with_assert(self.page.app.todos, "li", multiple=True)) == 3

    def test_missing_element_breadcrumb(self):
        from pagescope import ElementNotFoundError, find_element_with_assert

        with pytest.raises(ElementNotFoundError, match="page.footer.title"):
            find_element_with_assert(self.page.footer, "h1", page_object_key="title")

    def test_hidden_element(self):
        from pagescope import ElementNotVisibleError, find_visible_element_with_assert

        with pytest.raises(ElementNotVisibleError):
            find_visible_element_with_assert(self.page.app, ".clear")
