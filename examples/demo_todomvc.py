"""
End-to-End Demo: pagescope on TodoMVC

This script describes the Playwright TodoMVC demo site as a page tree,
adds a todo, and resolves elements through their scoped selectors.
"""

from selenium.webdriver.common.keys import Keys

from pagescope import ElementNotFoundError, PageNode, build_selector, find_element_with_assert
from pagescope.core.driver_factory import DriverConfig, driver_session
from pagescope.layers.sense import map_elements, normalize_text


def main():
    print("=" * 60)
    print("🔎 pagescope - End-to-End Demo")
    print("=" * 60)
    print()

    page = PageNode(
        header=PageNode(scope=".header"),
        todos=PageNode(scope=".todo-list", item=PageNode(scope="li")),
        footer=PageNode(scope=".footer"),
    )

    print(f"New todo input:   {build_selector(page.header, '.new-todo')}")
    print(f"Last todo label:  {build_selector(page.todos.item, 'label', last=True)}")
    print()

    with driver_session(DriverConfig(headless=False), register_default=True) as driver:
        driver.get("https://demo.playwright.dev/todomvc/")

        find_element_with_assert(page.header, ".new-todo")[0].send_keys("Buy milk", Keys.RETURN)
        find_element_with_assert(page.header, ".new-todo")[0].send_keys("Walk dog", Keys.RETURN)

        labels = find_element_with_assert(page.todos.item, "label", multiple=True)
        print("📝 Todos:")
        for text in map_elements(labels, lambda label: normalize_text(label.text)):
            print(f"   - {text}")

        milk = find_element_with_assert(page.todos.item, "label", contains="Buy milk")
        print(f"\n✅ Found: {milk[0].text}")

        try:
            find_element_with_assert(page.footer, ".clear-completed", page_object_key="clearCompleted")
        except ElementNotFoundError as e:
            print(f"\n❌ Expected failure:\n{e}")

    print("=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
