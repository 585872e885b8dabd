"""
Driver Factory - WebDriver creation for page object lookups.

Provides a single interface to create Chrome WebDriver instances and a
session context that can register the driver as the process-wide
default used when a page tree carries no test context.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional
import logging
import os

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions

from pagescope.layers.sense.dom_query import clear_default_driver, get_default_driver, set_default_driver

logger = logging.getLogger(__name__)

# Type alias for driver - can be extended to support other browsers
WebDriverType = webdriver.Chrome

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class DriverConfig:
    """Configuration for browser sessions."""
    headless: bool = True
    profile_path: Optional[str] = None  # Chrome user data dir for session persistence
    window_size: str = "1920,1080"
    page_load_timeout: int = 30  # Seconds

    @classmethod
    def from_env(cls) -> "DriverConfig":
        """
        Build a configuration from ``PAGESCOPE_*`` environment variables.

        Unset variables keep the dataclass defaults.
        """
        defaults = cls()
        return cls(
            headless=os.environ.get("PAGESCOPE_HEADLESS", "1").strip().lower() not in _FALSE_VALUES,
            profile_path=os.environ.get("PAGESCOPE_PROFILE_PATH") or defaults.profile_path,
            window_size=os.environ.get("PAGESCOPE_WINDOW_SIZE") or defaults.window_size,
            page_load_timeout=int(os.environ.get("PAGESCOPE_PAGE_LOAD_TIMEOUT", defaults.page_load_timeout)),
        )


def create_driver(config: Optional[DriverConfig] = None) -> WebDriverType:
    """
    Create a Chrome WebDriver instance.

    Args:
        config: Session configuration; read from the environment when omitted

    Example:
        >>> driver = create_driver(DriverConfig(headless=True))
        >>> driver.get("https://example.com")
    """
    config = config or DriverConfig.from_env()
    options = ChromeOptions()

    if config.headless:
        options.add_argument("--headless=new")

    if config.profile_path:
        options.add_argument(f"--user-data-dir={config.profile_path}")

    # Common stability options
    options.add_argument(f"--window-size={config.window_size}")
    options.add_argument("--disable-extensions")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")

    driver = webdriver.Chrome(options=options)
    driver.set_page_load_timeout(config.page_load_timeout)

    logger.info(f"[DriverFactory] Started Chrome (headless={config.headless})")
    return driver


@contextmanager
def driver_session(config: Optional[DriverConfig] = None, register_default: bool = False) -> Iterator[WebDriverType]:
    """
    Create a driver for the duration of a ``with`` block.

    Args:
        config: Session configuration
        register_default: Make the driver the fallback for ``find()`` until the
            block exits, then restore whatever was registered before

    Example:
        >>> with driver_session(register_default=True) as driver:
        ...     driver.get("https://example.com")
        ...     find_element_with_assert(PageNode(), "h1")
    """
    previous = get_default_driver()
    driver = create_driver(config)
    if register_default:
        set_default_driver(driver)

    try:
        yield driver
    finally:
        if register_default:
            if previous is None:
                clear_default_driver()
            else:
                set_default_driver(previous)
        driver.quit()
