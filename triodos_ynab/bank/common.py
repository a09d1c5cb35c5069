from selenium import webdriver


WINDOW_SIZE = (1024, 768)


def firefox_driver(headless=True):
    """Create a Firefox webdriver sized like a small desktop screen."""
    options = webdriver.FirefoxOptions()
    if headless:
        options.add_argument('-headless')
    driver = webdriver.Firefox(options=options)
    driver.set_window_size(*WINDOW_SIZE)
    return driver
