from utils.logger import logger
from utils.screenshot import take_screenshot
from utils.allure_helper import allure_step, attach_screenshot, attach_text

__all__ = [
    "logger",
    "take_screenshot",
    "allure_step",
    "attach_screenshot",
    "attach_text",
]
