"""
Configuration constants for flagged reply cleanup project.
"""
import os
from pathlib import Path

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent

# Agent timings (milliseconds)
WAIT_BETWEEN_STEPS_MS = 400
WAIT_AFTER_DELETE_MS = 500
SCAN_INTERVAL_MS = int(os.getenv("SCAN_INTERVAL_MS", "4000"))
CARET_DELAY_MS = 250

# Retry budgets
MENU_ATTEMPTS = 4
CONFIRM_ATTEMPTS = 4
CARET_ATTEMPTS = 5

# Interface
X_BASE_URL = "https://x.com"
WITH_REPLIES_SUFFIX = "/with_replies"

# Selectors
FLAGGED_SELECTOR = "div[data-testid='cellInnerDiv'][data-ghosted]"
FLAG_ATTRIBUTE = "data-ghosted"
ARTICLE_SELECTOR = "article[data-testid='tweet']"
AUTHOR_LINK_SELECTOR = "a[href^='/']"
REPOST_SELECTOR = "button[data-testid='unretweet']"
CARET_SELECTORS = [
    "button[aria-label='More']",
    "div[aria-label='More']",
    "button[data-testid='caret']",
    "div[data-testid='caret']",
]
MENUITEM_SELECTOR = "[role='menuitem']"
CONFIRM_SELECTOR = "button[data-testid='confirmationSheetConfirm']"
DELETE_LABEL = "delete"
CLICK_TIMEOUT_MS = 5000

# Classifier markers
PROBLEM_MARKERS = [
    "postquality.problem",
    "postquality.problem-adjacent",
    "postquality.potential-problem",
]

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"

# Paths (relative to BASE_DIR)
COOKIES_PATH = BASE_DIR / "data" / "cookies.json"
LOG_DIR = BASE_DIR / "data" / "logs"

# Environment Variables (with defaults)
X_USERNAME = os.getenv("X_USERNAME", "")
X_COOKIES_PATH = os.getenv("X_COOKIES_PATH", str(COOKIES_PATH))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HEADLESS = os.getenv("HEADLESS", "false").lower() == "true"

# Ensure data directories exist
LOG_DIR.mkdir(parents=True, exist_ok=True)
COOKIES_PATH.parent.mkdir(parents=True, exist_ok=True)
