"""
Tunable timings, retry budgets and page selectors for the deletion agent.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from config import settings


@dataclass
class AgentConfig:
    """Agent configuration; every field defaults to the value in config.settings."""

    wait_between_steps_ms: int = settings.WAIT_BETWEEN_STEPS_MS
    wait_after_delete_ms: int = settings.WAIT_AFTER_DELETE_MS
    scan_interval_ms: int = settings.SCAN_INTERVAL_MS
    menu_attempts: int = settings.MENU_ATTEMPTS
    confirm_attempts: int = settings.CONFIRM_ATTEMPTS
    caret_attempts: int = settings.CARET_ATTEMPTS
    caret_delay_ms: int = settings.CARET_DELAY_MS
    click_timeout_ms: int = settings.CLICK_TIMEOUT_MS

    flagged_selector: str = settings.FLAGGED_SELECTOR
    flag_attribute: str = settings.FLAG_ATTRIBUTE
    article_selector: str = settings.ARTICLE_SELECTOR
    author_link_selector: str = settings.AUTHOR_LINK_SELECTOR
    repost_selector: str = settings.REPOST_SELECTOR
    caret_selectors: List[str] = field(default_factory=lambda: list(settings.CARET_SELECTORS))
    menuitem_selector: str = settings.MENUITEM_SELECTOR
    confirm_selector: str = settings.CONFIRM_SELECTOR
    delete_label: str = settings.DELETE_LABEL
    problem_markers: List[str] = field(default_factory=lambda: list(settings.PROBLEM_MARKERS))

    def __post_init__(self):
        for name in ("menu_attempts", "confirm_attempts", "caret_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        for name in (
            "wait_between_steps_ms",
            "wait_after_delete_ms",
            "caret_delay_ms",
            "click_timeout_ms",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")
        if self.scan_interval_ms <= 0:
            raise ValueError(f"scan_interval_ms must be positive, got {self.scan_interval_ms}")
        if not self.caret_selectors:
            raise ValueError("caret_selectors cannot be empty")

    @classmethod
    def from_overrides(cls, overrides: Optional[Dict[str, Any]] = None) -> "AgentConfig":
        """
        Build a config from defaults merged with the given overrides.

        Args:
            overrides: Mapping of field name to value

        Returns:
            AgentConfig instance

        Raises:
            ValueError: If an override names an unknown field
        """
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown agent config keys: {unknown}")
        return cls(**overrides)
