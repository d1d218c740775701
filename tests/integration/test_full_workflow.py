"""
Integration tests for the full flagged-reply cleanup workflow.

The agent runs against a FakeTimeline that reacts to clicks like the real
page, with the real view detector, identity resolver, event bus and
statistics reporter wired together the same way main.py does.
"""
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from src.context.identity import IdentityResolver
from src.context.view import ViewContext
from src.deletion.agent_config import AgentConfig
from src.deletion.deletion_agent import DeletionAgent
from src.deletion.status import REASON_NOT_WITH_REPLIES
from src.utils.events import EventBus
from src.utils.statistics import StatisticsReporter
from tests.unit.fixtures.fake_document import make_article, make_cell


@pytest.fixture
def browser_page():
    page = MagicMock()
    page.url = "https://x.com/alice/with_replies"
    return page


@pytest_asyncio.fixture
async def session(browser_page, fake_document, fake_timeline, recording_sleep):
    """Agent wired to view, identity, bus and statistics."""
    view = ViewContext(browser_page)
    identity = IdentityResolver(view)
    identity.capture()
    bus = EventBus()
    stats = StatisticsReporter(bus)
    agent = DeletionAgent(
        document=fake_document,
        get_username=identity.get_username,
        is_with_replies=view.is_with_replies,
        get_pathname=view.pathname,
        event_bus=bus,
        config=AgentConfig(scan_interval_ms=60_000),
        sleep=recording_sleep,
    )
    yield agent, identity, stats, fake_timeline
    agent.destroy()
    await agent.wait_idle()


@pytest.mark.integration
class TestFullWorkflow:
    """Test the complete cleanup flow end-to-end."""

    @pytest.mark.asyncio
    async def test_deletes_only_own_flagged_posts(self, session):
        """Test own flagged posts go one per cycle while others stay."""
        agent, _identity, stats, timeline = session
        own_first = timeline.add_cell(
            make_cell("postquality.problem", make_article("own-1", hrefs=["/alice/status/1"]))
        )
        others = timeline.add_cell(
            make_cell("postquality.problem", make_article("bob", hrefs=["/bob/status/2"]))
        )
        repost = timeline.add_cell(
            make_cell(
                "postquality.potential-problem",
                make_article("rt", hrefs=["/alice"], repost=True),
            )
        )
        own_second = timeline.add_cell(
            make_cell(
                "postquality.problem-adjacent", make_article("own-2", hrefs=["/alice/status/3"])
            )
        )

        agent.handle_toggle(True)
        await agent.wait_idle()
        assert timeline.deleted == [own_first]

        await agent.run_cycle()
        await agent.run_cycle()

        assert timeline.deleted == [own_first, own_second]
        assert agent.state.deleted_count == 2
        assert others not in timeline.deleted and repost not in timeline.deleted
        assert stats.stats["total_deleted"] == 2
        assert stats.stats["attempts"] == 2
        assert stats.stats["failed_attempts"] == 0

    @pytest.mark.asyncio
    async def test_navigation_away_stops_agent(self, session, browser_page):
        """Test leaving the replies view stops scanning with a reason."""
        agent, identity, stats, _timeline = session

        agent.handle_toggle(True)
        await agent.wait_idle()
        browser_page.url = "https://x.com/home"
        identity.capture()
        agent.on_context_change()

        assert not agent.state.running
        assert not agent.scheduler.armed
        assert agent.build_status().message == REASON_NOT_WITH_REPLIES
        assert identity.get_username() == "alice"

        browser_page.url = "https://x.com/alice/with_replies"
        agent.on_context_change()
        assert agent.can_operate()
        agent.handle_toggle(True)
        assert agent.state.running
        assert stats.stats["runs_started"] == 2

    @pytest.mark.asyncio
    async def test_other_profile_is_not_touched(self, session, browser_page):
        """Test another user's replies timeline never enables the agent."""
        agent, _identity, _stats, timeline = session
        timeline.add_cell(
            make_cell("postquality.problem", make_article("own", hrefs=["/alice/status/1"]))
        )
        browser_page.url = "https://x.com/bob/with_replies"

        agent.handle_toggle(True)
        await agent.wait_idle()

        assert not agent.state.running
        assert timeline.deleted == []

    @pytest.mark.asyncio
    async def test_failed_attempt_is_counted(self, session):
        """Test a post whose caret never shows is reported as a failed attempt."""
        agent, _identity, stats, timeline = session
        timeline.add_cell(
            make_cell(
                "postquality.problem",
                make_article("own", hrefs=["/alice/status/1"], caret_visible=False),
            )
        )

        agent.handle_toggle(True)
        await agent.wait_idle()

        assert timeline.deleted == []
        assert agent.build_status().message == "Caret button not found"
        assert stats.stats["attempts"] == 1
        assert stats.stats["failed_attempts"] == 1
