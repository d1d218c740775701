"""
Target selector for flagged replies authored by the active user.
"""
from typing import Any, Callable, List, Optional

from src.context.identity import normalize_username
from src.deletion.agent_config import AgentConfig
from src.utils.logging import get_logger

logger = get_logger(__name__)


class TargetSelector:
    """Finds the first flagged post on the page that the active user wrote."""

    def __init__(
        self,
        document,
        get_username: Callable[[], Optional[str]],
        config: Optional[AgentConfig] = None,
    ):
        """
        Initialize TargetSelector.

        Args:
            document: Document query interface (see PageDocument)
            get_username: Returns the raw handle of the active user
            config: Optional AgentConfig (defaults from settings)
        """
        self.document = document
        self.get_username = get_username
        self.config = config or AgentConfig()

    async def find_target(self) -> Optional[Any]:
        """
        Find the first deletable post inside a flagged cell.

        Cells and posts are visited in document order, so repeated calls on an
        unchanged page return the same element.

        Returns:
            Post element or None if nothing qualifies
        """
        for cell in await self.get_flagged_cells():
            article = await self.get_target_article(cell)
            if article is not None:
                return article
        return None

    async def get_flagged_cells(self) -> List[Any]:
        """
        Get timeline cells carrying at least one problem marker.

        Returns:
            List of cell elements in document order
        """
        nodes = await self.document.query_all(self.config.flagged_selector)
        flagged = []
        for node in nodes:
            ghost = (await self.document.get_attribute(node, self.config.flag_attribute)).lower()
            if any(marker in ghost for marker in self.config.problem_markers):
                flagged.append(node)
        if flagged:
            logger.debug(f"Found {len(flagged)} flagged cells out of {len(nodes)} candidates")
        return flagged

    async def get_target_article(self, cell) -> Optional[Any]:
        articles = await self.document.query_all(self.config.article_selector, root=cell)
        for article in articles:
            if await self.is_post_by_user(article):
                return article
        return None

    async def is_post_by_user(self, article) -> bool:
        """
        Check if a post was written by the active user.

        A post counts when one of its profile links points at the user and it
        is not a repost. Reposts render the original author's link as well.

        Args:
            article: Post element

        Returns:
            True if the post is attributable to the active user
        """
        username = normalize_username(self.get_username())
        if article is None or not username:
            return False

        if not await self._links_to_user(article, username):
            return False

        repost_marker = await self.document.query(self.config.repost_selector, root=article)
        if repost_marker is not None:
            logger.debug(f"Skipping repost that links to @{username}")
            return False

        return True

    async def _links_to_user(self, article, username: str) -> bool:
        links = await self.document.query_all(self.config.author_link_selector, root=article)
        for link in links:
            href = (await self.document.get_attribute(link, "href")).lower()
            if not href.startswith("/"):
                continue
            if href == f"/{username}" or href.startswith(f"/{username}/"):
                return True
        return False
