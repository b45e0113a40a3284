"""
User search - multi-keyword name search ranked by how many keywords hit.
Design: One sub-select per keyword, combined with UNION ALL so a user matched
by several keywords appears several times; grouping then counts those votes.
The whole search is a single statement, built iteratively.
"""

from collections.abc import Sequence

from sqlalchemy import func, select, union_all
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.config import get_settings
from accounts.db.models.user import User
from accounts.errors import ValidationError
from accounts.schemas.user import SearchResult


def _keyword_select(keyword: str):
    return select(User.name, User.icon_key, User.explanation, User.id).where(
        User.name.contains(keyword, autoescape=True)
    )


def build_search_query(keywords: Sequence[str], page: int, page_size: int):
    """Ranked, paginated statement for the keywords. Caller guarantees at least one keyword."""
    branches = [_keyword_select(keyword) for keyword in keywords]
    combined = branches[0] if len(branches) == 1 else union_all(*branches)
    result = combined.subquery("result")

    hits = func.count().label("hits")
    projection = (result.c.name, result.c.icon_key, result.c.explanation, result.c.id)
    return (
        select(*projection, hits)
        .group_by(*projection)
        # Ties on hits are ordered by name; anything finer is up to the store.
        .order_by(hits.desc(), result.c.name)
        .offset(page_size * (page - 1))
        .limit(page_size)
    )


class SearchEngine:
    """Stateless search over the users table of the given session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def search(
        self,
        keywords: Sequence[str],
        page: int = 1,
        page_size: int | None = None,
    ) -> list[SearchResult]:
        page_size = page_size if page_size is not None else get_settings().search_page_size
        if page < 1:
            raise ValidationError.single("page", "must be greater than 0")
        if page_size < 1:
            raise ValidationError.single("page_size", "must be greater than 0")
        if not keywords:
            return []

        rows = await self.session.execute(build_search_query(list(keywords), page, page_size))
        return [
            SearchResult(name=row.name, icon_key=row.icon_key, explanation=row.explanation, id=row.id)
            for row in rows
        ]
