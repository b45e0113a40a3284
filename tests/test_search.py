"""
Search tests - union-all ranking, pagination, edge cases.
"""

import uuid

import pytest

from accounts.core.security import hash_password
from accounts.db.models import User
from accounts.db.repositories.user_repository import UserRepository
from accounts.errors import ValidationError
from accounts.schemas.user import SearchResult
from accounts.services.search_service import SearchEngine


async def _seed(session, *names: str, explanation: str | None = None) -> dict[str, User]:
    """Insert rows directly so names outside the account-creation rules can be tested."""
    repo = UserRepository(session)
    users = {}
    for name in names:
        users[name] = await repo.insert(
            User(
                id=str(uuid.uuid4()),
                name=name,
                email=f"{uuid.uuid4().hex}@example.com",
                password_digest=hash_password("password"),
                explanation=explanation,
            )
        )
    await session.commit()
    return users


@pytest.mark.asyncio
async def test_single_exact_match(session):
    users = await _seed(session, "test_user", "someone", explanation="hello")
    results = await SearchEngine(session).search(["test_user"], 1, 50)
    assert results == [
        SearchResult(name="test_user", icon_key=None, explanation="hello", id=users["test_user"].id)
    ]


@pytest.mark.asyncio
async def test_results_expose_only_public_fields(session):
    await _seed(session, "visible")
    (result,) = await SearchEngine(session).search(["visible"])
    assert set(result.model_dump()) == {"name", "icon_key", "explanation", "id"}


@pytest.mark.asyncio
async def test_substring_match(session):
    await _seed(session, "anna", "joanne", "bob")
    results = await SearchEngine(session).search(["ann"])
    assert [r.name for r in results] == ["anna", "joanne"]


@pytest.mark.asyncio
async def test_more_keyword_hits_rank_first(session):
    await _seed(session, "albert", "alice", "malice")
    results = await SearchEngine(session).search(["al", "lic"])
    # alice and malice hit both keywords, albert only one
    assert [r.name for r in results] == ["alice", "malice", "albert"]


@pytest.mark.asyncio
async def test_duplicate_keyword_counts_as_extra_vote(session):
    await _seed(session, "alan", "bob")
    results = await SearchEngine(session).search(["bo", "al", "al"])
    assert [r.name for r in results] == ["alan", "bob"]


@pytest.mark.asyncio
async def test_user_matching_many_keywords_appears_once(session):
    await _seed(session, "alan")
    results = await SearchEngine(session).search(["a", "al", "alan", "n"])
    assert len(results) == 1


@pytest.mark.asyncio
async def test_search_is_idempotent(session):
    await _seed(session, "ann", "anne", "hannah", "joann")
    engine = SearchEngine(session)
    assert await engine.search(["ann"], 1, 50) == await engine.search(["ann"], 1, 50)


@pytest.mark.asyncio
async def test_pagination_returns_the_requested_slice(session):
    await _seed(session, *[f"member-{i:02d}" for i in range(25)])
    engine = SearchEngine(session)

    everything = await engine.search(["member"], 1, 100)
    second = await engine.search(["member"], page=2, page_size=10)
    third = await engine.search(["member"], page=3, page_size=10)
    fourth = await engine.search(["member"], page=4, page_size=10)

    assert len(everything) == 25
    assert second == everything[10:20]
    assert [r.name for r in third] == [f"member-{i}" for i in range(20, 25)]
    assert fourth == []


@pytest.mark.asyncio
async def test_default_page_size(session):
    await _seed(session, *[f"bulk-{i:02d}" for i in range(55)])
    assert len(await SearchEngine(session).search(["bulk"])) == 50


@pytest.mark.asyncio
async def test_like_wildcards_in_keywords_are_literal(session):
    await _seed(session, "a_b", "axb", "100%", "1000")
    engine = SearchEngine(session)
    assert [r.name for r in await engine.search(["a_b"])] == ["a_b"]
    assert [r.name for r in await engine.search(["0%"])] == ["100%"]


@pytest.mark.asyncio
async def test_empty_keywords_return_nothing(session):
    await _seed(session, "anyone")
    assert await SearchEngine(session).search([], 1, 50) == []


@pytest.mark.asyncio
async def test_no_matches_is_not_an_error(session):
    await _seed(session, "anyone")
    assert await SearchEngine(session).search(["zzz", "yyy"], 1, 50) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("page,page_size", [(0, 50), (-1, 50), (1, 0)])
async def test_invalid_paging_is_rejected(session, page, page_size):
    with pytest.raises(ValidationError):
        await SearchEngine(session).search(["a"], page, page_size)
