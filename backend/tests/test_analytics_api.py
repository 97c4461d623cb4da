import httpx, uuid, pytest
from httpx import AsyncClient
from captionboard.main import app
from conftest import auth_headers, seed_caption, seed_flavor


@pytest.mark.asyncio
async def test_caption_analytics_endpoint(db):
    await seed_flavor(db, 1, "dry", "Deadpan")
    await seed_flavor(db, 2, "pun")
    caps = [
        await seed_caption(db, content="a", like_count=0, humor_flavor_id=1),
        await seed_caption(db, content="b", like_count=0, humor_flavor_id=2),
        await seed_caption(db, content="c", like_count=5, humor_flavor_id=1, minutes=1),
        await seed_caption(db, content="d", like_count=10, humor_flavor_id=2, minutes=2),
    ]
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        for voter, v in zip([uuid.uuid4() for _ in range(4)], (1, 1, -1, 0)):
            await ac.post("/vote", json={"caption_id": str(caps[3].id), "vote_value": v}, headers=auth_headers(voter))

        r = await ac.get("/caption-analytics")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert "timestamp" in body

    data = body["data"]
    assert data["basicStats"] == {"totalCaptions": 4, "totalLikes": 15, "totalVotes": 4}
    assert data["voteStats"] == {"upvotes": 2, "downvotes": 1, "neutrals": 1}
    assert data["engagementMetrics"] == {
        "captionsWithLikes": 2,
        "avgLikesPerCaption": 7.5,
        "maxLikes": 10,
        "likeRate": 50.0,
    }
    assert [t["content"] for t in data["topCaptions"]][:2] == ["d", "c"]
    assert data["topCaptions"][0]["humorFlavorSlug"] == "pun"
    assert [f["slug"] for f in data["humorFlavorStats"]] == ["pun", "dry"]
    assert any("66.7% upvote ratio" in s for s in data["insights"])


@pytest.mark.asyncio
async def test_caption_analytics_on_empty_database(session_factory):
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        data = (await ac.get("/caption-analytics")).json()["data"]
    assert data["basicStats"]["totalCaptions"] == 0
    assert data["engagementMetrics"]["likeRate"] == 0
    assert data["topCaptions"] == []
    assert not any("upvote ratio" in s for s in data["insights"])
