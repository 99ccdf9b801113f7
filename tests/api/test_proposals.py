"""Tests for proposal endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from radical_api.core.settings import settings
from radical_api.models import PetitionDetail, Proposal, User, Vote
from radical_api.services.share_image import share_image_key


@pytest.fixture()
def voters(make_user) -> list[User]:
    """Create four voters."""
    return [make_user(f"voter_{i}", f"Voter {i}") for i in range(4)]


@pytest.fixture()
def ranked_proposals(db_session: Session, user: User, voters, make_proposal) -> None:
    """Create proposals whose sort orders all differ.

    old: 3 up, 0 down (net +3, total 3)
    mid: 2 up, 2 down (net 0, total 4), 2 petition signatures
    new: 0 up, 1 down (net -1, total 1)
    """
    make_proposal("old", author_id=user.id, timestamp=1_000)
    make_proposal("mid", author_id=user.id, timestamp=2_000)
    make_proposal("new", author_id=user.id, timestamp=3_000)
    ballots = [
        ("old", voters[0], "upvote", False),
        ("old", voters[1], "upvote", False),
        ("old", voters[2], "upvote", False),
        ("mid", voters[0], "upvote", True),
        ("mid", voters[1], "upvote", True),
        ("mid", voters[2], "downvote", False),
        ("mid", voters[3], "downvote", False),
        ("new", voters[0], "downvote", False),
    ]
    for proposal_id, voter, vote_type, is_petition in ballots:
        db_session.add(
            Vote(
                proposal_id=proposal_id,
                user_id=voter.id,
                vote_type=vote_type,
                is_petition=is_petition,
            )
        )
    db_session.commit()


def _ids(response) -> list[str]:
    return [item["id"] for item in response.json()["data"]]


def test_create_proposal(client: TestClient, user: User, memes_store) -> None:
    """Test creating a proposal returns its id and share image URL."""
    r = client.post("/api/proposals", json={"text": "Four day week", "authorId": user.id})
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["id"].startswith("proposal_")
    assert data["authorId"] == user.id
    assert data["trending"] is False
    assert data["shareImageUrl"] == f"{settings.public_base}/api/petition-svg?id={data['id']}"

    cached = memes_store.get(share_image_key(data["id"]))
    assert cached is not None
    assert b"Four day week" in cached.data


def test_create_proposal_unknown_author(client: TestClient) -> None:
    """Test proposals need an existing author."""
    r = client.post("/api/proposals", json={"text": "Four day week", "authorId": "ghost"})
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["error"] == "Author does not exist"


def test_create_proposal_empty_text(client: TestClient, user: User) -> None:
    """Test empty proposal text is rejected."""
    r = client.post("/api/proposals", json={"text": "", "authorId": user.id})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json()["error"] == "Missing required fields"


def test_get_proposal_with_counts(
    client: TestClient, ranked_proposals, voters
) -> None:
    """Test a single proposal carries aggregates and the caller's vote."""
    r = client.get("/api/proposals/mid", params={"userId": voters[0].id})
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["author_name"] == "Test User"
    assert (data["upvotes"], data["downvotes"]) == (2, 2)
    assert data["petition_signatures"] == 2
    assert data["verified_petitioners"] == 0
    assert data["userVote"] == "upvote"
    assert data["userPetitionSigned"] is True
    assert data["userPetitionVerified"] is False


def test_get_proposal_without_user_has_null_annotations(
    client: TestClient, proposal: Proposal
) -> None:
    """Test per-user fields are null when no userId is given."""
    data = client.get(f"/api/proposals/{proposal.id}").json()
    assert data["userVote"] is None
    assert data["userPetitionSigned"] is None


def test_get_proposal_not_found(client: TestClient) -> None:
    """Test fetching an unknown proposal."""
    r = client.get("/api/proposals/nope")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"error": "Proposal not found"}


@pytest.mark.parametrize(
    ("sort_by", "expected"),
    [
        ("newest", ["new", "mid", "old"]),
        ("oldest", ["old", "mid", "new"]),
        ("popular", ["old", "mid", "new"]),
        ("controversial", ["mid", "old", "new"]),
        ("petitions", ["mid", "new", "old"]),
        ("bogus", ["new", "mid", "old"]),
    ],
)
def test_list_sort_orders(
    client: TestClient, ranked_proposals, sort_by: str, expected: list[str]
) -> None:
    """Test each sort order ranks the proposals as documented."""
    r = client.get("/api/proposals", params={"sortBy": sort_by})
    assert r.status_code == status.HTTP_200_OK
    assert _ids(r) == expected


def test_list_pagination(client: TestClient, ranked_proposals) -> None:
    """Test pages do not overlap and report whether more remain."""
    first = client.get("/api/proposals", params={"limit": 2, "page": 1}).json()
    second = client.get("/api/proposals", params={"limit": 2, "page": 2}).json()

    assert [p["id"] for p in first["data"]] == ["new", "mid"]
    assert first["pagination"] == {"page": 1, "limit": 2, "total": 3, "hasMore": True}
    assert [p["id"] for p in second["data"]] == ["old"]
    assert second["pagination"]["hasMore"] is False


def test_list_clamps_limit(client: TestClient, ranked_proposals) -> None:
    """Test oversized limits are capped and non-positive pages start at one."""
    data = client.get("/api/proposals", params={"limit": 10_000, "page": 0}).json()
    assert data["pagination"]["limit"] == settings.max_page_size
    assert data["pagination"]["page"] == 1


def test_list_annotates_user_votes(client: TestClient, ranked_proposals, voters) -> None:
    """Test listing with userId marks that user's votes."""
    data = client.get(
        "/api/proposals", params={"userId": voters[0].id, "sortBy": "oldest"}
    ).json()["data"]
    assert [p["userVote"] for p in data] == ["upvote", "upvote", "downvote"]
    assert [p["userPetitionSigned"] for p in data] == [False, True, False]


def test_list_counts_verified_petitioners(
    client: TestClient, db_session: Session, ranked_proposals, voters
) -> None:
    """Test verified petition details are counted once per user."""
    db_session.add(
        PetitionDetail(
            proposal_id="mid",
            user_id=voters[0].id,
            full_name="Voter 0",
            address="1 High Street",
            postcode="N1 9GU",
            dob="1990-01-01",
            email="voter0@example.com",
            verified=True,
        )
    )
    db_session.commit()

    data = client.get("/api/proposals/mid").json()
    assert data["verified_petitioners"] == 1


def test_list_response_is_cacheable(client: TestClient, proposal: Proposal) -> None:
    """Test the listing carries its cache rule."""
    r = client.get("/api/proposals")
    assert r.headers["cache-control"] == "public, max-age=300, stale-while-revalidate=60"


def test_update_trending(client: TestClient, db_session: Session, proposal: Proposal) -> None:
    """Test setting and clearing the trending flag."""
    r = client.put(f"/api/proposals/{proposal.id}", json={"trending": True})
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"id": proposal.id, "trending": True}
    db_session.expire_all()
    assert db_session.get(Proposal, proposal.id).trending is True

    r = client.put(f"/api/proposals/{proposal.id}", json={"trending": False})
    assert r.json()["trending"] is False


def test_update_trending_unknown_proposal(client: TestClient) -> None:
    """Test updating a proposal that does not exist."""
    r = client.put("/api/proposals/nope", json={"trending": True})
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["error"] == "Proposal does not exist"


def test_list_rejects_oversized_page(client: TestClient, proposal: Proposal) -> None:
    """Test page numbers past the supported range are a 400, not a server error."""
    r = client.get("/api/proposals", params={"page": 10**19})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    data = r.json()
    assert data["error"] == "Invalid request"
    assert data["details"][0]["field"] == "page"
