import pytest
from bson import ObjectId

import services.follower_service as follower_service
from domain.models.user import AccountType, User
from middleware.errors import DuplicateRecordError, RecordNotFoundError, ValidationError
from repositories.follower_repository import FollowerRepository
from repositories.user_repository import UserRepository
from utils.pagination import PageRequest


@pytest.fixture
def stores(monkeypatch, make_collection):
    users, followers = make_collection(), make_collection()
    monkeypatch.setattr(follower_service, "_users", UserRepository(users))
    monkeypatch.setattr(follower_service, "_followers", FollowerRepository(followers))
    return users, followers


@pytest.fixture
def writer_id(stores):
    return follower_service._users.create(
        User(name="Writer", email="writer@example.com", account_type=AccountType.WRITER)
    )


def test_follow_writer_records_relationship_and_reference(stores, writer_id):
    users, followers = stores
    reader_id = str(ObjectId())

    relationship = follower_service.follow_writer(reader_id, writer_id)

    assert followers.docs[0]["writerId"] == ObjectId(writer_id)
    assert followers.docs[0]["followerId"] == ObjectId(reader_id)
    assert users.docs[0]["followers"] == [ObjectId(relationship.id)]


def test_follow_twice_is_rejected(stores, writer_id):
    reader_id = str(ObjectId())
    follower_service.follow_writer(reader_id, writer_id)

    with pytest.raises(DuplicateRecordError):
        follower_service.follow_writer(reader_id, writer_id)
    assert len(stores[1].docs) == 1


def test_cannot_follow_yourself(stores, writer_id):
    with pytest.raises(ValidationError):
        follower_service.follow_writer(writer_id, writer_id)


def test_follow_unknown_writer(stores):
    with pytest.raises(RecordNotFoundError):
        follower_service.follow_writer(str(ObjectId()), str(ObjectId()))


def test_list_followers_pages_most_recent_first(stores, writer_id):
    readers = [str(ObjectId()) for _ in range(10)]
    for reader in readers:
        follower_service.follow_writer(reader, writer_id)

    page = follower_service.list_followers(writer_id, PageRequest(page=2, limit=8))

    assert page.total == 10
    assert page.num_of_pages == 2
    assert [f.follower_id for f in page.items] == [readers[1], readers[0]]
