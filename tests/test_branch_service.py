import pytest

from backend.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from backend.schemas.branch import BranchCreate, BranchUpdate
from backend.schemas.common import parse_payload
from backend.services.branch_service import BranchService


@pytest.fixture
def service(conn):
    return BranchService(conn)


@pytest.fixture
def main_branch(service):
    return next(b for b in service.list_all() if b.name == "Main Branch")


def _create(service, **payload):
    return service.create_branch(parse_payload(BranchCreate, payload))


def _update(service, branch_id, **payload):
    return service.update_branch(branch_id, parse_payload(BranchUpdate, payload))


def test_seeded_branches(service):
    assert [b.name for b in service.list_active()] == ["Main Branch", "Downtown Branch"]


def test_create_with_only_name_leaves_optionals_absent(service):
    branch = _create(service, name="Airport")

    assert branch.is_active is True
    assert (branch.description, branch.address, branch.phone, branch.email) == (None, None, None, None)
    assert branch.created_at == branch.updated_at


def test_create_maps_empty_optionals_to_absent(service):
    branch = _create(service, name="Airport", description="", address="", phone="", email="")
    assert (branch.description, branch.address, branch.phone, branch.email) == (None, None, None, None)


def test_create_full_branch(service):
    branch = _create(
        service,
        name="Harbour Branch",
        description="By the sea",
        address="1 Pier Road, Busan",
        phone="+82-51-000-0000",
        email="harbour@restaurant.com",
    )

    assert service.get_branch(branch.id) == branch
    assert branch.email == "harbour@restaurant.com"


@pytest.mark.parametrize("name", ["main branch", "MAIN BRANCH", "Main Branch"])
def test_create_name_conflicts_case_insensitively(service, name):
    before = service.list_all()

    with pytest.raises(ConflictError):
        _create(service, name=name)
    assert service.list_all() == before


def test_create_conflicts_with_inactive_branch(service, main_branch):
    service.toggle_status(main_branch.id)

    with pytest.raises(ConflictError):
        _create(service, name="main branch")


def test_store_constraint_catches_name_race(service, monkeypatch):
    monkeypatch.setattr(service._repo, "get_by_name", lambda name, exclude_id=None: None)

    with pytest.raises(ConflictError):
        _create(service, name="DOWNTOWN BRANCH")


@pytest.mark.parametrize(
    "payload, fields",
    [
        ({"name": "X", "email": "not-an-email"}, ["email"]),
        ({"name": ""}, ["name"]),
        ({"name": "n" * 101}, ["name"]),
        ({"name": "X", "phone": "1" * 21}, ["phone"]),
        ({"name": "X", "address": "a" * 201}, ["address"]),
        ({"name": "X", "description": "d" * 501}, ["description"]),
        (
            {"name": "", "email": "nope", "phone": "1" * 21},
            ["email", "name", "phone"],
        ),
    ],
)
def test_create_validation(payload, fields):
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_payload(BranchCreate, payload)
    assert sorted(exc_info.value.fields) == fields


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"email": "not-an-email"}, "email"),
        ({"name": ""}, "name"),
        ({"name": None}, "name"),
        ({"phone": "1" * 21}, "phone"),
    ],
)
def test_update_validation(payload, field):
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_payload(BranchUpdate, payload)
    assert exc_info.value.fields == [field]


def test_update_merges_only_supplied_fields(service, main_branch):
    updated = _update(service, main_branch.id, phone="+82-2-9999-0000")

    assert updated.phone == "+82-2-9999-0000"
    assert updated.name == main_branch.name
    assert updated.address == main_branch.address
    assert updated.email == main_branch.email
    assert updated.updated_at > main_branch.updated_at


def test_update_clears_present_optional_fields(service, main_branch):
    updated = _update(service, main_branch.id, email="", address=None)

    assert updated.email is None
    assert updated.address is None
    assert updated.description == main_branch.description
    assert updated.phone == main_branch.phone


def test_empty_update_only_touches_updated_at(service, main_branch):
    updated = _update(service, main_branch.id)

    assert updated.updated_at > main_branch.updated_at
    assert updated.created_at == main_branch.created_at
    assert updated.name == main_branch.name
    assert updated.description == main_branch.description


def test_update_name_conflict_excludes_self(service, main_branch):
    assert _update(service, main_branch.id, name="MAIN BRANCH").name == "MAIN BRANCH"

    with pytest.raises(ConflictError):
        _update(service, main_branch.id, name="downtown branch")


def test_update_unknown_id_not_found(service):
    with pytest.raises(NotFoundError):
        _update(service, "missing", name="Nowhere")


def test_toggle_twice_restores_state(service, main_branch):
    once = service.toggle_status(main_branch.id)
    twice = service.toggle_status(main_branch.id)

    assert once.is_active is False
    assert twice.is_active is True
    assert main_branch.updated_at < once.updated_at < twice.updated_at
    assert [b.name for b in service.list_active()] == ["Main Branch", "Downtown Branch"]


def test_delete_then_get_not_found(service, main_branch):
    service.delete_branch(main_branch.id)

    with pytest.raises(NotFoundError):
        service.get_branch(main_branch.id)
    assert len(service.list_active()) == 1
    # Name is free again after a hard delete.
    assert _create(service, name="main branch").id != main_branch.id
