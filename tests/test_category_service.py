import pytest

from backend.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from backend.db.seeder import DEFAULT_CATEGORIES
from backend.schemas.category import CategoryCreate, CategoryUpdate
from backend.schemas.common import parse_payload
from backend.services.category_service import CategoryService


@pytest.fixture
def service(conn):
    return CategoryService(conn)


def _create(service, **payload):
    return service.create_category(parse_payload(CategoryCreate, payload))


def _update(service, category_id, **payload):
    return service.update_category(category_id, parse_payload(CategoryUpdate, payload))


def test_seeded_categories_listed_in_creation_order(service):
    values = [c.value for c in service.list_active()]
    assert values == [c["value"] for c in DEFAULT_CATEGORIES]


def test_create_sets_defaults(service):
    category = _create(service, name="Spices", value="spices", description="Dry spices")

    assert category.label == "Spices"
    assert category.is_active is True
    assert category.description == "Dry spices"
    assert category.created_at == category.updated_at
    assert service.get_category(category.id) == category


def test_create_without_description_stores_absent(service):
    assert _create(service, name="Spices", value="spices").description is None
    assert _create(service, name="Oils", value="oils", description="").description is None


def test_created_ids_are_unique(service):
    existing = {c.id for c in service.list_all()}
    for i in range(20):
        category = _create(service, name=f"Cat {i}", value=f"cat-{i}")
        assert category.id not in existing
        existing.add(category.id)


def test_create_duplicate_value_conflicts(service):
    before = service.list_all()

    with pytest.raises(ConflictError) as exc_info:
        _create(service, name="X", value="frozen-products")

    assert exc_info.value.status_code == 400
    assert service.list_all() == before


def test_create_duplicate_of_inactive_value_conflicts(service):
    frozen = service.list_active()[0]
    service.toggle_status(frozen.id)

    with pytest.raises(ConflictError):
        _create(service, name="Frozen again", value=frozen.value)


def test_uppercase_value_rejected_before_uniqueness_check(service):
    with pytest.raises(ValidationFailedError):
        _create(service, name="X", value="Frozen-Products")
    assert _create(service, name="X", value="frozen-products-2").value == "frozen-products-2"


@pytest.mark.parametrize("value", ["Has Spaces", "UPPER", "under_score", ""])
def test_create_rejects_invalid_value(service, value):
    with pytest.raises(ValidationFailedError) as exc_info:
        _create(service, name="X", value=value)
    assert exc_info.value.fields == ["value"]


def test_create_reports_every_violation(service):
    with pytest.raises(ValidationFailedError) as exc_info:
        _create(service, name="", value="Has Spaces", description="d" * 501)

    assert sorted(exc_info.value.fields) == ["description", "name", "value"]


def test_create_rejects_long_name(service):
    with pytest.raises(ValidationFailedError) as exc_info:
        _create(service, name="n" * 101, value="long")
    assert exc_info.value.fields == ["name"]


def test_store_constraint_catches_value_race(service, monkeypatch):
    # Simulate a concurrent writer that inserted the value after our check.
    monkeypatch.setattr(service._repo, "get_by_value", lambda value, exclude_id=None: None)

    with pytest.raises(ConflictError):
        _create(service, name="X", value="main-products")


def test_update_empty_description_clears_it_only(service):
    category = service.list_active()[0]

    updated = _update(service, category.id, description="")

    assert updated.description is None
    assert updated.name == category.name
    assert updated.value == category.value
    assert updated.label == category.label
    assert updated.updated_at > category.updated_at


def test_empty_update_only_touches_updated_at(service):
    category = service.list_active()[0]

    updated = _update(service, category.id)

    assert updated.updated_at > category.updated_at
    assert updated.created_at == category.created_at
    assert (updated.name, updated.value, updated.label, updated.description, updated.is_active) == (
        category.name,
        category.value,
        category.label,
        category.description,
        category.is_active,
    )


def test_update_name_mirrors_label(service):
    category = service.list_active()[1]

    updated = _update(service, category.id, name="Mains")

    assert updated.name == "Mains"
    assert updated.label == "Mains"
    assert updated.value == category.value
    assert updated.description == category.description


def test_update_value_to_other_records_value_conflicts(service):
    first, second = service.list_active()[:2]

    with pytest.raises(ConflictError):
        _update(service, second.id, value=first.value)
    assert service.get_category(second.id).value == second.value


def test_update_value_to_own_value_is_allowed(service):
    category = service.list_active()[0]
    assert _update(service, category.id, value=category.value).value == category.value


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"value": "UPPER"}, "value"),
        ({"value": "Has Spaces"}, "value"),
        ({"name": ""}, "name"),
        ({"name": None}, "name"),
        ({"value": None}, "value"),
        ({"description": "d" * 501}, "description"),
    ],
)
def test_update_validates_supplied_fields(payload, field):
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_payload(CategoryUpdate, payload)
    assert exc_info.value.fields == [field]


def test_update_ignores_immutable_fields(service):
    category = service.list_active()[0]

    updated = _update(service, category.id, id="other", createdAt="2000-01-01", isActive=False)

    assert updated.id == category.id
    assert updated.created_at == category.created_at
    assert updated.is_active is True


def test_update_unknown_id_not_found(service):
    with pytest.raises(NotFoundError):
        _update(service, "missing", name="X")


def test_toggle_twice_restores_state_with_increasing_timestamps(service):
    category = service.list_active()[0]

    once = service.toggle_status(category.id)
    twice = service.toggle_status(category.id)

    assert once.is_active is False
    assert twice.is_active is True
    assert category.updated_at < once.updated_at < twice.updated_at


def test_inactive_records_hidden_from_active_list_but_addressable(service):
    category = service.list_active()[2]
    service.toggle_status(category.id)

    assert category.id not in {c.id for c in service.list_active()}
    assert category.id in {c.id for c in service.list_all()}
    assert service.get_category(category.id).is_active is False


def test_active_list_matches_active_count(service):
    categories = service.list_all()
    service.toggle_status(categories[0].id)
    service.toggle_status(categories[3].id)
    service.delete_category(categories[1].id)

    active = service.list_active()
    assert len(active) == sum(1 for c in service.list_all() if c.is_active)
    assert len(active) == 2


def test_delete_then_get_not_found(service):
    category = service.list_active()[0]

    service.delete_category(category.id)

    with pytest.raises(NotFoundError):
        service.get_category(category.id)
    with pytest.raises(NotFoundError):
        service.delete_category(category.id)
    with pytest.raises(NotFoundError):
        service.toggle_status(category.id)


def test_deleted_value_can_be_reused(service):
    category = service.list_active()[0]
    service.delete_category(category.id)

    recreated = _create(service, name="Frozen", value=category.value)

    assert recreated.id != category.id
