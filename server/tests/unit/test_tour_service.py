"""Unit tests for tour service."""

import pytest
from bson import ObjectId

from tour_catalog.core.exceptions import (
    ImageUploadError,
    InvalidItineraryError,
    NotFoundError,
    ValidationError,
)
from tour_catalog.models.tour import TOURS_COLLECTION, TourFlag
from tour_catalog.schemas.tour import TourFields
from tour_catalog.services.tour_service import TourService, normalize_itinerary


@pytest.fixture
def staged_image(tmp_path):
    path = tmp_path / "kerala.jpg"
    path.write_bytes(b"\xff\xd8\xff fake jpeg")
    return path


def test_normalize_itinerary_fills_missing_fields():
    assert normalize_itinerary('[{"title":"Day 1"}]') == [{"title": "Day 1", "description": ""}]


def test_normalize_itinerary_accepts_decoded_lists():
    days = [{"description": "Beach day", "extra": "dropped"}]
    assert normalize_itinerary(days) == [{"title": "", "description": "Beach day"}]


@pytest.mark.parametrize("raw", [None, ""])
def test_normalize_itinerary_empty_input(raw):
    assert normalize_itinerary(raw) == []


def test_normalize_itinerary_rejects_malformed_json():
    with pytest.raises(InvalidItineraryError) as exc_info:
        normalize_itinerary('[{"title": ')

    problem = exc_info.value.problem_details
    assert exc_info.value.status_code == 400
    assert problem["detail"] == "Invalid itinerary format"
    assert problem["details"]


@pytest.mark.parametrize("raw", ['{"title": "Day 1"}', '"Day 1"', "42", 42])
def test_normalize_itinerary_rejects_non_arrays(raw):
    with pytest.raises(InvalidItineraryError):
        normalize_itinerary(raw)


def test_normalize_itinerary_defaults_non_object_days():
    assert normalize_itinerary('["Day 1", 2]') == [
        {"title": "", "description": ""},
        {"title": "", "description": ""},
    ]
    assert normalize_itinerary([{"title": "Day 1"}, ["nested"], True]) == [
        {"title": "Day 1", "description": ""},
        {"title": "", "description": ""},
        {"title": "", "description": ""},
    ]


@pytest.mark.parametrize("raw", ["[null]", '[{"title": "Day 1"}, null]'])
def test_normalize_itinerary_rejects_null_days(raw):
    with pytest.raises(InvalidItineraryError) as exc_info:
        normalize_itinerary(raw)

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_create_tour(test_db, sample_tour_form):
    """Creating a tour derives the url, defaults flags and normalizes the itinerary."""
    service = TourService(test_db)

    tour = await service.create_tour(TourFields(**sample_tour_form))

    stored = await test_db[TOURS_COLLECTION].find_one({"_id": tour["_id"]})
    assert stored["url"] == "best-of-kerala"
    assert stored["indian"] == "Yes"
    assert stored["international"] == "No"
    assert stored["fixed_departure"] == "No"
    assert stored["itinerary"] == [
        {"title": "Day 1", "description": "Arrive in Kochi"},
        {"title": "Day 2", "description": ""},
    ]
    assert stored["image"] is None
    assert stored["createdAt"] is not None


@pytest.mark.asyncio
async def test_create_tour_suffixes_colliding_slugs(test_db):
    service = TourService(test_db)

    first = await service.create_tour(TourFields(package_name="Goa Getaway"))
    second = await service.create_tour(TourFields(package_name="Goa  Getaway!"))
    third = await service.create_tour(TourFields(package_name="goa getaway"))

    assert [first["url"], second["url"], third["url"]] == [
        "goa-getaway",
        "goa-getaway-2",
        "goa-getaway-3",
    ]


@pytest.mark.asyncio
async def test_create_tour_symbol_only_name_gets_fallback_slug(test_db):
    tour = await TourService(test_db).create_tour(TourFields(package_name="!!!"))
    assert tour["url"] == "tour"


@pytest.mark.asyncio
async def test_create_tour_requires_package_name(test_db):
    with pytest.raises(ValidationError):
        await TourService(test_db).create_tour(TourFields(theme="Beach"))

    assert await test_db[TOURS_COLLECTION].count_documents({}) == 0


@pytest.mark.asyncio
async def test_create_tour_with_image(test_db, fake_uploader, staged_image, sample_tour_form):
    service = TourService(test_db, fake_uploader)

    tour = await service.create_tour(TourFields(**sample_tour_form), staged_image)

    assert tour["image"].startswith("https://images.example.com/")
    assert fake_uploader.uploads == [b"\xff\xd8\xff fake jpeg"]
    assert not staged_image.exists()


@pytest.mark.asyncio
async def test_create_tour_upload_failure_writes_nothing(
    test_db, fake_uploader, staged_image, sample_tour_form
):
    """A failed upload aborts creation before any insert."""
    fake_uploader.error = ImageUploadError("Invalid image file")
    service = TourService(test_db, fake_uploader)

    with pytest.raises(ImageUploadError):
        await service.create_tour(TourFields(**sample_tour_form), staged_image)

    assert await test_db[TOURS_COLLECTION].count_documents({}) == 0


@pytest.mark.asyncio
async def test_create_tour_invalid_itinerary_skips_upload(
    test_db, fake_uploader, staged_image
):
    service = TourService(test_db, fake_uploader)

    with pytest.raises(InvalidItineraryError):
        await service.create_tour(
            TourFields(package_name="Ladakh", itinerary="not json"), staged_image
        )

    assert fake_uploader.uploads == []
    assert await test_db[TOURS_COLLECTION].count_documents({}) == 0


@pytest.mark.asyncio
async def test_get_tour_by_id(test_db, insert_tour):
    tour = await insert_tour(package_name="Andaman Escape")

    found = await TourService(test_db).get_tour_by_id(tour["_id"])

    assert found["package_name"] == "Andaman Escape"


@pytest.mark.asyncio
async def test_get_tour_by_id_not_found(test_db):
    with pytest.raises(NotFoundError) as exc_info:
        await TourService(test_db).get_tour_by_id(ObjectId())

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_tour_by_url(test_db, insert_tour):
    tour = await insert_tour(url="andaman-escape")

    found = await TourService(test_db).get_tour_by_url("andaman-escape")
    assert found["_id"] == tour["_id"]

    with pytest.raises(NotFoundError):
        await TourService(test_db).get_tour_by_url("missing")


@pytest.mark.asyncio
async def test_update_tour_replaces_all_fields(test_db, insert_tour):
    """Fields omitted from the update are cleared, the image is kept."""
    tour = await insert_tour(
        package_name="Old Name",
        url="old-name",
        tour_price="9999",
        indian="Yes",
        image="https://images.example.com/old.jpg",
    )
    service = TourService(test_db)

    image_url = await service.update_tour(
        tour["_id"],
        TourFields(
            package_name="New Name",
            url="new-name",
            itinerary=[{"title": "Day 1"}],
        ),
    )

    stored = await test_db[TOURS_COLLECTION].find_one({"_id": tour["_id"]})
    assert image_url == "https://images.example.com/old.jpg"
    assert stored["image"] == "https://images.example.com/old.jpg"
    assert stored["package_name"] == "New Name"
    assert stored["url"] == "new-name"
    assert stored["tour_price"] is None
    assert stored["indian"] == "No"
    assert stored["itinerary"] == [{"title": "Day 1", "description": ""}]
    assert stored["updatedAt"] is not None


@pytest.mark.asyncio
async def test_update_tour_replaces_image(test_db, insert_tour, fake_uploader, staged_image):
    tour = await insert_tour(image="https://images.example.com/old.jpg")

    image_url = await TourService(test_db, fake_uploader).update_tour(
        tour["_id"], TourFields(package_name="Tour"), staged_image
    )

    stored = await test_db[TOURS_COLLECTION].find_one({"_id": tour["_id"]})
    assert image_url != "https://images.example.com/old.jpg"
    assert stored["image"] == image_url


@pytest.mark.asyncio
async def test_update_tour_upload_failure_leaves_record_unchanged(
    test_db, insert_tour, fake_uploader, staged_image
):
    tour = await insert_tour(package_name="Untouched")
    fake_uploader.error = ImageUploadError("timeout")

    with pytest.raises(ImageUploadError):
        await TourService(test_db, fake_uploader).update_tour(
            tour["_id"], TourFields(package_name="Changed"), staged_image
        )

    stored = await test_db[TOURS_COLLECTION].find_one({"_id": tour["_id"]})
    assert stored["package_name"] == "Untouched"
    assert "updatedAt" not in stored


@pytest.mark.asyncio
async def test_update_tour_invalid_itinerary(test_db, insert_tour):
    tour = await insert_tour(package_name="Untouched")

    with pytest.raises(InvalidItineraryError):
        await TourService(test_db).update_tour(
            tour["_id"], TourFields(package_name="Changed", itinerary="{broken")
        )

    stored = await test_db[TOURS_COLLECTION].find_one({"_id": tour["_id"]})
    assert stored["package_name"] == "Untouched"


@pytest.mark.asyncio
async def test_update_tour_not_found(test_db):
    with pytest.raises(NotFoundError):
        await TourService(test_db).update_tour(ObjectId(), TourFields(package_name="X"))


@pytest.mark.asyncio
async def test_delete_tour_twice(test_db, insert_tour):
    """The second delete of the same tour is a not-found."""
    tour = await insert_tour()
    service = TourService(test_db)

    deleted_id = await service.delete_tour(tour["_id"])
    assert deleted_id == str(tour["_id"])

    with pytest.raises(NotFoundError):
        await service.delete_tour(tour["_id"])


@pytest.mark.asyncio
async def test_list_tours(test_db, insert_tour):
    await insert_tour()
    await insert_tour()

    assert len(await TourService(test_db).list_tours()) == 2


@pytest.mark.asyncio
async def test_list_by_flag(test_db, insert_tour):
    domestic = await insert_tour(indian="Yes")
    await insert_tour(international="Yes")
    await insert_tour(indian="No")

    tours = await TourService(test_db).list_by_flag(TourFlag.INDIAN)

    assert [tour["_id"] for tour in tours] == [domestic["_id"]]


@pytest.mark.asyncio
async def test_list_by_flag_limit(test_db, insert_tour):
    for _ in range(6):
        await insert_tour(fixed_departure="Yes")

    tours = await TourService(test_db).list_by_flag("fixed_departure", limit=4)

    assert len(tours) == 4


@pytest.mark.asyncio
async def test_list_by_flag_rejects_unknown_flag(test_db):
    with pytest.raises(ValueError):
        await TourService(test_db).list_by_flag("honeymoon")


@pytest.mark.asyncio
async def test_list_similar_by_theme(test_db, insert_tour):
    await insert_tour(url="base", theme="Hills")
    for index in range(5):
        await insert_tour(url=f"hills-{index}", theme="Hills")
    await insert_tour(url="beach", theme="Beach")

    similar = await TourService(test_db).list_similar_by_theme("base")

    assert len(similar) == 4
    assert all(tour["theme"] == "Hills" for tour in similar)
    assert "base" not in {tour["url"] for tour in similar}


@pytest.mark.asyncio
async def test_list_similar_by_theme_unknown_url(test_db, insert_tour):
    await insert_tour(url="exists")

    assert await TourService(test_db).list_similar_by_theme("missing") == []


@pytest.mark.asyncio
async def test_list_one_per_theme(test_db, insert_tour):
    """Each theme is represented by its lowest-id tour, with projected fields."""
    first_hills = await insert_tour(theme="Hills", package_name="Shimla", itinerary=[{"title": "x"}])
    await insert_tour(theme="Hills", package_name="Manali")
    first_beach = await insert_tour(theme="Beach", package_name="Goa")
    await insert_tour(theme="Beach", package_name="Varkala")

    samples = await TourService(test_db).list_one_per_theme()

    assert [sample["_id"] for sample in samples] == [first_hills["_id"], first_beach["_id"]]
    assert samples[0]["theme_name"] == "Hills"
    assert samples[0]["package_name"] == "Shimla"
    assert "itinerary" not in samples[0]
    assert "theme" not in samples[0]


@pytest.mark.asyncio
async def test_list_one_per_theme_limit(test_db, insert_tour):
    for index in range(8):
        await insert_tour(theme=f"Theme {index}")

    samples = await TourService(test_db).list_one_per_theme(limit=6)

    assert len(samples) == 6
