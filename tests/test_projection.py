import pytest

from catgallery.projection import CatDetail, DetailError, ShapeError, capitalize, project, split_temperaments


def test_capitalize():
    assert capitalize("siamese") == "Siamese"
    assert capitalize("BRITISH SHORTHAIR") == "British shorthair"
    assert capitalize("") == ""
    assert capitalize("é") == "É"


def test_split_temperaments_truncates_to_three():
    assert split_temperaments("A, B, C, D, E") == ["A", "B", "C"]
    assert split_temperaments("A, B") == ["A", "B"]


def test_split_temperaments_empty():
    assert split_temperaments("") == []


def test_split_temperaments_other_separator_is_one_item():
    assert split_temperaments("Active,Playful") == ["Active,Playful"]


def test_project_full_breed():
    image = {
        "url": "https://x/a.jpg",
        "breeds": [
            {
                "name": "siamese",
                "weight": {"imperial": "7 - 12", "metric": "3 - 5"},
                "temperament": "Curious, Loyal, Friendly, Vocal",
                "origin": "Thailand",
            }
        ],
    }
    assert project(image).as_context() == {
        "ImageUrl": "https://x/a.jpg",
        "Name": "Siamese",
        "Weight": "3 - 5",
        "Temperaments": ["Curious", "Loyal", "Friendly"],
        "Origin": "Thailand",
    }


def test_project_without_breeds():
    detail = project({"id": "abc", "url": "https://x/b.jpg", "breeds": []})
    assert detail == CatDetail(image_url="https://x/b.jpg")
    assert detail.as_context()["Temperaments"] == []


@pytest.mark.parametrize("breeds", [None, "siamese", [], ["siamese"], [None]])
def test_project_ignores_unusable_breeds(breeds):
    detail = project({"url": "https://x/b.jpg", "breeds": breeds})
    assert (detail.name, detail.weight, detail.temperaments, detail.origin) == ("", "", [], "")


def test_project_ignores_mistyped_fields():
    image = {
        "url": "https://x/c.jpg",
        "breeds": [{"name": 7, "weight": "4 kg", "temperament": ["Calm"], "origin": None}],
    }
    detail = project(image)
    assert (detail.name, detail.weight, detail.temperaments, detail.origin) == ("", "", [], "")


def test_project_weight_without_metric():
    detail = project({"url": "https://x/d.jpg", "breeds": [{"weight": {"imperial": "7 - 12"}}]})
    assert detail.weight == ""


def test_project_uses_first_breed_only():
    detail = project({"url": "https://x/e.jpg", "breeds": [{"name": "abyssinian"}, {"name": "bengal"}]})
    assert detail.name == "Abyssinian"


@pytest.mark.parametrize("image", [{"id": "abc"}, {"url": None}, {"url": 5}, {"url": ""}])
def test_project_requires_url(image):
    with pytest.raises(ShapeError) as excinfo:
        project(image)
    assert excinfo.value.field == "url"


def test_detail_error_context():
    assert DetailError("nope").as_context() == {"Error": "nope"}


def test_capitalize_non_ascii_first_letter():
    assert capitalize("ǆungla") == "Ǆungla"
    assert capitalize("ǆungla")[0].isupper()
    assert capitalize("ébène") == "Ébène"


@pytest.mark.parametrize("name", ["ßaxe", "ŉame"])
def test_capitalize_leaves_letters_without_single_uppercase(name):
    result = capitalize(name)
    assert result == name
    assert result[1:] == result[1:].lower()
