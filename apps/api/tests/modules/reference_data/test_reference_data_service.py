"""
Unit tests for the reference data service.
"""

import json

import pytest

from teacher_registry.modules.reference_data.service import (
    PLACES,
    ReferenceDataNotFoundError,
    list_administrations,
    list_governorates,
    list_places,
    list_schools,
)


@pytest.fixture
def data_dir(tmp_path):
    """A small reference data tree."""
    root = tmp_path / "data"
    gov_dir = root / "اسوان"
    admin_dir = gov_dir / "ادفو"
    admin_dir.mkdir(parents=True)

    (root / "governorates.json").write_text(
        json.dumps(["اسوان", "الأقصر"], ensure_ascii=False), encoding="utf-8"
    )
    (gov_dir / "administrations.json").write_text(
        json.dumps(["ادفو", "كوم امبو"], ensure_ascii=False), encoding="utf-8"
    )
    (admin_dir / "schools.json").write_text(
        json.dumps(["مدرسة ادفو الثانوية", "مدرسة النيل"], ensure_ascii=False),
        encoding="utf-8",
    )

    # A file outside the data root that traversal must not reach
    (tmp_path / "administrations.json").write_text('["secret"]', encoding="utf-8")
    return root


class TestListPlaces:
    def test_returns_fixed_list(self):
        places = list_places()

        assert places == PLACES
        assert places[0] == "شبرا الخيمة"
        assert places[-1] == "اسوان"

    def test_returns_a_copy(self):
        list_places().append("extra")

        assert "extra" not in list_places()


class TestListGovernorates:
    def test_reads_file(self, data_dir):
        assert list_governorates(data_dir) == ["اسوان", "الأقصر"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReferenceDataNotFoundError) as exc_info:
            list_governorates(tmp_path / "empty")

        assert exc_info.value.status_code == 404


class TestListAdministrations:
    def test_known_governorate(self, data_dir):
        assert list_administrations(data_dir, "اسوان") == ["ادفو", "كوم امبو"]

    def test_unknown_governorate(self, data_dir):
        with pytest.raises(ReferenceDataNotFoundError):
            list_administrations(data_dir, "القاهرة")

    @pytest.mark.parametrize("key", ["..", ".", "", "../data", "اسوان/..", "a\\b", "a\x00b"])
    def test_unsafe_keys_are_not_found(self, data_dir, key):
        with pytest.raises(ReferenceDataNotFoundError):
            list_administrations(data_dir, key)


class TestListSchools:
    def test_known_pair(self, data_dir):
        assert list_schools(data_dir, "اسوان", "ادفو") == ["مدرسة ادفو الثانوية", "مدرسة النيل"]

    def test_unknown_administration(self, data_dir):
        with pytest.raises(ReferenceDataNotFoundError) as exc_info:
            list_schools(data_dir, "اسوان", "دراو")

        assert "administration" in exc_info.value.message.lower()

    def test_unknown_governorate(self, data_dir):
        with pytest.raises(ReferenceDataNotFoundError):
            list_schools(data_dir, "الأقصر", "ادفو")

    @pytest.mark.parametrize(
        "governorate, administration",
        [("..", "اسوان"), ("اسوان", ".."), ("اسوان", "ادفو/../..")],
    )
    def test_traversal_is_rejected(self, data_dir, governorate, administration):
        with pytest.raises(ReferenceDataNotFoundError):
            list_schools(data_dir, governorate, administration)
