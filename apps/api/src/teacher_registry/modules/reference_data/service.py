"""
Reference Data Service

Read-only lookups backing the cascading selection lists of the
registration form:

- places: fixed list embedded below
- governorates: <data_dir>/governorates.json
- administrations: <data_dir>/<governorate>/administrations.json
- schools: <data_dir>/<governorate>/<administration>/schools.json

Governorate and administration names come straight from the URL, so they
are treated as opaque lookup keys. A key that could name anything other
than a direct child directory of its parent is rejected as not found.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

GOVERNORATES_FILE = "governorates.json"
ADMINISTRATIONS_FILE = "administrations.json"
SCHOOLS_FILE = "schools.json"

_FORBIDDEN_KEY_CHARS = ("/", "\\", "\x00")

PLACES = [
    "شبرا الخيمة", "شبرا مصر (الجنوبية)", "شبين القناطر", "عين شمس والمطرية وحلمية الزيتون",
    "حدائق القبة والوايلى والعباسية ومنشية الصدر", "عزبة النخل والمرج", "مدينة السلام والعبور",
    "شرق السكة الحديد", "حلوان والمعصرة", "المقطم", "مصر القديمة", "مدينة العبور", "مدينة بدر",
    "الجيزة (طموة وتوابعها)", "الجيزة (شمال الجيزة)", "الجيزة (وسط الجيزة)",
    "الجيزة (6 أكتوبر والشيخ زايد)",
    "البحيرة", "بنها", "المحلة", "طنطا", "المنصورة", "الشرقية والعاشر من رمضان", "الإسماعيلية",
    "ميت غمر", "كفر الشيخ دمياط البرارى", "المنوفية", "بورسعيد", "السويس", "مرسى مطروح",
    "الخمس مدن الغربية", "قطاع المنتزه الإسكندرية", "قطاع شرق الإسكندرية", "قطاع وسط الإسكندرية",
    "برج العرب والعامرية", "بنى سويف", "الفشن وببا وسمسطا", "مغاغة", "بنى مزار", "شرق المنيا",
    "أبو قرقاص", "مطاى", "سمالوط", "دير مواس ودلجه", "ملوى", "ديروط", "القوصية", "رزقة الدير",
    "منفلوط", "ابنوب والفتح", "ابوتيج", "الوادى الجديد", "طهطا", "طما", "سوهاج", "جرجا", "أخميم",
    "البلينا غرب وشرق", "نجع حمادى", "دشنا", "قنا", "البحر الاحمر", "قوص", "نقادة", "الأقصر",
    "اسنا", "اسوان",
]


class ReferenceDataNotFoundError(Exception):
    """Raised when a reference data file does not exist for the given keys."""

    def __init__(self, message: str):
        self.message = message
        self.error_code = "REFERENCE_DATA_NOT_FOUND"
        self.status_code = 404
        super().__init__(message)


def _is_safe_key(key: str) -> bool:
    if not key or key in (".", ".."):
        return False
    return not any(char in key for char in _FORBIDDEN_KEY_CHARS)


def _resolve(data_dir: Path, *keys: str, filename: str) -> Path | None:
    """
    Build the path of a reference file from lookup keys.

    Returns None when any key is unsafe or the resolved path escapes the
    data root.
    """
    if not all(_is_safe_key(key) for key in keys):
        return None

    root = data_dir.resolve()
    candidate = root.joinpath(*keys, filename).resolve()
    if not candidate.is_relative_to(root):
        return None
    return candidate


def _load_list(path: Path | None, not_found_message: str) -> list:
    if path is None or not path.is_file():
        raise ReferenceDataNotFoundError(not_found_message)

    with path.open(encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError:
            logger.error(f"Malformed reference data file: {path}")
            raise


def list_places() -> list[str]:
    """Return the fixed list of places."""
    return list(PLACES)


def list_governorates(data_dir: Path) -> list[str]:
    """Return all governorate names."""
    return _load_list(
        _resolve(data_dir, filename=GOVERNORATES_FILE),
        "Governorates data not found",
    )


def list_administrations(data_dir: Path, governorate: str) -> list[str]:
    """Return the administrations of a governorate."""
    return _load_list(
        _resolve(data_dir, governorate, filename=ADMINISTRATIONS_FILE),
        "Administrations data not found for this governorate",
    )


def list_schools(data_dir: Path, governorate: str, administration: str) -> list[str]:
    """Return the schools of an administration within a governorate."""
    return _load_list(
        _resolve(data_dir, governorate, administration, filename=SCHOOLS_FILE),
        "Schools data not found for this administration",
    )
