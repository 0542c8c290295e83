"""
Category rules for FileSense.

Files are sorted into a fixed set of categories using only their name and
extension. Rules are checked in a fixed order and the first match wins:

1. Sensitive keywords in the filename (beats every extension rule)
2. Extension table, with two refinements:
   - documents with a work keyword become Work Documents
   - images with a personal keyword or a recent year become Personal Photos
3. Anything else is Other

All matching is case-insensitive substring containment.
"""

import os
from enum import Enum


class Category(str, Enum):
    DOCUMENTS = "Documents"
    IMAGES = "Images"
    VIDEOS = "Videos"
    AUDIO = "Audio"
    ARCHIVES = "Archives"
    CODE = "Code"
    SOFTWARE = "Software"
    WORK_DOCUMENTS = "Work Documents"
    PERSONAL_PHOTOS = "Personal Photos"
    SENSITIVE = "Sensitive"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @property
    def directory_name(self) -> str:
        """Name of the sub-folder this category is moved into."""
        return CATEGORY_DIRECTORIES[self]

    @classmethod
    def from_label(cls, label: str) -> "Category | None":
        """Exact label lookup; returns None for custom category names."""
        try:
            return cls(label)
        except ValueError:
            return None


# Label order used when presenting an analysis
ALL_CATEGORIES: tuple[Category, ...] = tuple(Category)

CATEGORY_DIRECTORIES: dict[Category, str] = {c: c.value for c in Category}


# -----------------------------------------------------------------------------
# Keyword tables
# -----------------------------------------------------------------------------

SENSITIVE_KEYWORDS = frozenset({
    # financial
    "tax", "irs", "w2", "1099", "ssn", "social", "security",
    "bank", "account", "statement", "routing", "financial",
    # credentials
    "password", "credential", "key", "secret", "login", "auth",
    # medical
    "medical", "health", "prescription", "doctor", "patient",
    # privacy
    "personal", "private", "confidential", "classified",
})

WORK_KEYWORDS = frozenset({
    "meeting", "presentation", "report", "proposal", "contract",
    "client", "project", "deadline", "invoice", "budget",
    "company", "corporate", "business", "professional",
    "quarterly", "annual", "fiscal", "revenue", "salary",
})

PERSONAL_PHOTO_KEYWORDS = frozenset({
    "vacation", "holiday", "trip", "travel", "family",
    "birthday", "wedding", "anniversary", "graduation",
    "photo", "pic", "selfie", "camera",
})

# Only these three years count as a "date" in an image name
PHOTO_YEARS = ("2023", "2024", "2025")


# -----------------------------------------------------------------------------
# Extension table
# -----------------------------------------------------------------------------

DOCUMENT_EXTENSIONS = frozenset({"pdf", "doc", "docx", "txt", "rtf", "odt"})
SPREADSHEET_EXTENSIONS = frozenset({"xls", "xlsx", "csv", "ods", "ppt", "pptx", "odp"})
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "tiff", "svg", "webp", "heic"})

EXTENSION_GROUPS: tuple[tuple[frozenset, Category], ...] = (
    (DOCUMENT_EXTENSIONS, Category.DOCUMENTS),
    (SPREADSHEET_EXTENSIONS, Category.DOCUMENTS),
    (IMAGE_EXTENSIONS, Category.IMAGES),
    (frozenset({"mp4", "avi", "mov", "wmv", "flv", "mkv", "webm", "m4v"}), Category.VIDEOS),
    (frozenset({"mp3", "wav", "flac", "aac", "ogg", "wma", "m4a"}), Category.AUDIO),
    (frozenset({"zip", "rar", "7z", "tar", "gz", "bz2", "xz"}), Category.ARCHIVES),
    (frozenset({
        "js", "ts", "jsx", "tsx", "py", "java", "cpp", "c", "h", "css", "html",
        "php", "rb", "go", "rs", "swift", "kt", "cs", "vb", "sql", "json", "xml",
        "yml", "yaml",
    }), Category.CODE),
    (frozenset({"exe", "msi", "dmg", "pkg", "deb", "rpm", "appx", "app"}), Category.SOFTWARE),
)

EXTENSION_CATEGORIES: dict[str, Category] = {
    ext: category for exts, category in EXTENSION_GROUPS for ext in exts
}


# -----------------------------------------------------------------------------
# Predicates
# -----------------------------------------------------------------------------

def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def is_sensitive_file(file_name: str) -> bool:
    """Check if a filename suggests financial, credential, medical or private data."""
    return _contains_any(file_name.lower(), SENSITIVE_KEYWORDS)


def is_work_document(file_name: str) -> bool:
    """Check if a filename looks work-related."""
    return _contains_any(file_name.lower(), WORK_KEYWORDS)


def has_date_pattern(file_name: str) -> bool:
    name = file_name.lower()
    return "20" in name and any(year in name for year in PHOTO_YEARS)


def is_personal_photo(file_name: str) -> bool:
    """Check if an image name looks like a personal photo (keyword or recent year)."""
    return _contains_any(file_name.lower(), PERSONAL_PHOTO_KEYWORDS) or has_date_pattern(file_name)


def get_file_extension(file_name: str) -> str:
    """
    Lowercased text after the last dot, without the dot.

    Returns an empty string when there is no extension.
    """
    ext = os.path.splitext(file_name)[1]
    return ext[1:].lower()


# -----------------------------------------------------------------------------
# Classification
# -----------------------------------------------------------------------------

def classify_name(file_name: str, extension: str | None = None) -> Category:
    """
    Classify a file from its name (and optionally a pre-computed extension).
    """
    name = file_name.lower()
    ext = get_file_extension(name) if extension is None else extension.lower()

    if is_sensitive_file(name):
        return Category.SENSITIVE

    category = EXTENSION_CATEGORIES.get(ext)
    if category is None:
        return Category.OTHER

    if ext in DOCUMENT_EXTENSIONS and is_work_document(name):
        return Category.WORK_DOCUMENTS

    if category is Category.IMAGES and is_personal_photo(name):
        return Category.PERSONAL_PHOTOS

    return category


def classify(record) -> Category:
    """
    Assign exactly one category to a FileRecord.

    Args:
        record: Any object with ``name`` and ``extension`` attributes.

    Returns:
        The matching Category.
    """
    return classify_name(record.name, record.extension)
