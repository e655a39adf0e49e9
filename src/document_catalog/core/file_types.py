"""File-type inference from a document URL."""

from typing import Optional

OTHER = "Other"
WEBSITE = "Website"

FILE_TYPES = [
    "Google Doc",
    "Google Sheet",
    "Google Slides",
    "Google Form",
    "PDF",
    "Image",
    "Google Site",
    "Looker Studio",
    "Tableau",
    WEBSITE,
    OTHER,
]

_GOOGLE_PATTERNS = [
    ("docs.google.com/document", "Google Doc"),
    ("docs.google.com/spreadsheets", "Google Sheet"),
    ("docs.google.com/presentation", "Google Slides"),
    ("docs.google.com/forms", "Google Form"),
]

_HOSTED_PATTERNS = [
    ("sites.google.com", "Google Site"),
    ("lookerstudio.google.com", "Looker Studio"),
    ("tableau.com", "Tableau"),
]

_IMAGE_EXTENSIONS = (".jpg", ".png", ".gif")


def detect_file_type(url: Optional[str]) -> str:
    """Classify a URL by substring match; the first matching pattern wins."""
    if not url:
        return OTHER
    for pattern, file_type in _GOOGLE_PATTERNS:
        if pattern in url:
            return file_type
    # Drive files only reveal their type through the file name
    if "drive.google.com/file" in url:
        if ".pdf" in url:
            return "PDF"
        if any(ext in url for ext in _IMAGE_EXTENSIONS):
            return "Image"
    for pattern, file_type in _HOSTED_PATTERNS:
        if pattern in url:
            return file_type
    return WEBSITE
