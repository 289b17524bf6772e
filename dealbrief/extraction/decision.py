MIN_CHARS_PER_PAGE = 50


def needs_recognition(
    text: str,
    page_count: int,
    min_chars_per_page: int = MIN_CHARS_PER_PAGE,
) -> bool:
    """Return True when a PDF's embedded text layer is too sparse to trust.

    Scanned PDFs usually carry no real text layer, so fewer than
    ``min_chars_per_page`` characters per page on average means the pages
    must be re-derived through recognition.
    """
    if page_count <= 0:
        return False
    return len(text.strip()) < min_chars_per_page * page_count


def progress_percent(page_number: int, page_count: int) -> int:
    """Percentage of pages done, rounded half up."""
    if page_count <= 0:
        return 0
    return int(100 * page_number / page_count + 0.5)
