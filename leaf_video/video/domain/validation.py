"""
Field validation rules shared by the video use cases.
"""

# Largest value a signed 64-bit integer column holds
MAX_ID = 2 ** 63 - 1

TITLE_ERROR = "title must not be empty and must not exceed {max_length} characters"
PAGE_ERROR = "page must be at least 1 and page_size between 1 and {max_page_size}"


def is_valid_title(title: str, max_length: int = 50) -> bool:
    """Title must contain a visible character and fit the length limit"""
    return bool(title and title.strip()) and len(title) <= max_length


def title_error(max_length: int = 50) -> str:
    return TITLE_ERROR.format(max_length=max_length)


def is_valid_page(page: int, page_size: int, max_page_size: int = 30) -> bool:
    return page >= 1 and 1 <= page_size <= max_page_size and (page - 1) * page_size <= MAX_ID


def page_error(max_page_size: int = 30) -> str:
    return PAGE_ERROR.format(max_page_size=max_page_size)
