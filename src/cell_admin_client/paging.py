from typing import Any, Dict, List, Union

Json = Dict[str, Any]

# Spring Data page envelope:
#   {content: [...], totalPages, totalElements, number, size, first, last, ...}
# Page numbers are 0-based.


def page_content(data: Union[Json, List[Any], None]) -> List[Any]:
    """Items of a page envelope; bare lists are returned as-is."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        content = data.get("content")
        if isinstance(content, list):
            return content
    return []


def has_next_page(data: Union[Json, List[Any], None]) -> bool:
    if not isinstance(data, dict) or "content" not in data:
        return False
    if "last" in data:
        return not data["last"]
    number = data.get("number")
    total = data.get("totalPages")
    if number is None or total is None:
        return False
    return int(number) + 1 < int(total)


def page_summary(data: Json) -> Json:
    return {
        "number": data.get("number", 0),
        "size": data.get("size"),
        "totalPages": data.get("totalPages", 0),
        "totalElements": data.get("totalElements", 0),
    }
