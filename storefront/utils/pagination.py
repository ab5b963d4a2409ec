from typing import Any, Dict


def build_query_params(page: int = 1, limit: int = 10, **filters) -> Dict[str, Any]:
    if page < 1:
        page = 1

    if limit < 1:
        limit = 10

    params: Dict[str, Any] = {"page": page, "limit": limit}

    for key, value in filters.items():
        if value is None or value == "" or value == "all":
            continue
        params[key] = value

    return params
