DEFAULT_PAGE_SIZE = 20


def _to_int(value, fallback):
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def page_params(args, max_page_size=100, default_page_size=DEFAULT_PAGE_SIZE):
    """Read ``page``/``pageSize`` from query args, clamped to sane bounds.

    page is at least 1; pageSize lies in [1, max_page_size].
    """
    page = max(1, _to_int(args.get("page"), 1))
    size = _to_int(args.get("pageSize"), default_page_size)
    size = min(max_page_size, max(1, size))
    return page, size


def paginate(query, page, page_size, serialize):
    total = query.order_by(None).count()
    rows = query.limit(page_size).offset((page - 1) * page_size).all()
    return {
        "page": page,
        "pageSize": page_size,
        "total": total,
        "rows": [serialize(r) for r in rows],
    }


def enum_filter(value, allowed):
    """Return the normalised value if it is one of ``allowed``, else None."""
    if value is None:
        return None
    value = str(value).strip().lower()
    return value if value in allowed else None
