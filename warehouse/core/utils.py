"""Small helpers shared by the page views"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.core.paginator import Paginator

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def parse_bool(value):
    """Parse query/body flags; None stays None so filters can be omitted"""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    return str(value).strip().lower() in TRUE_VALUES


def is_confirmed(request):
    """Destructive actions need confirm=true in the body or the query string"""
    value = None
    if hasattr(request, 'data') and hasattr(request.data, 'get'):
        value = request.data.get('confirm')
    if value is None:
        value = request.query_params.get('confirm')
    return bool(parse_bool(value))


def to_decimal(value):
    """Decimal from user/API input; blank or invalid input gives None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        result = Decimal(text)
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


def paginate(items, page=None, page_size=None):
    """Client-side pagination of a fetched list"""
    default_size = getattr(settings, 'DEFAULT_PAGE_SIZE', 10)
    options = getattr(settings, 'PAGE_SIZE_OPTIONS', [default_size])
    try:
        page_size = int(page_size) if page_size else default_size
    except (TypeError, ValueError):
        page_size = default_size
    if page_size not in options:
        page_size = default_size
    paginator = Paginator(items, page_size)
    page_obj = paginator.get_page(page)
    return {
        'results': list(page_obj.object_list),
        'page': page_obj.number,
        'page_size': page_size,
        'total_pages': paginator.num_pages,
        'count': paginator.count,
    }


def json_ready(data):
    """Validated serializer data as plain JSON values for the remote API"""
    ready = {}
    for key, value in data.items():
        if isinstance(value, Decimal):
            value = format(value, 'f')
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        ready[key] = value
    return ready
