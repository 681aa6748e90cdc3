"""
Filtering, search, highlighting and pagination over an in-memory record list.

Everything here is a pure function of its arguments: the admin handlers load
the full list from the database, then derive the visible page from it on
every request.
"""
import math
import re
from collections import namedtuple
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone

from baroform.models import CONSULTATION_STATUSES, PRACTICE_STATUSES

PAGE_SIZE = 10
MIN_CONTACT_DIGITS = 3
ALL = 'all'

Segment = namedtuple('Segment', ['text', 'matched'])


@dataclass(frozen=True)
class RecordKind:
    name: str
    name_field: str
    statuses: tuple
    filter_fields: tuple = ()

    @property
    def default_status(self):
        return self.statuses[0]

    @property
    def search_fields(self):
        return (self.name_field, 'contact', 'manager', 'memo')


CONSULTATION = RecordKind('consultation', 'name', CONSULTATION_STATUSES,
                          filter_fields=('type', 'student_status'))
PRACTICE = RecordKind('practice', 'student_name', PRACTICE_STATUSES)

# 탭 -> 레코드 종류
TAB_KINDS = {
    'consultation': CONSULTATION,
    '취업연계': CONSULTATION,
    'practice': PRACTICE,
}


def kind_for_tab(tab):
    return TAB_KINDS.get(tab, CONSULTATION)


@dataclass(frozen=True)
class Filters:
    status: str = ALL
    student_status: str = ALL
    form_type: str = ALL
    start_date: object = ''
    end_date: object = ''


@dataclass(frozen=True)
class View:
    rows: tuple
    total_count: int
    total_pages: int
    page: int
    highlights: tuple = field(default=())

    @property
    def page_ids(self):
        return [row['id'] for row in self.rows]


def display_status(record, kind):
    """Stored status, or the kind's default when it is missing or unknown."""
    status = record.get('status')
    return status if status in kind.statuses else kind.default_status


# ---------------------------------------------------------------------------
# dates

FRACTION_RE = re.compile(r'\.(\d+)')
DAY_RE = re.compile(r'\d{4}-\d{2}-\d{2}')


def _pad_fraction(match):
    # fromisoformat (3.10) 는 소수점 3자리/6자리만 받음
    return '.' + match.group(1)[:6].ljust(6, '0')


def parse_timestamp(value):
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = FRACTION_RE.sub(_pad_fraction, value.strip().replace('Z', '+00:00'), count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_day(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not DAY_RE.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


INVALID = object()


def date_bounds(start_date='', end_date='', tz=timezone.utc):
    """
    Turn the two date inputs into an inclusive datetime range.

    Each side is ``None`` when left open. An unparseable side comes back
    as the ``INVALID`` marker so that it matches no record.
    """
    start = end = None
    if start_date:
        day = _parse_day(start_date)
        start = datetime.combine(day, time.min, tzinfo=tz) if day else INVALID
    if end_date:
        day = _parse_day(end_date)
        end = datetime.combine(day, time(23, 59, 59, 999000), tzinfo=tz) if day else INVALID
    return start, end


def in_date_range(created_at, start, end):
    if start is None and end is None:
        return True
    if start is INVALID or end is INVALID:
        return False
    moment = parse_timestamp(created_at)
    if moment is None:
        return False
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


# ---------------------------------------------------------------------------
# search

def _contact_needle(query):
    # 하이픈 없는 숫자 검색어만, 최소 3자리
    needle = query.replace('-', '')
    if len(needle) < MIN_CONTACT_DIGITS or not re.fullmatch(r'[0-9]+', needle):
        return None
    return needle


def contact_matches(contact, query):
    if not contact or not query:
        return False
    if '-' in query:
        return query.lower() in contact.lower()
    needle = _contact_needle(query)
    if needle is None:
        return False
    return needle in contact.replace('-', '')


def text_matches(text, query):
    return bool(text) and query.lower() in text.lower()


def matches_query(record, kind, query):
    if not query:
        return True
    if text_matches(record.get(kind.name_field), query):
        return True
    if contact_matches(record.get('contact'), query):
        return True
    return text_matches(record.get('manager'), query) or text_matches(record.get('memo'), query)


def highlight_text(text, query):
    """
    Split ``text`` into plain and matched segments.

    The query is searched literally and case-insensitively; matched
    segments keep the original casing of ``text``.
    """
    if not text:
        return []
    if not query:
        return [Segment(text, False)]

    lowered, needle = text.lower(), query.lower()
    if len(lowered) != len(text):
        # lower() changed the length, offsets would drift
        parts = re.split('(%s)' % re.escape(query), text, flags=re.IGNORECASE)
        return [Segment(part, part.lower() == needle) for part in parts if part]

    segments = []
    pos = 0
    while True:
        found = lowered.find(needle, pos)
        if found == -1:
            break
        if found > pos:
            segments.append(Segment(text[pos:found], False))
        segments.append(Segment(text[found:found + len(needle)], True))
        pos = found + len(needle)
    if pos < len(text):
        segments.append(Segment(text[pos:], False))
    return segments


def highlight_contact(contact, query):
    """Highlight ``query`` inside ``contact`` ignoring hyphens in the number."""
    if not contact:
        return []
    if not query:
        return [Segment(contact, False)]
    if '-' in query:
        return highlight_text(contact, query)

    needle = _contact_needle(query)
    if needle is None:
        return [Segment(contact, False)]
    match_index = contact.replace('-', '').find(needle)
    if match_index == -1:
        return [Segment(contact, False)]

    digit_index = 0
    start_pos = end_pos = -1
    for i, char in enumerate(contact):
        if char == '-':
            continue
        if digit_index == match_index and start_pos == -1:
            start_pos = i
        if digit_index == match_index + len(needle) - 1:
            end_pos = i + 1
            break
        digit_index += 1

    if start_pos == -1 or end_pos == -1:
        return [Segment(contact, False)]

    segments = [
        Segment(contact[:start_pos], False),
        Segment(contact[start_pos:end_pos], True),
        Segment(contact[end_pos:], False),
    ]
    return [segment for segment in segments if segment.text]


def highlight_record(record, kind, query):
    highlights = {}
    for name in kind.search_fields:
        value = record.get(name)
        if name == 'contact':
            highlights[name] = highlight_contact(value, query)
        else:
            highlights[name] = highlight_text(value, query)
    return highlights


# ---------------------------------------------------------------------------
# filtering and paging

def filter_records(records, kind, filters=None, query='', tab=None, tz=timezone.utc):
    """Records that pass every active filter and the query, in input order."""
    filters = filters or Filters()
    start, end = date_bounds(filters.start_date, filters.end_date, tz)
    uses = set(kind.filter_fields)

    result = []
    for record in records:
        # 상담/취업연계 탭은 같은 테이블을 type으로 나눈다
        if tab and 'type' in uses and record.get('type') != tab:
            continue
        if not matches_query(record, kind, query):
            continue
        if filters.status != ALL and (record.get('status') or kind.default_status) != filters.status:
            continue
        if ('student_status' in uses and filters.student_status != ALL
                and record.get('student_status') != filters.student_status):
            continue
        if 'type' in uses and filters.form_type != ALL and record.get('type') != filters.form_type:
            continue
        if not in_date_range(record.get('created_at'), start, end):
            continue
        result.append(record)
    return result


def total_pages(count, page_size=PAGE_SIZE):
    return math.ceil(count / page_size)


def paginate(rows, page, page_size=PAGE_SIZE):
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(rows[start:start + page_size])


def compute_view(records, state, page_size=PAGE_SIZE, tz=timezone.utc):
    kind = kind_for_tab(state.tab)
    filtered = filter_records(records, kind, state.filters, state.query, tab=state.tab, tz=tz)
    rows = paginate(filtered, state.page, page_size)
    return View(
        rows=tuple(rows),
        total_count=len(filtered),
        total_pages=total_pages(len(filtered), page_size),
        page=state.page,
        highlights=tuple(highlight_record(row, kind, state.query) for row in rows),
    )
