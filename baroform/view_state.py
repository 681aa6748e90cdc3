"""
Admin dashboard state: filters, search text, page and row selection.

The dashboard keeps one immutable ``ViewState`` and moves it forward with
``reduce(state, action)``. ``engine.compute_view`` turns the state plus the
loaded records into the visible page.
"""
from dataclasses import dataclass, field, replace

from baroform.engine import ALL, Filters

TABS = ('consultation', '취업연계', 'practice')
FILTER_NAMES = ('status', 'student_status', 'form_type')


@dataclass(frozen=True)
class ViewState:
    tab: str = 'consultation'
    query: str = ''
    status: str = ALL
    student_status: str = ALL
    form_type: str = ALL
    start_date: str = ''
    end_date: str = ''
    page: int = 1
    selected: frozenset = field(default_factory=frozenset)

    @property
    def filters(self):
        return Filters(
            status=self.status,
            student_status=self.student_status,
            form_type=self.form_type,
            start_date=self.start_date,
            end_date=self.end_date,
        )

    @property
    def can_edit(self):
        return len(self.selected) == 1

    @property
    def can_delete(self):
        return len(self.selected) >= 1

    @property
    def can_export(self):
        return len(self.selected) >= 1

    def to_dict(self):
        return {
            'tab': self.tab,
            'query': self.query,
            'status': self.status,
            'student_status': self.student_status,
            'form_type': self.form_type,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'page': self.page,
            'selected': sorted(self.selected, key=str),
        }

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        data = dict(data)
        data['selected'] = frozenset(data.get('selected') or ())
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)


# actions

@dataclass(frozen=True)
class SetQuery:
    query: str


@dataclass(frozen=True)
class SetFilter:
    name: str
    value: str


@dataclass(frozen=True)
class SetDateRange:
    start_date: str = ''
    end_date: str = ''


@dataclass(frozen=True)
class SetTab:
    tab: str


@dataclass(frozen=True)
class GoToPage:
    page: int


@dataclass(frozen=True)
class ToggleSelect:
    id: object


@dataclass(frozen=True)
class ToggleSelectAll:
    page_ids: tuple


@dataclass(frozen=True)
class ClearSelection:
    pass


def reduce(state, action):
    """Return the state that follows ``state`` once ``action`` is applied."""
    if isinstance(action, SetQuery):
        return replace(state, query=action.query, page=1)

    if isinstance(action, SetFilter):
        if action.name not in FILTER_NAMES:
            raise ValueError('unknown filter: %s' % action.name)
        return replace(state, **{action.name: action.value, 'page': 1})

    if isinstance(action, SetDateRange):
        return replace(state, start_date=action.start_date, end_date=action.end_date, page=1)

    if isinstance(action, SetTab):
        if action.tab not in TABS:
            raise ValueError('unknown tab: %s' % action.tab)
        return replace(state, tab=action.tab, page=1, selected=frozenset())

    if isinstance(action, GoToPage):
        return replace(state, page=action.page, selected=frozenset())

    if isinstance(action, ToggleSelect):
        if action.id in state.selected:
            return replace(state, selected=state.selected - {action.id})
        return replace(state, selected=state.selected | {action.id})

    if isinstance(action, ToggleSelectAll):
        page_ids = frozenset(action.page_ids)
        if page_ids and state.selected == page_ids:
            return replace(state, selected=frozenset())
        return replace(state, selected=page_ids)

    if isinstance(action, ClearSelection):
        return replace(state, selected=frozenset())

    raise ValueError('unknown action: %r' % (action,))


ACTIONS = {
    'set_query': SetQuery,
    'set_filter': SetFilter,
    'set_date_range': SetDateRange,
    'set_tab': SetTab,
    'go_to_page': GoToPage,
    'toggle_select': ToggleSelect,
    'toggle_select_all': ToggleSelectAll,
    'clear_selection': ClearSelection,
}


STRING_FIELDS = ('query', 'name', 'value', 'start_date', 'end_date', 'tab')


def _record_id(value):
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError('invalid record id: %r' % (value,))
    return value


def action_from_json(data):
    """Build an action from ``{"type": "set_query", "query": "..."}``."""
    data = dict(data or {})
    action_type = data.pop('type', None)
    if action_type not in ACTIONS:
        raise ValueError('unknown action: %s' % action_type)
    for name in STRING_FIELDS:
        if name in data and not isinstance(data[name], str):
            raise ValueError('%s must be a string' % name)
    if action_type == 'toggle_select' and 'id' in data:
        _record_id(data['id'])
    if action_type == 'toggle_select_all':
        page_ids = data.get('page_ids') or ()
        if not isinstance(page_ids, (list, tuple)):
            raise ValueError('page_ids must be a list')
        data['page_ids'] = tuple(_record_id(i) for i in page_ids)
    if action_type == 'go_to_page':
        try:
            data['page'] = int(data.get('page', 1))
        except (TypeError, ValueError):
            raise ValueError('invalid page: %r' % (data.get('page'),))
    try:
        return ACTIONS[action_type](**data)
    except TypeError as e:
        raise ValueError(str(e))
