from io import BytesIO
from zoneinfo import ZoneInfo

from flask import abort, jsonify, request, send_file, session
from sqlalchemy.exc import SQLAlchemyError

from baroform import app, db
from baroform.engine import compute_view, display_status, filter_records, kind_for_tab
from baroform.errors import BaroformError, ValidationError
from baroform.export import export_filename, rows_for_export, to_csv_bytes
from baroform.forms import (
    COURSE_OPTIONS,
    format_click_source,
    format_contact,
    is_form_valid,
    join_courses,
    validate_contact,
)
from baroform.notify import SlackNotifier
from baroform.resources import RESOURCES, consultations, practice_applications
from baroform.view_state import ToggleSelectAll, ViewState, action_from_json, reduce


@app.errorhandler(BaroformError)
def handle_baroform_error(e):
    return jsonify({'error': e.message}), e.status_code


@app.errorhandler(SQLAlchemyError)
def handle_db_error(e):
    db.session.rollback()
    app.logger.error('DB 오류: %s', e)
    return jsonify({'error': '데이터베이스 처리 중 오류가 발생했습니다.'}), 500


def get_resource(resource_name):
    resource = RESOURCES.get(resource_name)
    if resource is None:
        abort(404)
    return resource


def notifier():
    return SlackNotifier(app.config['SLACK_WEBHOOK_URL'])


def display_tz():
    return ZoneInfo(app.config['DISPLAY_TIMEZONE'])


# 신청 목록 / 저장 / 수정 / 삭제
@app.route('/api/<resource_name>', methods=['GET'])
def list_records(resource_name):
    resource = get_resource(resource_name)
    return jsonify(resource.list())


def consultation_fields(data):
    """Normalized consultation fields; public submissions need the privacy consent."""
    fields = dict(data)
    if not isinstance(fields.get('contact') or '', str):
        raise ValidationError('contact must be a string')
    error = validate_contact(fields.get('contact'))
    if error:
        raise ValidationError(error)
    if fields.get('contact'):
        fields['contact'] = format_contact(fields['contact'])

    courses = fields.get('hope_course')
    if isinstance(courses, list):
        custom = fields.pop('custom_course', None) or ''
        fields['hope_course'] = join_courses([str(c) for c in courses], str(custom))

    # 관리자 추가 건은 동의 체크 없음
    if not fields.get('is_manual_entry') and not is_form_valid(
            fields.get('name'), fields.get('contact'), fields.get('privacy_agreed')):
        raise ValidationError('name, contact, privacy_agreed required')
    return fields


@app.route('/api/<resource_name>', methods=['POST'])
def create_record(resource_name):
    resource = get_resource(resource_name)
    data = request.get_json(silent=True) or {}

    if resource is consultations:
        data = consultation_fields(data)

    row = resource.create(data, notifier=notifier())
    return jsonify({'message': f'{resource.label} submitted successfully', 'data': row}), 201


@app.route('/api/<resource_name>', methods=['PATCH'])
def update_record(resource_name):
    resource = get_resource(resource_name)
    data = request.get_json(silent=True) or {}
    fields = dict(data)
    record_id = fields.pop('id', None)
    row = resource.update(record_id, fields)
    return jsonify({'message': f'{resource.label} updated successfully', 'data': row})


@app.route('/api/<resource_name>', methods=['DELETE'])
def delete_records(resource_name):
    resource = get_resource(resource_name)
    data = request.get_json(silent=True) or {}
    rows = resource.bulk_delete(data.get('ids'))
    return jsonify({'message': f'{resource.label} deleted successfully', 'data': rows})


# 유입 경로 라벨
@app.route('/api/click-source', methods=['GET'])
def click_source():
    utm_source = request.args.get('utm_source', '').strip()
    if not utm_source:
        return jsonify({'error': 'utm_source is required'}), 400
    label = format_click_source(
        utm_source,
        request.args.get('material_id') or None,
        request.args.get('blog_id') or None,
        request.args.get('cafe_id') or None,
    )
    return jsonify({'click_source': label})


@app.route('/api/course-options', methods=['GET'])
def course_options():
    return jsonify(COURSE_OPTIONS)


# 관리자 대시보드 뷰
def load_state():
    return ViewState.from_dict(session.get('view_state'))


def save_state(state):
    session['view_state'] = state.to_dict()


def load_records(state):
    resource = practice_applications if state.tab == 'practice' else consultations
    return resource.list()


def serialize_view(view, state):
    kind = kind_for_tab(state.tab)
    return {
        'rows': list(view.rows),
        'statuses': [display_status(row, kind) for row in view.rows],
        'total_count': view.total_count,
        'total_pages': view.total_pages,
        'page': view.page,
        'highlights': [
            {name: [{'text': s.text, 'matched': s.matched} for s in segments]
             for name, segments in fields.items()}
            for fields in view.highlights
        ],
        'state': state.to_dict(),
        'can_edit': state.can_edit,
        'can_delete': state.can_delete,
        'can_export': state.can_export,
    }


@app.route('/admin/view', methods=['GET'])
def admin_view():
    state = load_state()
    view = compute_view(load_records(state), state, app.config['PAGE_SIZE'], display_tz())
    return jsonify(serialize_view(view, state))


@app.route('/admin/view', methods=['POST'])
def admin_view_action():
    state = load_state()
    data = request.get_json(silent=True) or {}
    page_size = app.config['PAGE_SIZE']
    tz = display_tz()

    try:
        action = action_from_json(data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    if isinstance(action, ToggleSelectAll) and not action.page_ids:
        current = compute_view(load_records(state), state, page_size, tz)
        action = ToggleSelectAll(tuple(current.page_ids))

    try:
        state = reduce(state, action)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    view = compute_view(load_records(state), state, page_size, tz)
    save_state(state)
    return jsonify(serialize_view(view, state))


@app.route('/admin/export', methods=['GET'])
def admin_export():
    state = load_state()
    kind = kind_for_tab(state.tab)
    tz = display_tz()
    records = load_records(state)
    filtered = filter_records(records, kind, state.filters, state.query, tab=state.tab, tz=tz)
    rows = rows_for_export(records, filtered, state.selected)
    if not rows:
        return jsonify({'error': '다운로드할 데이터가 없습니다.'}), 400

    app.logger.info('CSV 내보내기: %d건', len(rows))
    return send_file(
        BytesIO(to_csv_bytes(rows, kind, tz)),
        mimetype='text/csv; charset=utf-8',
        as_attachment=True,
        download_name=export_filename(kind, len(state.selected)),
    )
