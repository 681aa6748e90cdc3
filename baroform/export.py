"""CSV export of consultation and practice rows."""
import csv
from datetime import date, timezone

import pandas as pd

from baroform.engine import PRACTICE, parse_timestamp

# UTF-8 BOM, 엑셀에서 한글 깨짐 방지
CSV_ENCODING = 'utf-8-sig'


def format_date(value, tz=timezone.utc):
    """``2024. 03. 15. 오후 07:00`` in ``tz``; empty string when unparseable."""
    moment = parse_timestamp(value)
    if moment is None:
        return ''
    moment = moment.astimezone(tz)
    meridiem = '오전' if moment.hour < 12 else '오후'
    hour = moment.hour % 12 or 12
    return f'{moment:%Y. %m. %d.} {meridiem} {hour:02d}:{moment:%M}'


CONSULTATION_COLUMNS = [
    ('이름', lambda row, tz: row.get('name')),
    ('연락처', lambda row, tz: row.get('contact')),
    ('최종학력', lambda row, tz: row.get('education')),
    ('취득사유', lambda row, tz: row.get('reason')),
    ('유입 경로', lambda row, tz: row.get('click_source')),
    ('메모', lambda row, tz: row.get('memo')),
    ('신청일시', lambda row, tz: format_date(row.get('created_at'), tz)),
    ('상태', lambda row, tz: row.get('status') or '상담대기중'),
]

PRACTICE_COLUMNS = [
    ('이름', lambda row, tz: row.get('student_name')),
    ('성별', lambda row, tz: row.get('gender')),
    ('연락처', lambda row, tz: row.get('contact')),
    ('생년월일', lambda row, tz: row.get('birth_date')),
    ('거주지역', lambda row, tz: row.get('residence_area')),
    ('주소', lambda row, tz: row.get('address')),
    ('실습시작일', lambda row, tz: row.get('practice_start_date')),
    ('성적표발급일', lambda row, tz: row.get('grade_report_date')),
    ('희망학기', lambda row, tz: row.get('preferred_semester')),
    ('실습유형', lambda row, tz: row.get('practice_type')),
    ('희망요일', lambda row, tz: row.get('preferred_days')),
    ('자차여부', lambda row, tz: 'O' if row.get('has_car') else 'X'),
    ('실습처', lambda row, tz: row.get('practice_place')),
    ('유입 경로', lambda row, tz: row.get('click_source')),
    ('메모', lambda row, tz: row.get('memo')),
    ('신청일시', lambda row, tz: format_date(row.get('created_at'), tz)),
    ('상태', lambda row, tz: row.get('status') or 'pending'),
]


def rows_for_export(records, filtered, selected):
    """Selected rows when anything is selected, the filtered rows otherwise."""
    if selected:
        return [row for row in records if row.get('id') in selected]
    return list(filtered)


def to_dataframe(rows, kind, tz=timezone.utc):
    columns = PRACTICE_COLUMNS if kind is PRACTICE else CONSULTATION_COLUMNS
    data = [[getter(row, tz) or '' for _, getter in columns] for row in rows]
    return pd.DataFrame(data, columns=[header for header, _ in columns])


def to_csv_bytes(rows, kind, tz=timezone.utc):
    df = to_dataframe(rows, kind, tz)
    content = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator='\n')
    return content.encode(CSV_ENCODING)


def export_filename(kind, selected_count=0, today=None):
    today = today or date.today()
    label = '실습섭외신청서' if kind is PRACTICE else '상담신청'
    if selected_count:
        return f'{label}_선택{selected_count}건_{today.isoformat()}.csv'
    return f'{label}_{today.isoformat()}.csv'
