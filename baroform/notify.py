"""Slack incoming-webhook notifications for new applications."""
import logging
from datetime import datetime
from zoneinfo import ZoneInfo

import requests

logger = logging.getLogger(__name__)

KST = ZoneInfo('Asia/Seoul')
MISSING = '미입력'


def format_received_at(moment=None, tz=KST):
    """``2024. 3. 15. 오후 7:05:09`` style timestamp."""
    moment = (moment or datetime.now(tz)).astimezone(tz)
    meridiem = '오전' if moment.hour < 12 else '오후'
    hour = moment.hour % 12 or 12
    return f'{moment.year}. {moment.month}. {moment.day}. {meridiem} {hour}:{moment:%M:%S}'


def _field(label, value):
    return {'type': 'mrkdwn', 'text': f'*{label}:*\n{value or MISSING}'}


def _message(text, header, fields, received_at):
    return {
        'text': text,
        'blocks': [
            {'type': 'header', 'text': {'type': 'plain_text', 'text': header}},
            {'type': 'section', 'fields': fields},
            {
                'type': 'context',
                'elements': [{'type': 'mrkdwn', 'text': f'접수 시간: {received_at}'}],
            },
        ],
    }


def consultation_message(row, manual=False, received_at=None):
    received_at = received_at or format_received_at()
    if manual:
        text, header = '🆕 *관리자가 새로운 상담신청을 추가했습니다*', '🆕 관리자 추가 상담신청'
    else:
        text, header = '📝 *새로운 상담신청이 접수되었습니다*', '📝 새로운 상담신청'
    fields = [
        _field('이름', row.get('name')),
        _field('연락처', row.get('contact')),
        _field('유형', row.get('type')),
        _field('희망과정', row.get('hope_course')),
        _field('유입경로', row.get('click_source')),
    ]
    return _message(text, header, fields, received_at)


def practice_message(row, manual=False, received_at=None):
    received_at = received_at or format_received_at()
    if manual:
        text, header = '🆕 *관리자가 새로운 실습섭외신청서를 추가했습니다*', '🆕 관리자 추가 실습섭외신청서'
    else:
        text, header = '📝 *새로운 실습섭외신청서가 접수되었습니다*', '📝 새로운 실습섭외신청서'
    fields = [
        _field('이름', row.get('student_name')),
        _field('연락처', row.get('contact')),
        _field('주소', row.get('address')),
        _field('실습유형', row.get('practice_type')),
        _field('실습시작일', row.get('practice_start_date')),
        _field('선호요일', row.get('preferred_days')),
    ]
    return _message(text, header, fields, received_at)


class SlackNotifier:
    """Posts formatted messages to a Slack webhook; never raises."""

    def __init__(self, webhook_url=None, timeout=10.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    def is_configured(self):
        return bool(self.webhook_url)

    def send(self, message):
        if not self.is_configured():
            logger.debug('Slack webhook not configured, skipping')
            return False

        logger.info('[SLACK] Slack 알림 전송 시도')
        try:
            response = requests.post(self.webhook_url, json=message, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error('[SLACK] Slack 알림 전송 중 오류: %s', e)
            return False

        if response.ok:
            logger.info('[SLACK] Slack 알림 전송 성공')
            return True
        logger.error('[SLACK] Slack 알림 전송 실패: %s', response.text)
        return False
