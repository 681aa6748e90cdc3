"""Helpers behind the public application form."""
import re

HOMEPAGE_NAME = '바로폼'

SOURCE_NAMES = {
    'daangn': '당근',
    'insta': '인스타',
    'facebook': '페이스북',
    'google': '구글',
    'youtube': '유튜브',
    'kakao': '카카오',
    'naver': '네이버',
    'naverblog': '네이버블로그',
    'toss': '토스',
    'mamcafe': '맘카페',
}

COURSE_OPTIONS = [
    '사회복지사',
    '아동학사',
    '평생교육사',
    '편입/대학원',
    '건강가정사',
    '청소년지도사',
    '보육교사',
    '심리상담사',
]

MIN_CONTACT_LENGTH = 10


def digits_only(value):
    return re.sub(r'[^0-9]', '', value or '')


def format_contact(value):
    """Format a phone number as the user types it: 010-XXXX-XXXX."""
    numbers = digits_only(value)
    if len(numbers) <= 3:
        return numbers
    if len(numbers) <= 7:
        return f'{numbers[:3]}-{numbers[3:]}'
    return f'{numbers[:3]}-{numbers[3:7]}-{numbers[7:11]}'


def validate_contact(contact):
    """Return an error message for ``contact``, or None when it is acceptable."""
    cleaned = re.sub(r'[-\s]', '', contact or '')
    if not cleaned:
        return None
    if not cleaned.startswith(('010', '011')):
        return '010 또는 011로 시작하는 번호를 입력해주세요'
    return None


def _contact_complete(contact):
    cleaned = re.sub(r'[-\s]', '', contact or '')
    return len(cleaned) >= MIN_CONTACT_LENGTH and validate_contact(contact) is None


def is_form_valid(name, contact, privacy_agreed):
    # 성함, 연락처, 개인정보 동의는 필수
    return bool(name) and _contact_complete(contact) and bool(privacy_agreed)


def format_click_source(utm_source, material_id=None, blog_id=None, cafe_id=None):
    short_source = SOURCE_NAMES.get(utm_source, utm_source)
    if blog_id:
        return f'{HOMEPAGE_NAME}_{short_source}_{blog_id}'
    if cafe_id:
        return f'{HOMEPAGE_NAME}_{short_source}_{cafe_id}'
    if material_id:
        return f'{HOMEPAGE_NAME}_{short_source}_소재_{material_id}'
    return f'{HOMEPAGE_NAME}_{short_source}'


def join_courses(selected, custom=''):
    courses = list(selected)
    if custom and custom.strip():
        courses.append(custom.strip())
    return ', '.join(courses)
