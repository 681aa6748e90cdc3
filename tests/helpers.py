"""Shared builders for engine-level tests."""


def make_rows(count, **fields):
    """Plain consultation dicts, oldest first, ids starting at 1."""
    rows = []
    for i in range(1, count + 1):
        row = {
            "id": i,
            "name": f"학생{i}",
            "contact": f"010-{i:04d}-5678",
            "type": "consultation",
            "status": "상담대기",
            "student_status": "상담대기",
            "manager": None,
            "memo": None,
            "created_at": "2024-03-15T10:00:00Z",
        }
        row.update(fields)
        rows.append(row)
    return rows
