"""서비스 요청 진행 타임라인 계산.

Status timeline derivation over the four lifecycle timestamps
(created_at, working_at, completed_at, canceled_at).
"""

from collections.abc import Sequence
from datetime import datetime

from app.constants import STATUS_CANCELED, TIMELINE_LABELS
from app.utils.format import format_step_date, format_step_time

CANCELED_INDEX: int = 3


def derive_step_index(status: str, timestamps: Sequence[datetime | None]) -> int:
    """현재 단계 인덱스를 계산합니다.

    Canceled always maps to index 3. Otherwise the highest index whose
    timestamp is set wins; -1 when none are set.

    Args:
        status: 요청 상태 (Korean status literal)
        timestamps: [created_at, working_at, completed_at, canceled_at]

    Returns:
        int: 0..3 또는 -1
    """
    if status == STATUS_CANCELED:
        return CANCELED_INDEX
    active: int = -1
    for index, value in enumerate(timestamps):
        if value is not None:
            active = index
    return active


def build_steps(status: str, timestamps: Sequence[datetime | None]) -> dict:
    """타임라인 응답을 생성합니다.

    Build the timeline payload: active index plus one entry per step with
    its label, local "MM/DD" date, "HH:MM" time, and completed/current flags.
    """
    active: int = derive_step_index(status, timestamps)
    steps: list[dict] = []
    for index, (label, value) in enumerate(zip(TIMELINE_LABELS, timestamps)):
        steps.append({
            "label": label,
            "date": format_step_date(value) if value else None,
            "time": format_step_time(value) if value else None,
            "completed": value is not None,
            "current": index == active,
        })
    return {"active_index": active, "steps": steps}
