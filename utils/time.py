# utils/time.py
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

KST = ZoneInfo("Asia/Seoul")
KST_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_kst() -> datetime:
    return datetime.now(KST)


# ── 날짜 포맷(KST) ─────────────────────────────────────────
def format_kst(dt: Optional[datetime] = None, out_fmt: str = KST_FORMAT) -> str:
    """
    datetime 을 Asia/Seoul 기준 문자열로 변환.
    - None 이면 현재 시각
    - TZ 없는 값은 UTC로 가정
    """
    if dt is None:
        return now_kst().strftime(out_fmt)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(KST).strftime(out_fmt)


def format_duration(milliseconds: float) -> str:
    if milliseconds >= 1000:
        return f"{milliseconds / 1000:.1f}s"
    return f"{round(milliseconds)}ms"


def format_uptime(seconds: float) -> str:
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
