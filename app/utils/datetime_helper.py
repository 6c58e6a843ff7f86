"""日付処理のヘルパー関数"""
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    タスクの日付値をdateに変換（時刻は切り捨て）

    Args:
        value: ISO 8601文字列 / date / datetime / None

    Returns:
        date。値がない、または不正な形式の場合はNone
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # "2024-06-15T10:00:00Z" の "Z" は fromisoformat が古いPythonで扱えない
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def today() -> date:
    """現在の日付（ローカル時刻）"""
    return date.today()


def format_date(value: DateLike) -> str:
    """
    日付を "dd/mm/yyyy" 形式に変換

    Returns:
        str: 変換後の文字列。日付がない、または不正な場合は空文字
    """
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year}"


def overdue_days(end_date: DateLike, closed: bool, reference: Optional[date] = None) -> int:
    """
    期限超過日数を計算

    Args:
        end_date: タスクの終了日
        closed: Done / Cancelled の場合True（超過扱いしない）
        reference: 基準日（省略時は今日）

    Returns:
        int: 超過日数。期限内・終了日なし・完了済みは0
    """
    end = parse_date(end_date)
    if end is None or closed:
        return 0
    reference = reference or today()
    diff = (reference - end).days
    return diff if diff > 0 else 0
