"""时间间隔字符串解析."""

import re

# 只接受非负整数 + 区分大小写的单位
_DURATION_PATTERN = re.compile(r"(\d+)(ms|s|m|h)", re.ASCII)

_UNIT_MILLISECONDS = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
}


class InvalidDurationFormat(ValueError):
    """时间间隔格式错误."""


def parse_duration(value: str) -> int:
    """
    将 "1s" / "5m" / "2h" / "1000ms" 形式的字符串解析为毫秒数.

    Args:
        value: 时间间隔字符串

    Returns:
        毫秒数

    Raises:
        InvalidDurationFormat: 格式不匹配或单位未知
    """
    match = _DURATION_PATTERN.fullmatch(value)
    if not match:
        msg = f"无效的时间间隔: {value!r}，示例: 1s, 1m, 1h, 500ms"
        raise InvalidDurationFormat(msg)

    amount, unit = match.groups()
    multiplier = _UNIT_MILLISECONDS.get(unit)
    if multiplier is None:
        msg = f"未知的时间单位: {unit}"
        raise InvalidDurationFormat(msg)

    return int(amount) * multiplier


def format_duration(milliseconds: int) -> str:
    """毫秒数转为可读格式，如 90000 -> "1m30s"."""
    if milliseconds < 1000:
        return f"{milliseconds}ms"

    seconds = milliseconds // 1000
    minutes, remaining_seconds = divmod(seconds, 60)
    if minutes > 0:
        return f"{minutes}m{remaining_seconds}s"
    return f"{remaining_seconds}s"
