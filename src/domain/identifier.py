"""BV号の抽出"""

import re
from urllib.parse import urlsplit

from src.domain.exceptions import InputValidationError

# BV + 英数字ちょうど10文字（前後に英数字が続く場合は不一致）
BVID_PATTERN = re.compile(r"(?<![0-9A-Za-z])BV[0-9A-Za-z]{10}(?![0-9A-Za-z])")
_BVID_EXACT = re.compile(r"BV[0-9A-Za-z]{10}")


def extract_bvid(text: str) -> str | None:
    """
    自由入力からBV号を抽出

    Args:
        text: BV号、動画URL、またはURLの一部

    Returns:
        BV号（例: "BV1xx411c7mD"）、見つからない場合はNone

    Example:
        extract_bvid("https://www.bilibili.com/video/BV1xxxxxxxxx/?p=2")
        → "BV1xxxxxxxxx"
    """
    if not text:
        return None

    # 1. 文字列全体から直接検索
    match = BVID_PATTERN.search(text)
    if match:
        return match.group(0)

    # 2. URLとしてパースしてパスの各セグメントを検査
    try:
        path = urlsplit(text).path
    except ValueError:
        path = ""
    for segment in path.split("/"):
        match = BVID_PATTERN.search(segment)
        if match:
            return match.group(0)

    # 3. 入力そのものがBV号か
    stripped = text.strip()
    if _BVID_EXACT.fullmatch(stripped):
        return stripped

    return None


def require_bvid(text: str) -> str:
    """BV号を抽出し、見つからなければ InputValidationError"""
    if not text or not text.strip():
        raise InputValidationError("BV号または動画リンクを入力してください")
    bvid = extract_bvid(text)
    if bvid is None:
        raise InputValidationError("無効なBV号または動画リンクの形式です")
    return bvid
