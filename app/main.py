"""Streamlit アプリケーションエントリーポイント"""

import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# .envファイルを最初に読み込む
from dotenv import load_dotenv
load_dotenv(project_root / ".env")

import streamlit as st

from config.settings import get_settings
from src.application.usecases.duration_session import (
    DurationSession,
    DurationSessionConfig,
)
from src.domain.entities import InputFocus, SessionSnapshot
from src.domain.exceptions import PartsDurationError
from src.domain.time_utils import format_duration
from src.infrastructure.bilibili_api import BilibiliPageListClient
from src.infrastructure.logging_config import get_logger, parse_log_level, setup_logging
from src.infrastructure.timer_slot import ThreadingTimerSlot

# ロギング初期化
setup_logging(level=parse_log_level(get_settings().LOG_LEVEL))

logger = get_logger(__name__)

SESSION_KEY = "duration_session"
# トースト領域の再描画間隔（秒）。タイマーで消えたトーストを画面からも消す
TOAST_REFRESH_SEC = 0.5

# クリック対象ラジオの表示名
FOCUS_LABELS = {
    InputFocus.NONE: "なし（2クリックで範囲指定）",
    InputFocus.FROM: "開始P",
    InputFocus.TO: "終了P",
}


def init_session() -> DurationSession:
    """DIでセッションを組み立て"""
    settings = get_settings()

    return DurationSession(
        part_fetcher=BilibiliPageListClient(
            base_url=settings.BILIBILI_API_BASE_URL,
            timeout=settings.API_TIMEOUT,
            user_agent=settings.USER_AGENT,
            debug=settings.DEBUG,
        ),
        timer_factory=ThreadingTimerSlot,
        config=DurationSessionConfig(
            toast_duration_sec=settings.TOAST_DURATION_SEC,
            blur_grace_sec=settings.BLUR_GRACE_SEC,
        ),
    )


def get_session() -> DurationSession:
    """ブラウザセッションごとの DurationSession を取得"""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = init_session()
    return st.session_state[SESSION_KEY]


def sync_inputs(session: DurationSession) -> None:
    """確定済みの値を入力欄に反映（コールバック内でのみ呼ぶ）"""
    snapshot = session.snapshot()
    st.session_state.from_input = snapshot.from_input
    st.session_state.to_input = snapshot.to_input
    st.session_state.speed_input = snapshot.speed_input


# ----------------------------------------------------------------------
# UIイベント
# ----------------------------------------------------------------------


def on_search() -> None:
    session = get_session()
    query = st.session_state.get("search_input", "")
    logger.info(f"[APP] 検索リクエスト: {query!r}")
    try:
        session.search(query)
    except PartsDurationError as e:
        # エラーメッセージはセッションに記録済み
        logger.info(f"[APP] 検索失敗: {e}")
    sync_inputs(session)


def on_from_change() -> None:
    session = get_session()
    session.set_from(st.session_state.from_input)
    session.commit_from()
    sync_inputs(session)


def on_to_change() -> None:
    session = get_session()
    session.set_to(st.session_state.to_input)
    session.commit_to()
    sync_inputs(session)


def on_speed_change() -> None:
    session = get_session()
    session.set_speed(st.session_state.speed_input)
    session.commit_speed()
    sync_inputs(session)


def on_focus_change() -> None:
    session = get_session()
    target = st.session_state.click_target
    if target == InputFocus.NONE:
        session.blur()
    else:
        session.focus_on(target)
    sync_inputs(session)


def on_part_click(index: int) -> None:
    session = get_session()
    session.handle_part_click(index)
    sync_inputs(session)


# ----------------------------------------------------------------------
# 描画
# ----------------------------------------------------------------------


def render_controls(snapshot: SessionSnapshot) -> None:
    """開始P・終了P・倍速の入力欄"""
    for key, value in (
        ("from_input", snapshot.from_input),
        ("to_input", snapshot.to_input),
        ("speed_input", snapshot.speed_input),
    ):
        if key not in st.session_state:
            st.session_state[key] = value

    col1, col2, col3 = st.columns(3)
    with col1:
        st.text_input("開始P", key="from_input", on_change=on_from_change)
    with col2:
        st.text_input("終了P", key="to_input", on_change=on_to_change)
    with col3:
        st.text_input("倍速", key="speed_input", on_change=on_speed_change)

    st.radio(
        "🖱️ リストクリックで更新する対象",
        options=list(FOCUS_LABELS),
        format_func=lambda focus: FOCUS_LABELS[focus],
        key="click_target",
        horizontal=True,
        on_change=on_focus_change,
    )


@st.fragment(run_every=TOAST_REFRESH_SEC)
def render_toast() -> None:
    """トースト表示（定期的に再描画し、自動消去を反映する）"""
    message = get_session().toast_message
    if message:
        st.info(message)


def render_parts(snapshot: SessionSnapshot) -> None:
    """分Pリストと合計時長"""
    st.subheader(f"📺 分Pリスト（全{len(snapshot.parts)}P）")

    for index, part in enumerate(snapshot.parts):
        label = f"P{part.page}: {part.title}　{format_duration(part.duration)}"
        st.button(
            label,
            key=f"part_{part.cid}_{index}",
            on_click=on_part_click,
            args=(index,),
            type="primary" if snapshot.is_selected(index) else "secondary",
            width="stretch",
        )

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        st.metric(
            f"合計時長（P{snapshot.from_page}-P{snapshot.to_page}）",
            format_duration(snapshot.total_duration),
        )
    with col2:
        st.metric(
            f"調整後の合計時長（{snapshot.speed:g}倍速）",
            format_duration(snapshot.adjusted_total_duration),
        )


def main() -> None:
    """Streamlitアプリケーションのメイン関数"""
    st.set_page_config(
        page_title="Bilibili 多P時長計算器",
        page_icon="⏱️",
    )

    session = get_session()

    st.title("⏱️ Bilibili 多P時長計算器")
    st.markdown("BV号または動画リンクを入力して、指定した分Pの合計時長を計算します")

    # 検索フォーム
    col_input, col_button = st.columns([4, 1])
    with col_input:
        query = st.text_input(
            "BV号または動画リンク",
            key="search_input",
            placeholder="例: BV1xx411c7mD または https://www.bilibili.com/video/BV1xx411c7mD",
        )
    with col_button:
        st.button(
            "🔎 検索",
            on_click=on_search,
            disabled=session.is_loading or not query.strip(),
            width="stretch",
        )

    snapshot = session.snapshot()

    render_controls(snapshot)

    render_toast()

    if snapshot.has_parts:
        render_parts(snapshot)
    elif snapshot.error_message:
        st.error(snapshot.error_message)
    else:
        st.caption("BV号またはリンクを入力して検索してください")


if __name__ == "__main__":
    main()
