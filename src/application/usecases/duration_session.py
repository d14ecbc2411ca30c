"""メインユースケース: 分P範囲の選択と合計時長の計算"""

import threading
from dataclasses import dataclass
from typing import Callable

from src.application.interfaces.part_fetcher import PartFetcher
from src.application.interfaces.timer_slot import TimerSlot
from src.domain.entities import (
    DEFAULT_SPEED,
    DerivedDurations,
    InputFocus,
    Part,
    SelectionWindow,
    SessionSnapshot,
)
from src.domain.exceptions import (
    EmptyResultError,
    InputValidationError,
    RangeConstraintViolation,
    SearchInProgressError,
    UpstreamError,
)
from src.domain.identifier import require_bvid
from src.domain.selection import (
    commit_from,
    commit_speed,
    commit_to,
    compute_durations,
    select_by_click,
)
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class DurationSessionConfig:
    """セッションの設定"""

    toast_duration_sec: float = 3.0  # トースト自動消去までの時間
    blur_grace_sec: float = 0.2  # フォーカス喪失の猶予


def _format_speed(speed: float) -> str:
    return f"{speed:g}"


class DurationSession:
    """
    1ユーザー分の分P選択セッション

    状態: 分Pリスト、選択範囲、倍速、入力中テキスト、フォーカス、トースト。
    合計時長は保持せず snapshot() のたびに compute_durations で再計算する。
    タイマー（トースト消去・フォーカス喪失猶予）は種類ごとに1つだけ保留し、
    close() ですべて取り消す。
    """

    def __init__(
        self,
        part_fetcher: PartFetcher,
        timer_factory: Callable[[], TimerSlot],
        config: DurationSessionConfig | None = None,
    ):
        self.part_fetcher = part_fetcher
        self.config = config or DurationSessionConfig()

        # タイマースレッドからのコールバックと競合しないようにする
        self._lock = threading.RLock()
        self._toast_timer = timer_factory()
        self._blur_timer = timer_factory()

        self._parts: list[Part] = []
        self._window = SelectionWindow()
        self._speed = DEFAULT_SPEED
        self._from_input = "1"
        self._to_input = "1"
        self._speed_input = _format_speed(DEFAULT_SPEED)
        self._focus = InputFocus.NONE
        self._is_loading = False
        self._error_message: str | None = None
        self._toast_message: str | None = None
        self._toast_seq = 0
        self._closed = False

    # ------------------------------------------------------------------
    # 状態参照
    # ------------------------------------------------------------------

    @property
    def parts(self) -> list[Part]:
        with self._lock:
            return list(self._parts)

    @property
    def window(self) -> SelectionWindow:
        with self._lock:
            return self._window

    @property
    def speed(self) -> float:
        with self._lock:
            return self._speed

    @property
    def focus(self) -> InputFocus:
        with self._lock:
            return self._focus

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._is_loading

    @property
    def toast_message(self) -> str | None:
        with self._lock:
            return self._toast_message

    @property
    def error_message(self) -> str | None:
        with self._lock:
            return self._error_message

    def durations(self) -> DerivedDurations:
        """現在の入力から合計時長を計算"""
        with self._lock:
            if not self._parts:
                return DerivedDurations(total=0, adjusted=0.0)
            return compute_durations(
                self._parts,
                self._window.from_page,
                self._window.to_page,
                self._speed,
            )

    def snapshot(self) -> SessionSnapshot:
        """UI描画用のスナップショット"""
        with self._lock:
            durations = self.durations()
            return SessionSnapshot(
                parts=tuple(self._parts),
                from_page=self._window.from_page,
                to_page=self._window.to_page,
                speed=self._speed,
                from_input=self._from_input,
                to_input=self._to_input,
                speed_input=self._speed_input,
                focus=self._focus,
                total_duration=durations.total,
                adjusted_total_duration=durations.adjusted,
                is_loading=self._is_loading,
                error_message=self._error_message,
                toast_message=self._toast_message,
            )

    # ------------------------------------------------------------------
    # 検索
    # ------------------------------------------------------------------

    def search(self, raw_input: str) -> list[Part]:
        """
        入力からBV号を抽出して分Pリストを取得・反映

        Args:
            raw_input: BV号または動画リンク

        Returns:
            読み込んだ分Pリスト

        Raises:
            SearchInProgressError: 別の検索が処理中
            InputValidationError: BV号を抽出できない（上流APIは呼ばない）
            UpstreamError: 取得失敗（EmptyResultError を含む）
        """
        with self._lock:
            if self._is_loading:
                raise SearchInProgressError("検索処理中です")
            self._is_loading = True
            self._error_message = None
            self._parts = []
            self._set_window(SelectionWindow())

        try:
            bvid = require_bvid(raw_input)
            logger.info(f"[Session] 検索開始: {bvid}")
            fetched = self.part_fetcher.fetch_parts(bvid)
            self.load_parts(fetched)
            logger.info(f"[Session] {len(fetched)}件の分Pを読み込み")
            return list(fetched)
        except InputValidationError as e:
            logger.info(f"[Session] 入力エラー: {e} (input={raw_input!r})")
            self._fail(str(e))
            raise
        except UpstreamError as e:
            logger.warning(f"[Session] 取得失敗: {e}")
            self._fail(str(e))
            raise
        finally:
            with self._lock:
                self._is_loading = False

    def _fail(self, message: str) -> None:
        with self._lock:
            self._error_message = message
            self._parts = []
            self._set_window(SelectionWindow())

    # ------------------------------------------------------------------
    # 分P・範囲・倍速の更新
    # ------------------------------------------------------------------

    def load_parts(self, new_parts: list[Part]) -> None:
        """
        分Pリストを丸ごと置き換え、全選択にする

        Raises:
            EmptyResultError: 分Pが0件（状態は変更しない）
        """
        if not new_parts:
            raise EmptyResultError()
        with self._lock:
            self._parts = list(new_parts)
            self._set_window(SelectionWindow.select_all(len(self._parts)))

    def set_from(self, raw: str) -> None:
        """開始P入力（確定は commit_from）"""
        with self._lock:
            self._from_input = raw

    def set_to(self, raw: str) -> None:
        """終了P入力（確定は commit_to）"""
        with self._lock:
            self._to_input = raw

    def set_speed(self, raw: str) -> None:
        """倍速入力（確定は commit_speed）"""
        with self._lock:
            self._speed_input = raw

    def commit_from(self) -> int:
        """開始P入力を確定。終了Pが下回る場合は開始Pに揃える"""
        with self._lock:
            new_from = commit_from(self._from_input, len(self._parts))
            new_to = max(self._window.to_page, new_from)
            self._set_window(SelectionWindow(from_page=new_from, to_page=new_to))
            return new_from

    def commit_to(self) -> int:
        """終了P入力を確定"""
        with self._lock:
            new_to = commit_to(
                self._to_input, self._window.from_page, len(self._parts)
            )
            self._set_window(
                SelectionWindow(from_page=self._window.from_page, to_page=new_to)
            )
            return new_to

    def commit_speed(self) -> float:
        """倍速入力を確定"""
        with self._lock:
            self._speed = commit_speed(self._speed_input)
            self._speed_input = _format_speed(self._speed)
            return self._speed

    def _set_window(self, window: SelectionWindow) -> None:
        self._window = window
        self._from_input = str(window.from_page)
        self._to_input = str(window.to_page)

    # ------------------------------------------------------------------
    # クリック選択とフォーカス
    # ------------------------------------------------------------------

    def handle_part_click(self, index: int) -> bool:
        """
        分Pリストのクリックで選択範囲を更新

        Args:
            index: クリックされた分Pの0始まり index

        Returns:
            範囲が変化した場合 True（拒否・変化なしは False）
        """
        with self._lock:
            if not 0 <= index < len(self._parts):
                raise IndexError(f"part index out of range: {index}")

            focus = self._focus
            try:
                new_window = select_by_click(self._window, index, focus)
            except RangeConstraintViolation as e:
                self.show_toast(str(e))
                return False

            if new_window == self._window:
                return False

            self._set_window(new_window)
            self.show_toast(self._click_message(focus, new_window))
            return True

    @staticmethod
    def _click_message(focus: InputFocus, window: SelectionWindow) -> str:
        if focus is InputFocus.FROM:
            return f"開始PをP{window.from_page}に設定しました"
        if focus is InputFocus.TO:
            return f"終了PをP{window.to_page}に設定しました"
        if window.is_single:
            return f"P{window.from_page}を選択しました"
        return f"P{window.from_page}〜P{window.to_page}を選択しました"

    def focus_on(self, target: InputFocus) -> None:
        """入力欄のフォーカス。保留中のフォーカス喪失は取り消す"""
        with self._lock:
            self._blur_timer.cancel()
            self._focus = target

    def blur(self) -> None:
        """
        入力欄のフォーカス喪失

        フォーカス中の欄を確定し、猶予後にフォーカスを NONE に戻す。
        猶予中のクリックは直前のフォーカスで判定される。
        """
        with self._lock:
            if self._closed:
                return
            if self._focus is InputFocus.FROM:
                self.commit_from()
            elif self._focus is InputFocus.TO:
                self.commit_to()
            self._blur_timer.start(self.config.blur_grace_sec, self._clear_focus)

    def _clear_focus(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._focus = InputFocus.NONE

    # ------------------------------------------------------------------
    # トースト
    # ------------------------------------------------------------------

    def show_toast(self, message: str) -> None:
        """トーストを表示（直前のトーストと消去タイマーを置き換える）"""
        with self._lock:
            if self._closed:
                return
            self._toast_seq += 1
            seq = self._toast_seq
            self._toast_message = message
            self._toast_timer.start(
                self.config.toast_duration_sec,
                lambda: self._expire_toast(seq),
            )

    def dismiss_toast(self) -> None:
        with self._lock:
            self._toast_timer.cancel()
            self._toast_message = None

    def _expire_toast(self, seq: int) -> None:
        with self._lock:
            if self._closed:
                return
            # 後から表示されたトーストは消さない
            if seq == self._toast_seq:
                self._toast_message = None

    # ------------------------------------------------------------------
    # 終了処理
    # ------------------------------------------------------------------

    def close(self) -> None:
        """保留中のタイマーをすべて取り消す。以降はタイマーを開始しない"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._toast_timer.cancel()
            self._blur_timer.cancel()

    def __enter__(self) -> "DurationSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
