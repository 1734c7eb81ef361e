# academy/ui/state.py
import logging
from typing import Any, Callable, MutableMapping, Optional

import streamlit as st

logger = logging.getLogger(__name__)

# Centralize keys to avoid typos across files
KEY_QUERY_CACHE = "_query_cache"
KEY_RESET_PREFIX = "_do_reset_"
KEY_PENDING_PREFIX = "_pending_"

KEY_SESSION_FILTER = "session_status_filter"
KEY_SESSION_FORM = "session_form"

KEY_PAYOUT_AMOUNT = "payout_amount"
KEY_PAYOUT_NOTES = "payout_notes"
KEY_CREDIT_AMOUNT = "credit_amount"
KEY_CREDIT_NOTE = "credit_note"
KEY_FEE_AMOUNT = "fee_amount"
KEY_FEE_MONTH = "fee_month"
KEY_FEE_RESULT = "fee_result"
KEY_LAST_VOUCHER = "last_voucher"

KEY_KIOSK_FORM = "kiosk"
KEY_PUBLIC_FORM = "public"
KEY_REGISTRATION_RESULT_PREFIX = "registration_result_"

KEY_SELECTED_SEAT = "selected_seat_id"
KEY_ADMIN_SEAT_CLASS = "admin_seat_class"
KEY_ADMIN_GRID = "admin_grid"

# Query keys shared by every view that reads the same list
QK_CLASSES = ("classes",)
QK_SESSIONS = ("sessions",)
QK_ALL_SESSIONS = ("sessions", "all")
QK_STUDENTS = ("students",)
QK_SEATS = ("seats",)
QK_ADMIN_SEATS = ("admin-seats",)
QK_PAYROLL = ("payroll-dashboard",)


def _store() -> MutableMapping:
    return st.session_state


class QueryCache:
    """
    Per-user cache of backend reads, keyed by tuples such as
    ("sessions", "active"). Mutations invalidate by key prefix so the next
    rerun fetches again.
    """

    def __init__(self, store: Optional[MutableMapping] = None):
        store = _store() if store is None else store
        self._entries = store.setdefault(KEY_QUERY_CACHE, {})

    def fetch(self, key: tuple, loader: Callable[[], Any]) -> Any:
        if key in self._entries:
            return self._entries[key]
        value = loader()
        self._entries[key] = value
        return value

    def invalidate(self, prefix: tuple) -> int:
        n = len(prefix)
        stale = [k for k in self._entries if k[:n] == prefix]
        for k in stale:
            del self._entries[k]
        logger.debug("Invalidated %d cached queries under %s", len(stale), prefix)
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


def field_key(form: str, name: str) -> str:
    return f"{form}_{name}"


def mark_reset(form: str) -> None:
    st.session_state[KEY_RESET_PREFIX + form] = True


def apply_reset_if_marked(form: str, defaults: dict) -> None:
    """
    Reset-on-next-run pattern: call at the top of the form BEFORE creating
    widgets, since Streamlit refuses writes to a widget key once rendered.
    """
    flag = KEY_RESET_PREFIX + form
    if st.session_state.get(flag):
        for name, value in defaults.items():
            st.session_state[field_key(form, name)] = value
        st.session_state[flag] = False


def registration_result_key(form: str) -> str:
    return KEY_REGISTRATION_RESULT_PREFIX + form


# A submit button marks its action pending from on_click. The rerun that
# follows renders the button disabled, then performs the request.
def mark_pending(action: str) -> None:
    st.session_state[KEY_PENDING_PREFIX + action] = True


def is_pending(action: str) -> bool:
    return bool(st.session_state.get(KEY_PENDING_PREFIX + action))


def clear_pending(action: str) -> None:
    st.session_state.pop(KEY_PENDING_PREFIX + action, None)
