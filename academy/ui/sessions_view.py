import logging

import streamlit as st

from academy.config import SESSION_FILTERS
from academy.repositories.sessions_repo import list_sessions
from academy.services.api_client import ApiError
from academy.ui.actions import remove_session, save_new_session, save_session_changes
from academy.ui.state import (
    KEY_SESSION_FILTER,
    KEY_SESSION_FORM,
    QK_SESSIONS,
    QueryCache,
    apply_reset_if_marked,
    clear_pending,
    field_key,
    is_pending,
    mark_pending,
    mark_reset,
)
from academy.utils.session_progress import now_utc, to_input_date

logger = logging.getLogger(__name__)

_FILTER_LABELS = {
    "all": "All Sessions",
    "active": "Active",
    "upcoming": "Upcoming",
    "completed": "Completed",
}

_FORM_DEFAULTS = {"name": "", "description": "", "start": None, "end": None}
_CREATE_ACTION = "create_session"


def _render_card(s, now) -> None:
    style = s.style
    with st.container(border=True):
        top_l, top_r = st.columns([3, 2])
        with top_l:
            st.caption(s.session_id or "—")
            st.markdown(f"### {s.name}")
        with top_r:
            st.markdown(f":{style['color']}[{style['icon']} **{style['label']}**]")

        if s.description:
            st.write(s.description)
        st.write(f"📅 {s.date_range()}")

        c1, c2 = st.columns(2)
        c1.write(f"🕒 {s.duration_days} days total")
        if s.status == "active":
            c2.write(f"📈 {s.days_remaining(now)} days left")

        if s.status in ("active", "completed"):
            progress = s.progress(now)
            st.progress(progress, text=f"Progress {progress}%")


def _render_create(cache: QueryCache) -> None:
    apply_reset_if_marked(KEY_SESSION_FORM, _FORM_DEFAULTS)
    with st.expander("➕ New Session"):
        name = st.text_input("Session name *", key=field_key(KEY_SESSION_FORM, "name"))
        description = st.text_area("Description", key=field_key(KEY_SESSION_FORM, "description"))
        c1, c2 = st.columns(2)
        with c1:
            start = st.date_input("Start date *", value=None, key=field_key(KEY_SESSION_FORM, "start"))
        with c2:
            end = st.date_input("End date *", value=None, key=field_key(KEY_SESSION_FORM, "end"))

        pending = is_pending(_CREATE_ACTION)
        st.button(
            "Creating..." if pending else "Create session",
            type="primary",
            disabled=pending,
            on_click=mark_pending,
            args=(_CREATE_ACTION,),
            key="create_session_btn",
        )
        if not pending:
            return
        try:
            with st.spinner("Creating..."):
                result = save_new_session(cache, name, description, start, end)
        finally:
            clear_pending(_CREATE_ACTION)
        if not result.ok:
            st.toast(result.message, icon="❌")
            return
        st.toast(result.message, icon="✅")
        mark_reset(KEY_SESSION_FORM)
        st.rerun()


def _render_edit(cache: QueryCache, sessions: list) -> None:
    if not sessions:
        return
    with st.expander("✏️ Edit or delete a session"):
        by_id = {s.id: s for s in sessions}
        sid = st.selectbox(
            "Session",
            list(by_id),
            format_func=lambda i: f"{by_id[i].name} ({by_id[i].session_id})",
            key="edit_session_id",
        )
        s = by_id[sid]
        name = st.text_input("Session name", value=s.name, key=f"edit_name_{sid}")
        description = st.text_area("Description", value=s.description, key=f"edit_desc_{sid}")
        c1, c2 = st.columns(2)
        with c1:
            start = st.date_input("Start date", value=to_input_date(s.start_date), key=f"edit_start_{sid}")
        with c2:
            end = st.date_input("End date", value=to_input_date(s.end_date), key=f"edit_end_{sid}")

        b1, b2, _ = st.columns([2, 2, 5])
        with b1:
            save = st.button("Save changes", type="primary", key=f"save_session_{sid}")
        with b2:
            confirm = st.checkbox("Confirm delete", key=f"confirm_delete_{sid}")
            remove = st.button("Delete", disabled=not confirm, key=f"delete_session_{sid}")

        result = None
        if save:
            with st.spinner("Saving..."):
                result = save_session_changes(cache, sid, name, description, start, end)
        elif remove:
            with st.spinner("Deleting..."):
                result = remove_session(cache, sid)
        if result is None:
            return
        if not result.ok:
            st.toast(result.message, icon="❌")
            return
        st.toast(result.message, icon="🗑️" if remove else "✅")
        st.rerun()


def render_sessions(cache: QueryCache) -> None:
    st.header("Academic Sessions")

    status = st.selectbox(
        "Filter by status",
        SESSION_FILTERS,
        format_func=lambda v: _FILTER_LABELS.get(v, v),
        key=KEY_SESSION_FILTER,
    )

    try:
        sessions = cache.fetch(QK_SESSIONS + (status,), lambda: list_sessions(status))
    except ApiError as e:
        logger.warning("Loading sessions failed: %s", e)
        st.error("Error loading sessions. Please try again.")
        return

    active = sum(1 for s in sessions if s.status == "active")
    upcoming = sum(1 for s in sessions if s.status == "upcoming")
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Sessions", len(sessions))
    c2.metric("Active", active)
    c3.metric("Upcoming", upcoming)

    _render_create(cache)
    _render_edit(cache, sessions)

    if not sessions:
        st.info("No sessions found. Create your first academic session!")
        return

    now = now_utc()
    cols = st.columns(3)
    for i, s in enumerate(sessions):
        with cols[i % 3]:
            _render_card(s, now)
