import pandas as pd
import streamlit as st

from academy.repositories.classes_repo import class_options, list_classes
from academy.repositories.seats_repo import get_admin_seats, get_seats
from academy.repositories.sessions_repo import list_sessions
from academy.services.api_client import ApiError
from academy.services.local_store import LocalStore
from academy.ui.actions import book, release, set_reservation, start_seat_layout, vacate
from academy.ui.seat_selection import (
    SeatSelectionController,
    can_release,
    check_seat_click,
    grid_stats,
    remaining_changes,
    seat_admin_action,
    seat_glyph,
    seat_layout_status,
)
from academy.ui.state import (
    KEY_ADMIN_GRID,
    KEY_ADMIN_SEAT_CLASS,
    KEY_SELECTED_SEAT,
    QK_ADMIN_SEATS,
    QK_ALL_SESSIONS,
    QK_CLASSES,
    QK_SEATS,
    QueryCache,
)

_LEVEL_ICONS = {"info": "ℹ️", "warning": "⚠️", "error": "🚫"}


# -----------------------------
# Student: pick your own seat
# -----------------------------
def _render_student_card(ctrl: SeatSelectionController) -> None:
    info = ctrl.student_info
    wing = ctrl.allowed_wing
    with st.container(border=True):
        c1, c2 = st.columns([4, 2])
        with c1:
            parts = [f"👤 {info.name}", f"🎓 {info.class_name}"]
            if info.session_name:
                parts.append(f"📅 {info.session_name}")
            if ctrl.booked_seat_label:
                parts.append(f"🪑 **Seat: {ctrl.booked_seat_label}**")
            st.markdown("  ·  ".join(parts))
        with c2:
            icon = "👧" if info.gender == "Female" else "👦"
            st.markdown(f"{icon} {info.gender} • {wing} Wing")


def _book(cache: QueryCache, ctrl: SeatSelectionController, seat_id: str) -> None:
    with st.spinner("Booking..."):
        result = book(cache, ctrl, seat_id)
    st.session_state.pop(KEY_SELECTED_SEAT, None)
    if not result.ok:
        st.toast(result.message, icon="❌")
        return
    st.toast(result.message, icon="✅")
    st.rerun()


def _release(cache: QueryCache, ctrl: SeatSelectionController, seat_id: str) -> None:
    with st.spinner("Releasing..."):
        result = release(cache, ctrl, seat_id)
    if not result.ok:
        st.toast(result.message, icon="❌")
        return
    st.session_state.pop(KEY_SELECTED_SEAT, None)
    st.toast(result.message, icon="✅")
    st.rerun()


def render_my_seat(cache: QueryCache, store: LocalStore) -> None:
    st.header("🪑 Select Your Seat")
    st.caption("Choose your permanent classroom seat")

    ctrl = SeatSelectionController(store)
    info = ctrl.load()
    _render_student_card(ctrl)

    if not info.session_id:
        st.info("Session information not available. Please contact administration.")
        return

    class_id = info.grid_class_id
    if st.button("🔄 Refresh seats", key="refresh_seats"):
        cache.invalidate(QK_SEATS)

    try:
        seat_map = cache.fetch(QK_SEATS + (class_id, info.session_id), lambda: get_seats(class_id, info.session_id))
    except ApiError as e:
        st.error(e.message or "Failed to load seats")
        return

    booked = seat_map.booked_by(info.id)
    stats = grid_stats(seat_map)
    c1, c2, c3 = st.columns(3)
    c1.metric("Available", stats["available"])
    c2.metric("Taken", stats["taken"])
    c3.metric("Changes left", remaining_changes(seat_map.seat_change_count))

    st.caption("🟩 available · 🟦 yours · 🟥 taken · ⬛ reserved · ⬜ other wing")
    for row_no, seats in seat_map.rows().items():
        cols = st.columns(len(seats))
        for col, seat in zip(cols, seats):
            glyph = seat_glyph(seat, info.id, seat_map.allowed_side)
            if col.button(f"{glyph} {seat.display_label}", key=f"seat_{seat.id}", use_container_width=True):
                res = check_seat_click(seat, booked, seat_map.allowed_side)
                if res.ok:
                    st.session_state[KEY_SELECTED_SEAT] = seat.id
                else:
                    st.toast(res.message, icon=_LEVEL_ICONS.get(res.level))

    selected_id = st.session_state.get(KEY_SELECTED_SEAT)
    selected = next((s for s in seat_map.seats if s.id == selected_id), None)
    if selected is not None and booked is None:
        with st.container(border=True):
            st.write(f"Book seat **{selected.display_label}** ({selected.wing} wing)?")
            b1, b2, _ = st.columns([2, 2, 6])
            if b1.button("Confirm", type="primary", key="confirm_booking"):
                _book(cache, ctrl, selected.id)
            if b2.button("Cancel", key="cancel_booking"):
                st.session_state.pop(KEY_SELECTED_SEAT, None)
                st.rerun()

    if booked is not None:
        allowed = can_release(seat_map.seat_change_count)
        left = remaining_changes(seat_map.seat_change_count)
        st.write(f"Your seat: **{booked.display_label}**")
        if allowed:
            st.caption(f"{left} change{'' if left == 1 else 's'} remaining")
        else:
            st.caption("Change limit reached. Contact admin.")
        if st.button("Release seat", disabled=not allowed, key="release_seat"):
            _release(cache, ctrl, booked.id)


# -----------------------------
# Admin: seat layouts per class/session
# -----------------------------
def _seats_df(seats: list) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "label": s.display_label,
                "wing": s.wing,
                "row": s.row,
                "column": s.column,
                "taken": s.is_taken,
                "student": s.student_name or "",
                "reserved": s.is_reserved,
                "reason": s.reserved_reason or "",
            }
            for s in seats
        ]
    )


def render_seat_admin(cache: QueryCache) -> None:
    st.header("Seat Management")
    try:
        classes = cache.fetch(QK_CLASSES, list_classes)
        sessions = cache.fetch(QK_ALL_SESSIONS, lambda: list_sessions("all"))
    except ApiError as e:
        st.error(e.message)
        return

    by_id = {c.id: c for c in classes}
    class_opts = {"": "Select class"}
    class_opts.update(class_options(classes))
    session_opts = {"": "Select session"}
    session_opts.update({s.id: s.name + (" (Active)" if s.status == "active" else "") for s in sessions})

    c1, c2 = st.columns(2)
    with c1:
        class_id = st.selectbox("Class", list(class_opts), format_func=class_opts.get, key=KEY_ADMIN_SEAT_CLASS)
    with c2:
        session_id = st.selectbox("Session", list(session_opts), format_func=session_opts.get, key="admin_seat_session")

    selected = by_id.get(class_id)
    mode = seat_admin_action(selected)
    if mode is None:
        st.info("Select a class to manage its seats.")
        return

    status = seat_layout_status(selected)
    st.markdown(f"Seat layout: :{'green' if mode == 'load' else 'orange'}[**{status}**]")

    if mode == "initialize":
        if st.button("Initialize seats", type="primary", key="admin_init_seats"):
            with st.spinner("Initializing..."):
                result = start_seat_layout(cache, class_id, session_id)
            if not result.ok:
                st.toast(result.message, icon="❌")
                return
            st.session_state[KEY_ADMIN_GRID] = (class_id, session_id)
            st.toast(result.message, icon="✅")
            st.rerun()
        return

    if st.button("Load grid", type="primary", key="admin_load_grid"):
        if not session_id:
            st.toast("Please select both a class and a session", icon="❌")
            return
        st.session_state[KEY_ADMIN_GRID] = (class_id, session_id)

    if st.session_state.get(KEY_ADMIN_GRID) != (class_id, session_id):
        return
    _render_admin_grid(cache, class_id, session_id)


def _render_admin_grid(cache: QueryCache, class_id: str, session_id: str) -> None:
    try:
        data = cache.fetch(
            QK_ADMIN_SEATS + (class_id, session_id),
            lambda: get_admin_seats(class_id, session_id),
        )
    except ApiError as e:
        st.error(e.message or "Failed to load seats")
        return

    stats = data["stats"]
    m = st.columns(4)
    m[0].metric("Total", stats.get("total", 0))
    m[1].metric("Occupied", stats.get("occupied", 0))
    m[2].metric("Reserved", stats.get("reserved", 0))
    m[3].metric("Available", stats.get("available", 0))

    seats = data["seats"]
    if not seats:
        st.info("No seats yet for this session. Initialize seats for this class and session.")
        if st.button("Initialize seats", key="admin_init_session_seats"):
            result = start_seat_layout(cache, class_id, session_id)
            st.toast(result.message, icon="✅" if result.ok else "❌")
            if result.ok:
                st.rerun()
        return
    st.dataframe(_seats_df(seats), use_container_width=True, hide_index=True)

    by_id = {s.id: s for s in seats}
    seat_id = st.selectbox("Seat", list(by_id), format_func=lambda i: by_id[i].display_label, key="admin_seat_pick")
    seat = by_id[seat_id]
    reason = st.text_input("Reason", key=f"admin_reason_{seat_id}")

    a1, a2, _ = st.columns([2, 2, 6])
    result = None
    if a1.button("Vacate", disabled=not seat.is_taken, key=f"vacate_{seat_id}"):
        result = vacate(cache, seat_id, reason)
    toggle_label = "Remove reservation" if seat.is_reserved else "Reserve"
    if a2.button(toggle_label, disabled=seat.is_taken, key=f"reserve_{seat_id}"):
        result = set_reservation(cache, seat_id, not seat.is_reserved, reason)
    if result is None:
        return
    if not result.ok:
        st.toast(result.message, icon="❌")
        return
    st.toast(result.message, icon="✅")
    st.rerun()
