import streamlit as st

from academy.config import CURRENCY
from academy.repositories.classes_repo import class_options, list_classes, load_classes_df
from academy.repositories.students_repo import filter_students, list_students, load_students_df
from academy.services.api_client import ApiError
from academy.ui.actions import take_fee
from academy.ui.dialogs import FeeCollectionForm, month_options
from academy.ui.seat_selection import seat_layout_status
from academy.ui.state import (
    KEY_ADMIN_SEAT_CLASS,
    KEY_FEE_AMOUNT,
    KEY_FEE_MONTH,
    KEY_FEE_RESULT,
    QK_CLASSES,
    QK_STUDENTS,
    QueryCache,
    clear_pending,
    is_pending,
    mark_pending,
)
from academy.utils.amount_parser import format_money


def _open_seat_grid(class_id: str) -> None:
    st.session_state[KEY_ADMIN_SEAT_CLASS] = class_id


def render_classes(cache: QueryCache) -> None:
    st.header("Classes")
    try:
        classes = cache.fetch(QK_CLASSES, list_classes)
    except ApiError as e:
        st.error(f"Failed to load classes: {e.message}")
        return

    if not classes:
        st.info("No classes yet.")
        return

    st.dataframe(load_classes_df(classes), use_container_width=True, hide_index=True)

    configured = [c for c in classes if c.has_seat_config]
    st.caption(f"{len(configured)} of {len(classes)} classes have a seat layout.")

    by_id = {c.id: c for c in classes}
    options = class_options(classes)
    c1, c2 = st.columns([4, 2])
    with c1:
        cid = st.selectbox("Class", list(by_id), format_func=options.get, key="classes_pick")
    selected = by_id[cid]
    with c2:
        st.write(f"Seats: **{seat_layout_status(selected)}**")
        st.button(
            "Open seat grid",
            disabled=not selected.has_seat_config,
            on_click=_open_seat_grid,
            args=(cid,),
            key="open_seat_grid",
            help="Initialize seats under Seat Management first" if not selected.has_seat_config else None,
        )


# -----------------------------
# Students and fee collection
# -----------------------------
def _render_fee_result() -> None:
    done = st.session_state[KEY_FEE_RESULT]
    with st.container(border=True):
        st.success(f"Fee Collected! {done['student']}")
        c1, c2 = st.columns(2)
        c1.metric("Amount Collected", format_money(done["record"].get("amount"), CURRENCY))
        c2.metric("Collection Month", done["record"].get("month") or "N/A")
        if st.button("Done", key="fee_done"):
            st.session_state.pop(KEY_FEE_RESULT, None)
            st.rerun()


def _render_collect_fee(cache: QueryCache, student) -> None:
    st.markdown(f"**Collect fee from {student.name}** ({student.student_id or 'N/A'})")
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Fee", format_money(student.total_fee, CURRENCY))
    c2.metric("Paid Amount", format_money(student.paid_amount, CURRENCY))
    c3.metric("Remaining Balance", format_money(student.balance, CURRENCY))

    action = f"fee_{student.id}"
    c1, c2 = st.columns(2)
    with c1:
        amount = st.text_input(f"Amount ({CURRENCY}) *", key=f"{KEY_FEE_AMOUNT}_{student.id}")
    with c2:
        month = st.selectbox(
            "Month *",
            month_options(),
            index=None,
            placeholder="Select month",
            key=f"{KEY_FEE_MONTH}_{student.id}",
        )
    form = FeeCollectionForm(amount=amount, month=month or "", pending=is_pending(action))
    error = form.validation_error(student.fee_ceiling)
    if form.amount and error:
        st.caption(f":red[{error}]")

    st.button(
        "Processing..." if form.pending else "Collect Fee",
        type="primary",
        disabled=not form.can_submit(student.fee_ceiling),
        on_click=mark_pending,
        args=(action,),
        key=f"collect_{student.id}",
    )
    if not form.pending:
        return
    try:
        with st.spinner("Processing..."):
            result = take_fee(cache, student, form)
    finally:
        clear_pending(action)
    if not result.ok:
        st.toast(result.message, icon="❌")
        return
    st.session_state[KEY_FEE_RESULT] = {"student": student.name, "record": result.data}
    st.session_state.pop(f"{KEY_FEE_AMOUNT}_{student.id}", None)
    st.session_state.pop(f"{KEY_FEE_MONTH}_{student.id}", None)
    st.rerun()


def render_students(cache: QueryCache) -> None:
    st.header("Students")
    try:
        students = cache.fetch(QK_STUDENTS, list_students)
        classes = cache.fetch(QK_CLASSES, list_classes)
    except ApiError as e:
        st.error(f"Failed to load students: {e.message}")
        return

    options = {"": "All classes"}
    options.update(class_options(classes))

    c1, c2 = st.columns([3, 2])
    with c1:
        search = st.text_input("Search", placeholder="Name, student ID or father name", key="students_search")
    with c2:
        class_id = st.selectbox("Class", list(options), format_func=options.get, key="students_class")

    shown = filter_students(students, search, class_id or None)
    st.caption(f"Showing {len(shown)} of {len(students)} students")
    st.dataframe(
        load_students_df(shown),
        use_container_width=True,
        hide_index=True,
        column_config={
            "total_fee": st.column_config.NumberColumn("Total fee", format="%d"),
            "paid": st.column_config.NumberColumn("Paid", format="%d"),
            "balance": st.column_config.NumberColumn("Balance", format="%d"),
        },
    )

    if st.session_state.get(KEY_FEE_RESULT):
        _render_fee_result()
        return
    if not shown:
        return

    by_id = {s.id: s for s in shown}
    sid = st.selectbox(
        "Student",
        list(by_id),
        format_func=lambda i: f"{by_id[i].name} ({by_id[i].student_id or 'N/A'})",
        key="fee_student",
    )
    with st.container(border=True):
        _render_collect_fee(cache, by_id[sid])
