import streamlit as st

from academy.config import CURRENCY
from academy.repositories.payroll_repo import load_dashboard, load_payroll_df
from academy.services.api_client import ApiError
from academy.services.receipts import render_voucher_text, voucher_filename
from academy.ui.actions import add_credit, pay_out
from academy.ui.dialogs import CreditForm, PayoutForm
from academy.ui.state import (
    KEY_CREDIT_AMOUNT,
    KEY_CREDIT_NOTE,
    KEY_LAST_VOUCHER,
    KEY_PAYOUT_AMOUNT,
    KEY_PAYOUT_NOTES,
    QK_PAYROLL,
    QueryCache,
    clear_pending,
    is_pending,
    mark_pending,
)
from academy.utils.amount_parser import format_money


def _render_voucher() -> None:
    voucher = st.session_state.get(KEY_LAST_VOUCHER)
    if voucher is None:
        return
    with st.container(border=True):
        st.write(f"Voucher **{voucher.voucher_id}**: {format_money(voucher.amount_paid, CURRENCY)} to {voucher.teacher_name}")
        st.download_button(
            "Download voucher",
            data=render_voucher_text(voucher),
            file_name=voucher_filename(voucher),
            mime="text/plain",
            key="download_voucher",
        )


def _render_pay(cache: QueryCache, teacher) -> None:
    st.markdown(f"**Pay {teacher.name}**: payable {format_money(teacher.net_payable, CURRENCY)}")
    action = f"pay_{teacher.id}"
    form = PayoutForm(
        amount=st.text_input(f"Amount ({CURRENCY}) *", key=f"{KEY_PAYOUT_AMOUNT}_{teacher.id}"),
        notes=st.text_area("Notes (Optional)", placeholder="Cash payment, bank transfer, etc.", key=f"{KEY_PAYOUT_NOTES}_{teacher.id}"),
        pending=is_pending(action),
    )
    error = form.validation_error(teacher.net_payable)
    if form.amount and error:
        st.caption(f":red[{error}]")

    st.button(
        "Processing..." if form.pending else "Pay Now",
        type="primary",
        disabled=not form.can_submit(teacher.net_payable),
        on_click=mark_pending,
        args=(action,),
        key=f"pay_{teacher.id}",
    )
    if not form.pending:
        return
    try:
        with st.spinner("Processing..."):
            result = pay_out(cache, teacher, form)
    finally:
        clear_pending(action)
    if not result.ok:
        st.toast(result.message, icon="❌")
        return
    st.session_state[KEY_LAST_VOUCHER] = result.data
    st.toast(result.message, icon="✅")
    for k in (f"{KEY_PAYOUT_AMOUNT}_{teacher.id}", f"{KEY_PAYOUT_NOTES}_{teacher.id}"):
        st.session_state.pop(k, None)
    st.rerun()


def _render_credit(cache: QueryCache, teacher) -> None:
    st.markdown(f"**Add manual credit for {teacher.name}**")
    st.caption(
        "This records a liability (debt owed), not a cash payout. "
        "Use Pay to record actual cash payouts."
    )
    action = f"credit_{teacher.id}"
    form = CreditForm(
        amount=st.text_input(f"Amount ({CURRENCY}) *", placeholder="e.g. 14000", key=f"{KEY_CREDIT_AMOUNT}_{teacher.id}"),
        description=st.text_area(
            "Note / Description *",
            placeholder="e.g. Jan Session Share",
            key=f"{KEY_CREDIT_NOTE}_{teacher.id}",
        ),
        pending=is_pending(action),
    )
    st.button(
        "Crediting..." if form.pending else "Add Credit",
        disabled=not form.can_submit(),
        on_click=mark_pending,
        args=(action,),
        key=f"credit_{teacher.id}",
    )
    if not form.pending:
        return
    try:
        with st.spinner("Crediting..."):
            result = add_credit(cache, teacher, form)
    finally:
        clear_pending(action)
    if not result.ok:
        st.toast(result.message, icon="❌")
        return
    st.toast(result.message, icon="✅")
    for k in (f"{KEY_CREDIT_AMOUNT}_{teacher.id}", f"{KEY_CREDIT_NOTE}_{teacher.id}"):
        st.session_state.pop(k, None)
    st.rerun()


def render_payroll(cache: QueryCache) -> None:
    st.header("Payroll Management")
    try:
        dashboard = cache.fetch(QK_PAYROLL, load_dashboard)
    except ApiError as e:
        st.error(e.message)
        return

    if dashboard.active_session_name:
        st.caption(f"Active session: {dashboard.active_session_name}")
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Liability", format_money(dashboard.total_teacher_liability, CURRENCY))
    c2.metric("Paid This Session", format_money(dashboard.total_paid_session, CURRENCY))
    c3.metric("Teachers With Payable", dashboard.teachers_with_payable)

    _render_voucher()

    search = st.text_input("Search by name or subject...", key="payroll_search")
    teachers = [t for t in dashboard.teachers if t.matches(search)]
    if not teachers:
        st.info("No teachers found matching filters")
        return

    st.dataframe(
        load_payroll_df(teachers),
        use_container_width=True,
        hide_index=True,
        column_config={
            "total_earned": st.column_config.NumberColumn("Earned", format="%d"),
            "total_withdrawn": st.column_config.NumberColumn("Withdrawn", format="%d"),
            "net_payable": st.column_config.NumberColumn("Payable", format="%d"),
        },
    )

    by_id = {t.id: t for t in teachers}
    tid = st.selectbox("Teacher", list(by_id), format_func=lambda i: by_id[i].name, key="payroll_teacher")
    teacher = by_id[tid]

    tab_pay, tab_credit = st.tabs(["Pay", "Credit"])
    with tab_pay:
        if teacher.net_payable <= 0:
            st.info("Nothing payable for this teacher.")
        else:
            _render_pay(cache, teacher)
    with tab_credit:
        _render_credit(cache, teacher)
