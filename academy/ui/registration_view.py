import streamlit as st

from academy.config import GENDERS, GROUPS, REFERRAL_SOURCES
from academy.repositories.classes_repo import active_classes, class_options, list_classes
from academy.repositories.sessions_repo import list_sessions
from academy.services.api_client import ApiError
from academy.ui.actions import register
from academy.ui.registration import KioskForm, PublicForm
from academy.ui.state import (
    KEY_KIOSK_FORM,
    KEY_PUBLIC_FORM,
    QK_ALL_SESSIONS,
    QK_CLASSES,
    QueryCache,
    apply_reset_if_marked,
    field_key,
    mark_reset,
    registration_result_key,
)

_KIOSK_DEFAULTS = {
    "student_name": "",
    "father_name": "",
    "parent_cell": "",
    "student_cell": "",
    "gender": "Male",
    "session_id": "",
    "address": "",
    "referral_source": "",
    "class_id": "",
    "group": "",
}

_PUBLIC_DEFAULTS = {
    "student_name": "",
    "father_name": "",
    "parent_cell": "",
    "student_cell": "",
    "email": "",
    "address": "",
    "class_id": "",
}


def _select(label: str, options: dict, form: str, name: str):
    return st.selectbox(label, list(options), format_func=options.get, key=field_key(form, name))


def _render_success(form_key: str) -> None:
    result = st.session_state[registration_result_key(form_key)]
    st.success(f"Application Submitted! Thank you, **{result['submitted_name']}**")
    if result.get("application_id"):
        st.write(f"Application ID: `{result['application_id']}`")
    st.write("Please visit the administration counter for verification and fee payment.")
    if st.button("Register Another Student", key=f"register_another_{form_key}"):
        st.session_state.pop(registration_result_key(form_key), None)
        mark_reset(form_key)
        st.rerun()


def _handle_submit(cache: QueryCache, form_key: str, form) -> None:
    with st.spinner("Submitting..."):
        result = register(cache, form)
    if not result.ok:
        st.error(result.error)
        return
    st.session_state[registration_result_key(form_key)] = result.to_dict()
    st.rerun()


def kiosk_options(cache: QueryCache) -> tuple:
    """Classes and sessions offered at the kiosk, read through the shared keys."""
    classes = cache.fetch(QK_CLASSES, list_classes)
    sessions = cache.fetch(QK_ALL_SESSIONS, lambda: list_sessions("all"))
    return classes, sessions


def public_classes(cache: QueryCache) -> list:
    return active_classes(cache.fetch(QK_CLASSES, list_classes))


def _render_kiosk(cache: QueryCache) -> None:
    apply_reset_if_marked(KEY_KIOSK_FORM, _KIOSK_DEFAULTS)
    try:
        classes, sessions = kiosk_options(cache)
    except ApiError as e:
        st.error(e.message)
        return

    f = KEY_KIOSK_FORM
    class_opts = {"": "Select class"}
    class_opts.update(class_options(classes))
    session_opts = {"": "Select session"}
    session_opts.update({s.id: s.name for s in sessions})
    group_opts = {"": "Select group"}
    group_opts.update({g: g for g in GROUPS})

    c1, c2 = st.columns(2)
    with c1:
        student_name = st.text_input("Student Name *", key=field_key(f, "student_name"))
        parent_cell = st.text_input("Parent Cell *", key=field_key(f, "parent_cell"))
        gender = st.radio("Gender", GENDERS, horizontal=True, key=field_key(f, "gender"))
        class_id = _select("Class *", class_opts, f, "class_id")
    with c2:
        father_name = st.text_input("Father Name *", key=field_key(f, "father_name"))
        student_cell = st.text_input("Student Cell", key=field_key(f, "student_cell"))
        session_id = _select("Session *", session_opts, f, "session_id")
        group = _select("Group *", group_opts, f, "group")
    address = st.text_input("Address", key=field_key(f, "address"))
    referral = st.selectbox("How did you hear about us?", REFERRAL_SOURCES, key=field_key(f, "referral_source"))

    if st.button("Submit Registration", type="primary", key="kiosk_submit"):
        form = KioskForm(
            student_name=student_name,
            father_name=father_name,
            parent_cell=parent_cell,
            student_cell=student_cell,
            gender=gender,
            session_id=session_id,
            address=address,
            referral_source=referral,
            class_id=class_id,
            group=group,
        )
        _handle_submit(cache, KEY_KIOSK_FORM, form)


def _render_public(cache: QueryCache) -> None:
    apply_reset_if_marked(KEY_PUBLIC_FORM, _PUBLIC_DEFAULTS)
    try:
        classes = public_classes(cache)
    except ApiError as e:
        st.error(e.message)
        return

    f = KEY_PUBLIC_FORM
    class_opts = {"": "Select class"}
    class_opts.update(class_options(classes))

    student_name = st.text_input("Student Name *", key=field_key(f, "student_name"))
    father_name = st.text_input("Father Name *", key=field_key(f, "father_name"))
    c1, c2 = st.columns(2)
    with c1:
        parent_cell = st.text_input("Parent Cell *", key=field_key(f, "parent_cell"))
        email = st.text_input("Email", key=field_key(f, "email"))
    with c2:
        student_cell = st.text_input("Student Cell", key=field_key(f, "student_cell"))
        class_id = _select("Class *", class_opts, f, "class_id")
    address = st.text_input("Address", key=field_key(f, "address"))

    if st.button("Submit Application", type="primary", key="public_submit"):
        form = PublicForm(
            student_name=student_name,
            father_name=father_name,
            parent_cell=parent_cell,
            student_cell=student_cell,
            email=email,
            address=address,
            class_id=class_id,
        )
        _handle_submit(cache, KEY_PUBLIC_FORM, form)


def render_registration(cache: QueryCache) -> None:
    st.header("Student Registration")
    mode = st.radio("Form", ["Kiosk", "Online"], horizontal=True, key="registration_mode")
    form_key = KEY_KIOSK_FORM if mode == "Kiosk" else KEY_PUBLIC_FORM

    if st.session_state.get(registration_result_key(form_key)):
        _render_success(form_key)
        return

    if mode == "Kiosk":
        _render_kiosk(cache)
    else:
        _render_public(cache)
